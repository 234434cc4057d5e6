"""Dice pools: rating → die size, and (attribute, skill, ammo, location) → pool."""

from __future__ import annotations

from enum import Enum


class DieSize(str, Enum):
    NONE = "none"
    D = "d"
    C = "c"
    B = "b"
    A = "a"


AMMO = "ammo"
LOCATION = "loc"

# Index is the rating; ratings below 6 contribute no die.
_RATING_TABLE: tuple[DieSize, ...] = (
    (DieSize.NONE,) * 6
    + (DieSize.D,) * 2
    + (DieSize.C,) * 2
    + (DieSize.B,) * 2
    + (DieSize.A,)
)

DIE_FACES: dict[str, int] = {
    DieSize.D.value: 6,
    DieSize.C.value: 8,
    DieSize.B.value: 10,
    DieSize.A.value: 12,
}

_SCORE_FACES: dict[str, int] = {"A": 12, "B": 10, "C": 8, "D": 6, "F": 0}

# A pool maps a die-size code or a special slot to a quantity.
DicePool = dict[str, int]


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def map_rating_to_die_size(rating: int) -> DieSize:
    """Return the die size contributed by a rating in [0, 12].

    Raises:
        ValueError: If the rating is outside the table. Callers clamp first.
    """
    if not 0 <= rating < len(_RATING_TABLE):
        raise ValueError(f"Rating out of range: {rating}")
    return _RATING_TABLE[rating]


def build_pool(
    attribute: int,
    skill: int = 0,
    ammo: int = 0,
    locate: bool = False,
) -> DicePool:
    """Build the dice pool for a task.

    Attribute and skill of the same die size merge into two dice of that size.
    An attribute or skill below 6 contributes nothing, so a pool may be empty.

    Args:
        attribute: Clamped attribute rating.
        skill: Clamped skill rating.
        ammo: Rounds fired; one ammo die each.
        locate: Whether to add a hit location die.

    Returns:
        A mapping of die-size code / slot name to quantity.
    """
    attribute_size = map_rating_to_die_size(attribute)
    skill_size = map_rating_to_die_size(skill)
    dice: DicePool = {}

    if attribute_size == skill_size and attribute >= 6:
        dice[attribute_size.value] = 2
    else:
        if attribute >= 6:
            dice[attribute_size.value] = 1
        if skill >= 6:
            dice[skill_size.value] = 1

    if ammo > 0:
        dice[AMMO] = ammo
    if locate:
        dice[LOCATION] = 1
    return dice


def get_die_size(score: str) -> int:
    """Return the number of faces for a letter score (A, B, C, D or F).

    Letters are case-sensitive.

    Raises:
        TypeError: If the score is not a string.
        ValueError: If the score is not a single known letter.
    """
    if not isinstance(score, str):
        raise TypeError(f'Die score not a string: "{score}"')
    if len(score) != 1:
        raise ValueError(f'Die score incorrect: "{score}"')
    size = _SCORE_FACES.get(score)
    if size is None:
        raise ValueError(f'Die size not found for score: "{score}"')
    return size
