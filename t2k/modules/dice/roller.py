"""Year Zero dice roller for Twilight 2000.

A roll is an immutable value: modifying, evaluating or pushing returns a new
``YearZeroRoll`` and leaves the receiver untouched.
"""

from __future__ import annotations

import random
from collections import Counter

from pydantic import BaseModel, ConfigDict, computed_field

from t2k.modules.dice.pool import AMMO, DIE_FACES, LOCATION, DicePool

BASE = "base"

_STEPS = (6, 8, 10, 12)
_CODE_BY_FACES = {faces: code for code, faces in DIE_FACES.items()}
_FORMULA_TERMS = {AMMO: "dm", LOCATION: "dl"}
_FORMULA_ORDER = ("a", "b", "c", "d", AMMO, LOCATION)

MAX_QUANTITY = 100  # dice per pool slot

HIT_LOCATIONS = {1: "legs", 2: "torso", 3: "torso", 4: "torso", 5: "arms", 6: "head"}


class Die(BaseModel):
    """One die of a roll; ``results`` keeps every face rolled, pushes included."""

    model_config = ConfigDict(frozen=True)

    kind: str  # "base" | "ammo" | "loc"
    faces: int
    results: tuple[int, ...] = ()

    @property
    def code(self) -> str:
        if self.kind == BASE:
            return _CODE_BY_FACES[self.faces]
        return self.kind

    @property
    def value(self) -> int | None:
        return self.results[-1] if self.results else None

    @property
    def locked(self) -> bool:
        """A locked die keeps its face when the roll is pushed."""
        value = self.value
        if value is None:
            return False
        if self.kind == LOCATION:
            return True
        if self.kind == AMMO:
            return value in (1, 6)
        return value == 1 or value >= 6

    @property
    def successes(self) -> int:
        value = self.value
        if value is None or self.kind == LOCATION:
            return 0
        if self.kind == AMMO:
            return 1 if value == 6 else 0
        if value >= 10:
            return 2
        return 1 if value >= 6 else 0

    def rolled(self, rng: random.Random) -> Die:
        return self.model_copy(update={"results": self.results + (rng.randint(1, self.faces),)})


class YearZeroRoll(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    dice: tuple[Die, ...] = ()
    max_push: int = 1
    push_count: int = 0
    evaluated: bool = False

    @classmethod
    def create_from_dice_pool(
        cls, pool: DicePool, max_push: int = 1, name: str = ""
    ) -> YearZeroRoll:
        """Build an unevaluated roll from a dice pool.

        Raises:
            ValueError: On an unknown die code, or a quantity that is negative
                or above MAX_QUANTITY.
        """
        dice: list[Die] = []
        for code, quantity in pool.items():
            if quantity < 0:
                raise ValueError(f"Negative quantity for '{code}': {quantity}")
            if quantity > MAX_QUANTITY:
                raise ValueError(f"Too many dice for '{code}': {quantity}")
            if code in (AMMO, LOCATION):
                dice.extend(Die(kind=code, faces=6) for _ in range(quantity))
            elif code in DIE_FACES:
                dice.extend(Die(kind=BASE, faces=DIE_FACES[code]) for _ in range(quantity))
            else:
                raise ValueError(f"Unknown die code: '{code}'")
        return cls(name=name, dice=_sorted(dice), max_push=max_push)

    # --- Derived values ---

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formula(self) -> str:
        counts = Counter(d.code for d in self.dice)
        terms = []
        for code in _FORMULA_ORDER:
            if counts[code]:
                term = _FORMULA_TERMS.get(code, f"d{DIE_FACES.get(code, 6)}")
                terms.append(f"{counts[code]}{term}")
        return " + ".join(terms) if terms else "0d6"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def successes(self) -> int:
        return sum(d.successes for d in self.dice)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def banes(self) -> int:
        return sum(1 for d in self.dice if d.kind == BASE and d.value == 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ammo_banes(self) -> int:
        return sum(1 for d in self.dice if d.kind == AMMO and d.value == 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hit_location(self) -> str | None:
        for d in self.dice:
            if d.kind == LOCATION and d.value is not None:
                return HIT_LOCATIONS[d.value]
        return None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pushable(self) -> bool:
        return (
            self.evaluated
            and self.push_count < self.max_push
            and any(not d.locked for d in self.dice)
        )

    @property
    def success(self) -> bool:
        return self.successes > 0

    @property
    def pushed(self) -> bool:
        return self.push_count > 0

    # --- Operations ---

    def modify(self, mod: int) -> YearZeroRoll:
        """Step base dice up (mod > 0) or down (mod < 0), one step per point.

        Raising upgrades the smallest die below D12, or adds a D6 when fewer
        than two base dice exist. Lowering downgrades the smallest die and
        drops a D6 altogether.
        """
        if mod == 0:
            return self
        if self.evaluated:
            raise ValueError("Cannot modify an evaluated roll")

        base = [d.faces for d in self.dice if d.kind == BASE]
        while mod != 0:
            if mod > 0:
                upgradable = [f for f in base if f < _STEPS[-1]]
                if upgradable:
                    i = base.index(min(upgradable))
                    base[i] = _STEPS[_STEPS.index(base[i]) + 1]
                elif len(base) < 2:
                    base.append(_STEPS[0])
                else:
                    break
                mod -= 1
            else:
                if not base:
                    break
                i = base.index(min(base))
                step = _STEPS.index(base[i])
                if step == 0:
                    base.pop(i)
                else:
                    base[i] = _STEPS[step - 1]
                mod += 1

        others = [d for d in self.dice if d.kind != BASE]
        dice = [Die(kind=BASE, faces=f) for f in base] + others
        return self.model_copy(update={"dice": _sorted(dice)})

    def evaluate(self, rng: random.Random | None = None) -> YearZeroRoll:
        if self.evaluated:
            raise ValueError("Roll has already been evaluated")
        rng = rng or random.Random()
        dice = tuple(d.rolled(rng) for d in self.dice)
        return self.model_copy(update={"dice": dice, "evaluated": True})

    def push(self, rng: random.Random | None = None) -> YearZeroRoll:
        """Re-roll every unlocked die once.

        Raises:
            ValueError: If the roll is not pushable.
        """
        if not self.pushable:
            raise ValueError("Roll is not pushable")
        rng = rng or random.Random()
        dice = tuple(d if d.locked else d.rolled(rng) for d in self.dice)
        return self.model_copy(update={"dice": dice, "push_count": self.push_count + 1})

    def duplicate(self) -> YearZeroRoll:
        return self.model_copy(deep=True)


def _sorted(dice: list[Die]) -> tuple[Die, ...]:
    return tuple(sorted(dice, key=lambda d: _FORMULA_ORDER.index(d.code)))
