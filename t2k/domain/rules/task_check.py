"""Task checks: attribute + skill dice pool, options, modifier, roll, publish."""

from __future__ import annotations

import logging

from t2k.domain import actor as actor_mod
from t2k.domain.ports import CheckContext, RatingSource
from t2k.domain.rules.options import resolve_options
from t2k.models.check import RollMode, TaskParameters
from t2k.models.constants import MAX_PUSH_MAX, MAX_PUSH_MIN, RATING_MAX, RATING_MIN
from t2k.modules.dice.pool import build_pool, clamp
from t2k.modules.dice.roller import YearZeroRoll

logger = logging.getLogger("t2k-core.task_check")

CUF_TITLE = "Coolness Under Fire"


async def resolve_task_check(
    ctx: CheckContext, params: TaskParameters
) -> YearZeroRoll | None:
    """Roll a task check.

    Flow:
    1. Clamp ratings, fill the roll mode from the table default
    2. Build a provisional roll from attribute + skill
    3. Resolve options (may ask the dialog); cancelled → None
    4. Rebuild the roll if ammo, location or push limit call for it
    5. Apply the modifier once
    6. Evaluate
    7. Publish if requested

    Returns:
        The evaluated roll, or None if the options dialog was cancelled.
    """
    params = params.model_copy(
        update={
            "attribute": clamp(params.attribute, RATING_MIN, RATING_MAX),
            "skill": clamp(params.skill, RATING_MIN, RATING_MAX),
            "max_push": clamp(params.max_push, MAX_PUSH_MIN, MAX_PUSH_MAX),
            "roll_mode": params.roll_mode or ctx.default_roll_mode,
        }
    )

    roll = YearZeroRoll.create_from_dice_pool(
        build_pool(params.attribute, params.skill),
        max_push=params.max_push,
        name=params.title,
    )

    resolved = await resolve_options(ctx, params, roll.formula)
    if resolved is None:
        return None
    params = resolved

    # Die sizes are fixed once a roll exists, so extra dice mean a new roll.
    if (
        params.rof > 0
        or params.locate
        or params.max_push != 1
        or params.max_push != roll.max_push
    ):
        roll = YearZeroRoll.create_from_dice_pool(
            build_pool(params.attribute, params.skill, params.rof, params.locate),
            max_push=params.max_push,
            name=params.title,
        )

    if params.modifier != 0:
        roll = roll.modify(params.modifier)

    roll = roll.evaluate(ctx.rng)
    logger.info(
        "ROLL %s [%s] successes=%d banes=%d", roll.name, roll.formula, roll.successes, roll.banes
    )

    if params.send_message:
        await ctx.sink.publish(roll, params.roll_mode)
    return roll


async def resolve_skill_check(
    ctx: CheckContext,
    actor: RatingSource,
    skill_name: str,
    title: str | None = None,
    rof: int = 0,
    modifier: int = 0,
    locate: bool = False,
    max_push: int = 1,
    roll_mode: RollMode | None = None,
    ask_for_options: bool = False,
    skip_dialog: bool = False,
    send_message: bool = True,
) -> YearZeroRoll | None:
    """Task check for one of the actor's skills.

    The roll is titled after the skill unless ``title`` is given.

    Raises:
        ValueError: If the skill is unknown.
    """
    skill_title, attribute, skill = actor_mod.get_attribute_and_skill(skill_name, actor)
    params = TaskParameters(
        title=title or skill_title,
        attribute=attribute,
        skill=skill,
        rof=rof,
        modifier=modifier,
        locate=locate,
        max_push=max_push,
        roll_mode=roll_mode,
        ask_for_options=ask_for_options,
        skip_dialog=skip_dialog,
        send_message=send_message,
    )
    return await resolve_task_check(ctx, params)


async def resolve_cuf_check(
    ctx: CheckContext,
    actor: RatingSource | None,
    title: str = CUF_TITLE,
    unit_morale: bool = False,
    modifier: int = 0,
    max_push: int = 1,
    roll_mode: RollMode | None = None,
    send_message: bool = True,
) -> YearZeroRoll | None:
    """Coolness Under Fire: CuF as attribute, unit morale as skill when chosen.

    Returns None without asking anything when no actor is given, and None when
    the CuF dialog is cancelled.
    """
    if actor is None:
        return None
    roll_mode = roll_mode or ctx.default_roll_mode

    answer = await ctx.dialog.ask_cuf_options(title, unit_morale, modifier, max_push, roll_mode)
    if answer.cancelled:
        return None
    if answer.options is not None:
        unit_morale = answer.options.unit_morale
        roll_mode = answer.options.roll_mode

    cuf = actor.get_rating("cuf")
    morale = actor.get_rating("unit_morale")

    return await resolve_task_check(
        ctx,
        TaskParameters(
            title=title,
            attribute=cuf,
            skill=morale if unit_morale else 0,
            modifier=modifier,
            max_push=max_push,
            roll_mode=roll_mode,
            skip_dialog=True,
            send_message=send_message,
        ),
    )
