"""Roll push: re-roll the unlocked dice of an evaluated roll."""

from __future__ import annotations

import logging

from t2k.domain.ports import CheckContext, MessageHandle
from t2k.models.check import RollMode
from t2k.modules.dice.roller import YearZeroRoll

logger = logging.getLogger("t2k-core.push")


async def push_roll(
    ctx: CheckContext,
    roll: YearZeroRoll,
    message: MessageHandle | None = None,
    roll_mode: RollMode | None = None,
) -> YearZeroRoll:
    """Push a copy of ``roll`` and publish it in place of ``message``.

    The original roll is never changed. A roll that cannot be pushed is still
    copied and republished.

    The old message is deleted before the new one is published; if publishing
    fails in between, the message is lost rather than shown twice.
    """
    pushed = roll.duplicate()

    if pushed.pushable:
        pushed = pushed.push(ctx.rng)
        logger.info(
            "PUSH %s [%s] push=%d/%d successes=%d",
            pushed.name, pushed.formula, pushed.push_count, pushed.max_push, pushed.successes,
        )
    else:
        logger.info("Roll '%s' is not pushable, republishing as is", pushed.name)

    if message is not None:
        await message.delete()
    await ctx.sink.publish(pushed, roll_mode or ctx.default_roll_mode)
    return pushed
