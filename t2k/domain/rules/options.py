"""Roll options: decide whether to ask, merge the answer, clamp the result."""

from __future__ import annotations

import logging

from t2k.domain.ports import CheckContext
from t2k.models.check import RollOverrides, TaskParameters
from t2k.models.constants import MAX_PUSH_MAX, MAX_PUSH_MIN, MODIFIER_MAX, MODIFIER_MIN
from t2k.modules.dice.pool import clamp

logger = logging.getLogger("t2k-core.options")


def should_ask_for_options(
    ask_for_options: bool, skip_dialog: bool, show_options_default: bool
) -> bool:
    """The dialog shows when the caller's wish differs from the table default.

    ``ask_for_options`` toggles the default rather than forcing the dialog, so
    with the default on, ``ask_for_options=True`` hides it.
    """
    return not skip_dialog and ask_for_options != show_options_default


def apply_overrides(params: TaskParameters, overrides: RollOverrides) -> TaskParameters:
    """Replace every overridable field with the dialog's value."""
    return params.model_copy(
        update={
            "rof": overrides.rof,
            "modifier": overrides.modifier,
            "locate": overrides.locate,
            "max_push": overrides.max_push,
            "roll_mode": overrides.roll_mode,
        }
    )


def clamp_parameters(params: TaskParameters) -> TaskParameters:
    return params.model_copy(
        update={
            "modifier": clamp(params.modifier, MODIFIER_MIN, MODIFIER_MAX),
            "max_push": clamp(params.max_push, MAX_PUSH_MIN, MAX_PUSH_MAX),
        }
    )


async def resolve_options(
    ctx: CheckContext, params: TaskParameters, formula: str = ""
) -> TaskParameters | None:
    """Finalize task parameters, asking the dialog when required.

    Returns:
        The resolved parameters, or None if the dialog was cancelled.
    """
    if should_ask_for_options(
        params.ask_for_options, params.skip_dialog, ctx.show_task_check_options
    ):
        answer = await ctx.dialog.ask_roll_options(params, formula)
        if answer.cancelled:
            logger.info("Roll options cancelled for '%s'", params.title)
            return None
        if answer.options is not None:
            params = apply_overrides(params, answer.options)

    return clamp_parameters(params)
