"""Check schemas: task parameters, dialog overrides and dialog answers."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, StrictBool, StrictInt

from t2k.models.constants import ROF_MAX

# Rounds fired; one ammo die each, so the pool size is bounded here.
RateOfFire = Annotated[StrictInt, Field(le=ROF_MAX)]


class RollMode(str, Enum):
    PUBLIC = "publicroll"
    GM = "gmroll"
    BLIND = "blindroll"
    SELF = "selfroll"


class TaskParameters(BaseModel):
    """Inputs of one task check.

    Ratings must be real integers; out-of-range values are clamped later,
    wrong types are rejected here.
    """

    title: str = "Twilight 2000 4E – Task Check"
    attribute: StrictInt = 6
    skill: StrictInt = 0
    rof: RateOfFire = 0  # 0 or less means no ammo dice
    modifier: StrictInt = 0
    locate: StrictBool = False
    max_push: StrictInt = 1
    roll_mode: RollMode | None = None  # None means the configured default
    ask_for_options: StrictBool = False
    skip_dialog: StrictBool = False
    send_message: StrictBool = True


class RollOverrides(BaseModel):
    """Every field the roll options dialog may set."""

    rof: RateOfFire = 0
    modifier: StrictInt = 0
    locate: StrictBool = False
    max_push: StrictInt = 1
    roll_mode: RollMode = RollMode.PUBLIC

    @classmethod
    def from_parameters(cls, params: TaskParameters) -> RollOverrides:
        return cls(
            rof=params.rof,
            modifier=params.modifier,
            locate=params.locate,
            max_push=params.max_push,
            roll_mode=params.roll_mode or RollMode.PUBLIC,
        )


class DialogResult(BaseModel):
    cancelled: StrictBool = False
    options: RollOverrides | None = None


class CufOptions(BaseModel):
    unit_morale: StrictBool = False
    roll_mode: RollMode = RollMode.PUBLIC


class CufDialogResult(BaseModel):
    cancelled: StrictBool = False
    options: CufOptions | None = None
