"""Collaborator interfaces the check rules talk to."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol

from t2k.models.check import (
    CufDialogResult,
    DialogResult,
    RollMode,
    TaskParameters,
)
from t2k.modules.dice.roller import YearZeroRoll


class OptionsDialog(Protocol):
    async def ask_roll_options(self, params: TaskParameters, formula: str) -> DialogResult: ...

    async def ask_cuf_options(
        self,
        title: str,
        unit_morale: bool,
        modifier: int,
        max_push: int,
        roll_mode: RollMode,
    ) -> CufDialogResult: ...


class MessageHandle(Protocol):
    id: str

    async def delete(self) -> None: ...


class PublicationSink(Protocol):
    async def publish(self, roll: YearZeroRoll, roll_mode: RollMode) -> MessageHandle: ...


class RatingSource(Protocol):
    def get_rating(self, key: str) -> int: ...


@dataclass
class CheckContext:
    """Everything a check needs from outside: collaborators and the table's preferences."""

    dialog: OptionsDialog
    sink: PublicationSink
    show_task_check_options: bool = False
    default_roll_mode: RollMode = RollMode.PUBLIC
    rng: random.Random | None = field(default=None, repr=False)
