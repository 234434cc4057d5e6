"""Request-driven dialogs.

Over HTTP the "dialog" has already been filled in by the client: its answer
travels with the request. A missing answer means the player accepted the
values they were shown.
"""

from __future__ import annotations

from t2k.models.check import (
    CufDialogResult,
    CufOptions,
    DialogResult,
    RollMode,
    RollOverrides,
    TaskParameters,
)


class PresetDialog:
    def __init__(
        self,
        roll_answer: DialogResult | None = None,
        cuf_answer: CufDialogResult | None = None,
    ) -> None:
        self._roll_answer = roll_answer
        self._cuf_answer = cuf_answer
        self.asked: list[str] = []

    async def ask_roll_options(self, params: TaskParameters, formula: str) -> DialogResult:
        self.asked.append("roll")
        if self._roll_answer is not None:
            return self._roll_answer
        return DialogResult(options=RollOverrides.from_parameters(params))

    async def ask_cuf_options(
        self,
        title: str,
        unit_morale: bool,
        modifier: int,
        max_push: int,
        roll_mode: RollMode,
    ) -> CufDialogResult:
        self.asked.append("cuf")
        if self._cuf_answer is not None:
            return self._cuf_answer
        return CufDialogResult(options=CufOptions(unit_morale=unit_morale, roll_mode=roll_mode))
