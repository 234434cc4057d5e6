"""Shared API helpers: build a check context for one request."""

from __future__ import annotations

from t2k.domain.dialog import PresetDialog
from t2k.domain.messages import MessageSink
from t2k.domain.ports import CheckContext
from t2k.infra.config import settings
from t2k.models.check import RollMode


def build_context(sink: MessageSink, dialog: PresetDialog | None = None) -> CheckContext:
    return CheckContext(
        dialog=dialog or PresetDialog(),
        sink=sink,
        show_task_check_options=settings.show_task_check_options,
        default_roll_mode=RollMode(settings.default_roll_mode),
    )
