"""Roll a task check from the command line and record it in the chat log.

Usage:
    python scripts/roll_task.py <attribute> [skill] [rof] [modifier]
"""

from __future__ import annotations

import asyncio
import sys

from t2k.domain.dialog import PresetDialog
from t2k.domain.messages import MessageSink
from t2k.domain.ports import CheckContext
from t2k.domain.rules.task_check import resolve_task_check
from t2k.infra.config import settings
from t2k.infra.db import async_session_factory, init_db
from t2k.models.check import RollMode, TaskParameters


async def roll(attribute: int, skill: int = 0, rof: int = 0, modifier: int = 0) -> None:
    await init_db()
    async with async_session_factory() as db:
        ctx = CheckContext(
            dialog=PresetDialog(),
            sink=MessageSink(db),
            default_roll_mode=RollMode(settings.default_roll_mode),
        )
        result = await resolve_task_check(
            ctx,
            TaskParameters(
                attribute=attribute, skill=skill, rof=rof, modifier=modifier, skip_dialog=True
            ),
        )
        await db.commit()

    faces = ", ".join(f"{d.code}:{d.value}" for d in result.dice)
    print(f"{result.formula} -> [{faces}]")
    print(f"Successes: {result.successes}  Banes: {result.banes}  Ammo banes: {result.ammo_banes}")
    if result.hit_location:
        print(f"Hit location: {result.hit_location}")


if __name__ == "__main__":
    if not 2 <= len(sys.argv) <= 5:
        print("Usage: python scripts/roll_task.py <attribute> [skill] [rof] [modifier]")
        sys.exit(1)
    try:
        values = [int(arg) for arg in sys.argv[1:]]
    except ValueError:
        print("Error: ratings must be integers.")
        sys.exit(1)
    asyncio.run(roll(*values))
