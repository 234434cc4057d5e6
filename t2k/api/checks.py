"""Check API: task, skill and Coolness Under Fire checks."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, StrictBool, StrictInt
from sqlalchemy.ext.asyncio import AsyncSession

from t2k.api.deps import build_context
from t2k.domain import actor as actor_mod
from t2k.domain.dialog import PresetDialog
from t2k.domain.messages import MessageSink
from t2k.domain.rules.task_check import (
    resolve_cuf_check,
    resolve_skill_check,
    resolve_task_check,
)
from t2k.infra.config import settings
from t2k.infra.db import get_db
from t2k.models.check import (
    CufDialogResult,
    DialogResult,
    RateOfFire,
    RollMode,
    TaskParameters,
)
from t2k.modules.dice.roller import YearZeroRoll

router = APIRouter(prefix="/api/checks", tags=["checks"])


# --- Request schemas ---


class TaskCheckRequest(TaskParameters):
    dialog: DialogResult | None = None  # the player's answer, if the options dialog shows


class SkillCheckRequest(BaseModel):
    actor_id: str
    skill: str
    rof: RateOfFire = 0
    modifier: StrictInt = 0
    locate: StrictBool = False
    max_push: StrictInt = 1
    roll_mode: RollMode | None = None
    ask_for_options: StrictBool = False
    skip_dialog: StrictBool = False
    send_message: StrictBool = True
    dialog: DialogResult | None = None


class CufCheckRequest(BaseModel):
    actor_id: str
    unit_morale: StrictBool = False
    modifier: StrictInt = 0
    max_push: StrictInt = 1
    roll_mode: RollMode | None = None
    send_message: StrictBool = True
    dialog: CufDialogResult | None = None


def _check_out(roll: YearZeroRoll | None, sink: MessageSink) -> dict:
    if roll is None:
        return {"cancelled": True, "roll": None, "message_id": None}
    return {
        "cancelled": False,
        "roll": roll.model_dump(),
        "message_id": sink.last_id,
    }


# --- Checks ---


@router.post("/task")
async def task_check(
    req: TaskCheckRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    sink = MessageSink(db)
    ctx = build_context(sink, PresetDialog(roll_answer=req.dialog))
    params = TaskParameters(**req.model_dump(exclude={"dialog"}))
    roll = await resolve_task_check(ctx, params)
    return _check_out(roll, sink)


@router.post("/skill")
async def skill_check(
    req: SkillCheckRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    actor = await actor_mod.get_actor(db, req.actor_id)
    if actor is None:
        raise HTTPException(status_code=404, detail="Actor not found")

    sink = MessageSink(db, actor_id=actor.id)
    ctx = build_context(sink, PresetDialog(roll_answer=req.dialog))
    try:
        roll = await resolve_skill_check(
            ctx,
            actor,
            req.skill,
            **req.model_dump(exclude={"actor_id", "skill", "dialog"}),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _check_out(roll, sink)


@router.post("/cuf")
async def cuf_check(
    req: CufCheckRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    actor = await actor_mod.get_actor(db, req.actor_id)
    if actor is None:
        raise HTTPException(status_code=404, detail="Actor not found")

    sink = MessageSink(db, actor_id=actor.id)
    ctx = build_context(sink, PresetDialog(cuf_answer=req.dialog))
    roll = await resolve_cuf_check(
        ctx,
        actor,
        title=settings.cuf_title,
        unit_morale=req.unit_morale,
        modifier=req.modifier,
        max_push=req.max_push,
        roll_mode=req.roll_mode,
        send_message=req.send_message,
    )
    return _check_out(roll, sink)
