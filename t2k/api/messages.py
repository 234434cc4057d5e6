"""Message API: the chat log of published rolls, and pushing them."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from t2k.api.deps import build_context
from t2k.domain import messages
from t2k.domain.messages import MessageSink, StoredMessage
from t2k.domain.rules.push import push_roll
from t2k.infra.db import get_db
from t2k.models.check import RollMode
from t2k.models.db_models import ChatMessage

router = APIRouter(prefix="/api/messages", tags=["messages"])


def _message_out(message: ChatMessage) -> dict:
    return {
        "message_id": message.id,
        "actor_id": message.actor_id,
        "flavor": message.flavor,
        "roll_mode": message.roll_mode,
        "formula": message.formula,
        "successes": message.successes,
        "push_count": message.push_count,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


@router.get("")
async def list_messages(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = 50,
    offset: int = 0,
) -> list[dict]:
    return [_message_out(m) for m in await messages.get_messages(db, limit, offset)]


@router.post("/{message_id}/push")
async def push_message(
    message_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Push the roll held by a message; the message is replaced by the pushed roll."""
    message = await messages.get_message(db, message_id)
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    try:
        roll = messages.load_roll(message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sink = MessageSink(db, actor_id=message.actor_id)
    ctx = build_context(sink)
    pushed = await push_roll(
        ctx, roll, StoredMessage(db, message), roll_mode=RollMode(message.roll_mode)
    )
    return {
        "pushed": pushed.push_count > roll.push_count,
        "roll": pushed.model_dump(),
        "message_id": sink.last_id,
    }
