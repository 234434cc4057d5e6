"""Chat log: publish rolls as messages, query and delete them."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from t2k.models.check import RollMode
from t2k.models.db_models import ChatMessage
from t2k.modules.dice.roller import YearZeroRoll

logger = logging.getLogger("t2k-core.messages")


class StoredMessage:
    """Handle on a persisted chat message."""

    def __init__(self, db: AsyncSession, message: ChatMessage) -> None:
        self._db = db
        self.message = message

    @property
    def id(self) -> str:
        return self.message.id

    async def delete(self) -> None:
        await self._db.delete(self.message)
        await self._db.flush()


class MessageSink:
    """Publishes rolls to the chat log of one database session."""

    def __init__(self, db: AsyncSession, actor_id: str | None = None) -> None:
        self._db = db
        self._actor_id = actor_id
        self.published: list[StoredMessage] = []

    async def publish(self, roll: YearZeroRoll, roll_mode: RollMode) -> StoredMessage:
        message = ChatMessage(
            actor_id=self._actor_id,
            flavor=roll.name,
            roll_mode=RollMode(roll_mode).value,
            formula=roll.formula,
            roll_json=roll.model_dump_json(),
            successes=roll.successes,
            push_count=roll.push_count,
        )
        self._db.add(message)
        await self._db.flush()
        logger.debug("Published %s (%s) as message %s", roll.name, roll_mode, message.id)

        handle = StoredMessage(self._db, message)
        self.published.append(handle)
        return handle

    @property
    def last_id(self) -> str | None:
        """Id of the most recent message published through this sink."""
        return self.published[-1].id if self.published else None


async def get_message(db: AsyncSession, message_id: str) -> ChatMessage | None:
    result = await db.execute(select(ChatMessage).where(ChatMessage.id == message_id))
    return result.scalar_one_or_none()


async def get_messages(
    db: AsyncSession, limit: int = 50, offset: int = 0
) -> list[ChatMessage]:
    result = await db.execute(
        select(ChatMessage).order_by(ChatMessage.created_at).limit(limit).offset(offset)
    )
    return list(result.scalars().all())


def load_roll(message: ChatMessage) -> YearZeroRoll:
    """Rebuild the roll a message was published with.

    Raises:
        ValueError: If the message holds no roll.
    """
    if not message.roll_json:
        raise ValueError(f"Message {message.id} holds no roll")
    return YearZeroRoll.model_validate_json(message.roll_json)
