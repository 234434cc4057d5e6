"""SQLAlchemy ORM models for t2k-core."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from t2k.models.constants import SKILL_ATTRIBUTES


def _uuid() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Actor(Base):
    """A character sheet: attribute and skill ratings plus the two CuF trackers."""

    __tablename__ = "actors"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    attributes_json: Mapped[str] = mapped_column(
        Text, nullable=False, default='{"str":6,"agl":6,"int":6,"emp":6}'
    )
    skills_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")  # {"recon":8}
    cuf: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    unit_morale: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    @property
    def attributes(self) -> dict[str, int]:
        return json.loads(self.attributes_json) if self.attributes_json else {}

    @property
    def skills(self) -> dict[str, int]:
        return json.loads(self.skills_json) if self.skills_json else {}

    def get_rating(self, key: str) -> int:
        """Look up a numeric rating: ``cuf``, ``unit_morale``, an attribute or a skill.

        Unknown skills are untrained and rate 0; unknown keys raise KeyError.
        """
        if key == "cuf":
            return self.cuf
        if key == "unit_morale":
            return self.unit_morale
        attributes = self.attributes
        if key in attributes:
            return attributes[key]
        if key in SKILL_ATTRIBUTES:
            return self.skills.get(key, 0)
        raise KeyError(f"Unknown rating '{key}' on actor {self.id}")

    def __str__(self) -> str:
        return f"{self.name} ({self.id[:8]})"


class ChatMessage(Base):
    """A published roll, as shown to the table."""

    __tablename__ = "chat_messages"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_uuid)
    actor_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("actors.id", ondelete="SET NULL"), nullable=True
    )
    flavor: Mapped[str | None] = mapped_column(String(128), nullable=True)
    roll_mode: Mapped[str] = mapped_column(String(16), nullable=False, default="publicroll")
    formula: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    roll_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    successes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    push_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (Index("ix_chat_messages_created", "created_at"),)
