"""Actor management: character sheet CRUD and rating lookups."""

from __future__ import annotations

import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from t2k.domain.ports import RatingSource
from t2k.models.constants import ATTRIBUTES, SKILL_ATTRIBUTES, SKILL_TITLES
from t2k.models.db_models import Actor


async def create_actor(
    db: AsyncSession,
    name: str,
    attributes: dict[str, int] | None = None,
    skills: dict[str, int] | None = None,
    cuf: int = 6,
    unit_morale: int = 6,
) -> Actor:
    """Create an actor. Missing attributes default to 6; skills must be known keys."""
    sheet = {key: 6 for key in ATTRIBUTES}
    for key, value in (attributes or {}).items():
        if key not in ATTRIBUTES:
            raise ValueError(f"Unknown attribute '{key}'")
        sheet[key] = value
    for key in skills or {}:
        if key not in SKILL_ATTRIBUTES:
            raise ValueError(f"Unknown skill '{key}'")

    actor = Actor(
        name=name,
        attributes_json=json.dumps(sheet),
        skills_json=json.dumps(skills or {}),
        cuf=cuf,
        unit_morale=unit_morale,
    )
    db.add(actor)
    await db.flush()
    return actor


async def get_actor(db: AsyncSession, actor_id: str) -> Actor | None:
    result = await db.execute(select(Actor).where(Actor.id == actor_id))
    return result.scalar_one_or_none()


async def get_actors(db: AsyncSession) -> list[Actor]:
    result = await db.execute(select(Actor).order_by(Actor.created_at))
    return list(result.scalars().all())


def get_attribute_and_skill(skill_name: str, actor: RatingSource) -> tuple[str, int, int]:
    """Return (title, attribute rating, skill rating) for a skill check."""
    attribute_name = SKILL_ATTRIBUTES.get(skill_name)
    if attribute_name is None:
        raise ValueError(f"Unknown skill '{skill_name}'")
    skill = actor.get_rating(skill_name)
    attribute = actor.get_rating(attribute_name)
    return SKILL_TITLES[skill_name], attribute, skill
