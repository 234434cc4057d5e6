"""Actor API: create and read character sheets."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, StrictInt
from sqlalchemy.ext.asyncio import AsyncSession

from t2k.domain import actor as actor_mod
from t2k.infra.db import get_db
from t2k.models.db_models import Actor

router = APIRouter(prefix="/api/actors", tags=["actors"])


class CreateActorRequest(BaseModel):
    name: str
    attributes: dict[str, StrictInt] = {}
    skills: dict[str, StrictInt] = {}
    cuf: StrictInt = 6
    unit_morale: StrictInt = 6


def _actor_out(actor: Actor) -> dict:
    return {
        "actor_id": actor.id,
        "name": actor.name,
        "attributes": actor.attributes,
        "skills": actor.skills,
        "cuf": actor.cuf,
        "unit_morale": actor.unit_morale,
    }


@router.post("")
async def create_actor(
    req: CreateActorRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    try:
        actor = await actor_mod.create_actor(
            db, req.name, req.attributes, req.skills, req.cuf, req.unit_morale
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _actor_out(actor)


@router.get("")
async def list_actors(db: Annotated[AsyncSession, Depends(get_db)]) -> list[dict]:
    return [_actor_out(a) for a in await actor_mod.get_actors(db)]


@router.get("/{actor_id}")
async def get_actor(
    actor_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    actor = await actor_mod.get_actor(db, actor_id)
    if actor is None:
        raise HTTPException(status_code=404, detail="Actor not found")
    return _actor_out(actor)
