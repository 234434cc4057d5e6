"""t2k-core: FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import version, PackageNotFoundError

from fastapi import FastAPI

from t2k.api import actors, checks, messages
from t2k.infra.db import init_db

logger = logging.getLogger("t2k-core")

try:
    __version__ = version("t2k-core")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[no-untyped-def]
    await init_db()
    logger.info("t2k-core %s ready", __version__)
    yield


app = FastAPI(
    title="t2k-core",
    description="Twilight 2000 task resolution with Year Zero dice pools, options and pushes",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(actors.router)
app.include_router(checks.router)
app.include_router(messages.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "engine": "t2k-core", "version": __version__}
