"""FastAPI application setup for the weather cache service."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import api


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the repository (and its worker thread) for the lifetime of the app."""
    repository = api.create_repository(asyncio.get_running_loop())
    app.state.repository = repository
    try:
        yield
    finally:
        repository.shutdown(wait=False)


app = FastAPI(title="Weather Cache Service", lifespan=lifespan)


@app.get("/healthz")
def healthz():
    """Liveness probe."""
    return {"status": "ok"}


app.include_router(api.router, prefix="/v1")
