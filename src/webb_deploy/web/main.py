from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from webb_deploy.web.api.router import router as api_router
from webb_deploy.web.session import close_all_sessions


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Playback ticks live on this loop; none may outlive it.
    close_all_sessions()


def create_app() -> FastAPI:
    app = FastAPI(title="Webb Deployment Simulator", lifespan=lifespan)
    app.include_router(api_router)
    return app


app = create_app()
