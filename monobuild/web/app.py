"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from monobuild.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="monobuild", version="0.1.0")
    app.include_router(router)
    return app
