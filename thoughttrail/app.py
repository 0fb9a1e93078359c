"""
FastAPI application entry point for the blogging API.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from thoughttrail.config import DEFAULT_SECRET_ACCESS_KEY, Settings, get_settings
from thoughttrail.errors import register_exception_handlers
from thoughttrail.routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the app. ``settings`` overrides the app-level options (prefix, CORS,
    logging); request handlers always read ``get_settings()``.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    if (
        settings.secret_access_key == DEFAULT_SECRET_ACCESS_KEY
        and not settings.use_in_memory_backends
    ):
        logger.warning(
            "SECRET_ACCESS_KEY is not set; access tokens are signed with the "
            "built-in development secret and can be forged"
        )
    app = FastAPI(title="Thought Trail API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 3000)))
