"""FastAPI application factory.

Run with `python main.py serve` or
`uvicorn docgen.api.app:create_app --factory --port 3001`.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docgen.config import Settings, load_settings
from docgen.llm import Drafter, drafter_from_settings

from .errors import register_exception_handlers
from .routes import router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    drafter: Optional[Drafter] = None,
    drafter_factory: Optional[Callable[[str], Drafter]] = None,
) -> FastAPI:
    """Build the HTTP application.

    Doxygen:
    - @param settings: Loaded settings; read from config/ and the environment when None.
    - @param drafter: Server-wide drafting handle; built from settings when a key is configured.
    - @param drafter_factory: Builds a drafter for a caller-supplied `apiKey`.
    - @return: Configured FastAPI instance.
    """
    settings = settings or load_settings()
    if drafter is None and settings.api_key:
        drafter = drafter_from_settings(settings)

    app = FastAPI(
        title="proposal-docgen",
        description="Draft proposals and agreements and render them to PDF or DOCX",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.drafter = drafter
    app.state.drafter_factory = drafter_factory or partial(drafter_from_settings, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)

    logger.info("Application ready (model=%s, credential configured=%s)", settings.model, drafter is not None)
    return app
