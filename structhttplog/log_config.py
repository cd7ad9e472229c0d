"""
structhttplog/log_config.py

structlog configuration for applications using the middleware.

Field trees bound by the middleware are realized by ``render_field_trees``
after level filtering, so records below the configured level cost no field
formatting at all.
"""
from __future__ import annotations

import logging
from typing import Any

import structlog

from structhttplog.config import Settings, settings as default_settings
from structhttplog.tree import render_field_trees


def configure_logging(settings: Settings | None = None) -> Any:
    """Configure structlog from settings and return a bound logger."""
    settings = settings or default_settings
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    renderer: Any
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            render_field_trees,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("structhttplog")
