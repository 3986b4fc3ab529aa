"""Logs structurés (structlog) du cœur de génération.

`setup_logging` est appelé une fois par le conteneur. Le rendu console sert en développement,
le rendu JSON ailleurs; le niveau minimal vient de `LOG_LEVEL`. Le contexte lié via
`structlog.contextvars` (utilisateur, requête) est fusionné dans chaque événement.
"""

import logging
import sys

import structlog

_DEV_ENVS = frozenset({"dev", "test", "local"})


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", app_env: str = "dev") -> None:
    """Configure structlog (et le logging standard des bibliothèques) au niveau donné."""
    min_level = _level_number(level)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if app_env in _DEV_ENVS
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )
    logging.basicConfig(level=min_level, stream=sys.stdout, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
