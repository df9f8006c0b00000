"""Logging configuration utilities."""

from typing import Any, Dict, Optional

from landing_builder.settings import Settings, get_settings


def get_logging_config(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Get logging configuration dictionary.

    Args:
        settings: Settings to configure from, defaults to the cached instance

    Returns:
        Logging configuration for dictConfig
    """
    settings = settings or get_settings()
    formatter = "json" if settings.log_format == "json" else "standard"

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.log_level,
            "formatter": formatter,
            "stream": "ext://sys.stdout",
        },
    }
    app_handlers = ["console"]

    if settings.log_dir:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.log_level,
            "formatter": formatter,
            "filename": f"{settings.log_dir}/build-server.log",
            "maxBytes": 10485760,
            "backupCount": 10,
        }
        app_handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "landing_builder": {
                "level": settings.log_level,
                "handlers": app_handlers,
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": settings.log_level,
            "handlers": ["console"],
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup logging configuration."""
    import logging
    import logging.config
    from pathlib import Path

    settings = settings or get_settings()
    if settings.log_dir:
        Path(settings.log_dir).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config(settings))

    logger = logging.getLogger("landing_builder")
    logger.info("Logging configured successfully")
