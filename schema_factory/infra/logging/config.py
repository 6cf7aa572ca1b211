"""Logging configuration setup.

Configures the root logger with dictConfig. All handlers are attached to
the root logger; module loggers obtained with ``logging.getLogger(__name__)``
propagate up.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from schema_factory.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from schema_factory.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    json_logs: bool = False,
    service_name: str = "schema-factory",
    capture_warnings: bool = True,
    **kwargs: Any,
) -> None:
    """Configure the root logger with a single stderr handler.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        console_level: Console handler level. If None, uses log_level.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        service_name: Static ``service`` field added to JSON records.
        capture_warnings: Forward Python warnings to logging system.
        **kwargs: Ignored extra settings.

    Example:
        from schema_factory.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))

    if capture_warnings:
        logging.captureWarnings(True)

    formatter_name = "json" if json_logs else "text"
    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _build_formatters_config(json_logs=json_logs, service_name=service_name),
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": (console_level or log_level).upper(),
                "formatter": formatter_name,
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": log_level.upper(),
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(logging_config)


def _build_formatters_config(json_logs: bool, service_name: str) -> dict[str, Any]:
    """Build formatters configuration for dictConfig.

    Args:
        json_logs: Use JSONL format.
        service_name: Static service name for JSON records.

    Returns:
        Formatters configuration dict.
    """
    if json_logs:
        return {
            "json": {
                "()": "schema_factory.infra.logging.formatters.JSONFormatter",
                "fmt_keys": {
                    "level": "levelname",
                    "logger": "name",
                    "message": "message",
                },
                "static": {"service": service_name},
            },
        }
    return {
        "text": {
            "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }
