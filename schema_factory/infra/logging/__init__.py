"""Logging infrastructure.

Basic usage:
    import logging

    from schema_factory.infra.logging import setup_logging

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Composing schema")
"""

from schema_factory.infra.logging.config import configure_logging, setup_logging
from schema_factory.infra.logging.formatters import JSONFormatter

__all__ = ["JSONFormatter", "configure_logging", "setup_logging"]
