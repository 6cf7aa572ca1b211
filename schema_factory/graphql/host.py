"""Published schema slot.

The host holds the schema served at request time. A composition pass
publishes by replacing the reference in one assignment, so readers see
either the previous graph or the new one, never a graph under construction.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphql import GraphQLSchema

logger = logging.getLogger(__name__)

__all__ = ["GraphQLSchemaHost", "SchemaNotPublishedError", "get_schema_host"]


class SchemaNotPublishedError(RuntimeError):
    """Raised when the schema is read before any pass has published it."""


class GraphQLSchemaHost:
    """Single-writer, multi-reader holder of the published schema.

    Example:
        >>> host = GraphQLSchemaHost()
        >>> host.publish(schema)
        >>> host.schema is schema
        True
    """

    def __init__(self) -> None:
        self._schema: GraphQLSchema | None = None
        self._version = 0
        self._write_lock = threading.Lock()
        self._pass_lock: asyncio.Lock | None = None
        self._pass_lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def schema(self) -> GraphQLSchema:
        """The published schema.

        Raises:
            SchemaNotPublishedError: If no pass has published a schema yet.
        """
        schema = self._schema
        if schema is None:
            msg = (
                "GraphQL schema has not yet been created. "
                "Run a composition pass before reading it."
            )
            raise SchemaNotPublishedError(msg)
        return schema

    @property
    def is_published(self) -> bool:
        return self._schema is not None

    @property
    def pass_lock(self) -> asyncio.Lock:
        """Lock serializing composition passes that publish into this host.

        Shared by every composer bound to the host. An asyncio lock only
        works inside one event loop, so a new one is made per running loop.
        """
        loop = asyncio.get_running_loop()
        if self._pass_lock is None or self._pass_lock_loop is not loop:
            self._pass_lock = asyncio.Lock()
            self._pass_lock_loop = loop
        return self._pass_lock

    @property
    def version(self) -> int:
        """Number of successful publications so far."""
        return self._version

    def publish(self, schema: GraphQLSchema) -> int:
        """Replace the published schema.

        Args:
            schema: Fully composed schema; must not be mutated afterwards

        Returns:
            The new publication version.
        """
        with self._write_lock:
            self._schema = schema
            self._version += 1
            version = self._version
        logger.info("Published GraphQL schema", extra={"schema_version": version})
        return version


# Global host instance
_HOST = GraphQLSchemaHost()


def get_schema_host() -> GraphQLSchemaHost:
    """Get the process-wide schema host.

    Returns:
        Global GraphQLSchemaHost instance
    """
    return _HOST
