"""Custom exception classes for schema composition."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class CompositionErrorKind(StrEnum):
    """Error kinds surfaced by a composition pass."""

    INVALID_DEFINITION = "invalid-definition"
    INCOMPATIBLE_TYPES = "incompatible-types"
    MISSING_ROOT = "missing-root"
    COLLABORATOR_FAILURE = "collaborator-failure"


class SchemaCompositionError(Exception):
    """Base composition exception.

    All composition failures inherit from this class. Every failure aborts
    the in-progress pass; nothing is published.

    Attributes:
        kind: Error kind identifying the failing step.
        detail: Human-readable error message.
        type: Error type identifier (mirrors ``kind``).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.

    Example:
        raise SchemaCompositionError(
            kind=CompositionErrorKind.MISSING_ROOT,
            detail="Query type 'RootQuery' is not defined",
            extra={"root": "query"},
        )
    """

    def __init__(
        self,
        kind: CompositionErrorKind,
        detail: str,
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize composition exception.

        Args:
            kind: Error kind.
            detail: Human-readable error message.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.kind = kind
        self.detail = detail
        self.type = kind.value
        self.title = title or self._default_title(kind)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(kind: CompositionErrorKind) -> str:
        """Get default title for an error kind.

        Args:
            kind: Error kind.

        Returns:
            Human-readable title for the kind.
        """
        titles = {
            CompositionErrorKind.INVALID_DEFINITION: "Invalid Definition",
            CompositionErrorKind.INCOMPATIBLE_TYPES: "Incompatible Types",
            CompositionErrorKind.MISSING_ROOT: "Missing Root",
            CompositionErrorKind.COLLABORATOR_FAILURE: "Collaborator Failure",
        }
        return titles.get(kind, "Error")


class InvalidDefinitionError(SchemaCompositionError):
    """Raised when type definitions fail to parse or are structurally invalid.

    Example:
        raise InvalidDefinitionError(
            detail="Unknown type 'Usr'.",
            extra={"errors": ["Unknown type 'Usr'."]},
        )
    """

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(
            kind=CompositionErrorKind.INVALID_DEFINITION,
            detail=detail,
            extra=extra,
        )


class IncompatibleTypesError(SchemaCompositionError):
    """Raised when two graphs disagree on the kind of a same-named type."""

    def __init__(
        self,
        type_name: str,
        kinds: list[str],
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize incompatible types exception.

        Args:
            type_name: Name of the conflicting type.
            kinds: Kinds declared for the type, in graph order.
            extra: Additional context about the error.
        """
        super().__init__(
            kind=CompositionErrorKind.INCOMPATIBLE_TYPES,
            detail=(
                f"Type '{type_name}' is declared with conflicting kinds: "
                f"{', '.join(kinds)}"
            ),
            extra={"type_name": type_name, "kinds": kinds, **(extra or {})},
        )


class MissingRootError(SchemaCompositionError):
    """Raised when a root operation type is absent or not an object type."""

    def __init__(
        self,
        root: str,
        type_name: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        if type_name:
            detail = f"{root.capitalize()} root type '{type_name}' is not an object type in the graph"
        else:
            detail = f"Composed graph has no {root} root type"
        super().__init__(
            kind=CompositionErrorKind.MISSING_ROOT,
            detail=detail,
            extra={"root": root, "type_name": type_name, **(extra or {})},
        )


class CollaboratorFailureError(SchemaCompositionError):
    """Wraps an error raised by an external collaborator.

    The original exception is kept as ``__cause__`` by raising with
    ``raise CollaboratorFailureError(...) from exc``.

    Example:
        try:
            schema = await transform(schema)
        except Exception as exc:
            raise CollaboratorFailureError("transform_schema", exc) from exc
    """

    def __init__(
        self,
        collaborator: str,
        error: BaseException,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize collaborator failure exception.

        Args:
            collaborator: Name of the failing collaborator step.
            error: The original exception.
            extra: Additional context about the error.
        """
        self.error = error
        super().__init__(
            kind=CompositionErrorKind.COLLABORATOR_FAILURE,
            detail=f"{collaborator} failed: {error}",
            extra={
                "collaborator": collaborator,
                "error_type": type(error).__name__,
                **(extra or {}),
            },
        )
