"""Exceptions raised while resolving step collections and step versions.

Every error carries a ``stage`` naming where the failure happened:

``"routing"``
    Locating or reading the routing table, or building the spec path.
``"spec"``
    Opening or decoding a collection's ``spec.json``.
``"lookup"``
    Indexing into a decoded document (missing step or version).

The underlying exception, where there is one, is chained via ``__cause__``.
"""

from __future__ import annotations


class StepmanLookupError(Exception):
    """Base class for all lookup failures."""

    def __init__(self, message: str, *, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class PathExpansionError(StepmanLookupError):
    """A home-relative path could not be turned into an absolute path."""


class FileReadError(StepmanLookupError):
    """A routing or spec file is missing or unreadable."""


class JSONParseError(StepmanLookupError, ValueError):
    """File content is not valid JSON or does not have the expected shape."""


class CollectionNotFoundError(StepmanLookupError, LookupError):
    def __init__(self, collection_id: str) -> None:
        super().__init__(
            f"Specified collection ({collection_id}) not found in routing",
            stage="routing",
        )
        self.collection_id = collection_id


class StepNotFoundError(StepmanLookupError, LookupError):
    def __init__(self, step_id: str) -> None:
        super().__init__(f"No step found for ID: {step_id}", stage="lookup")
        self.step_id = step_id


class VersionNotFoundError(StepmanLookupError, LookupError):
    def __init__(self, step_id: str, version: str) -> None:
        super().__init__(
            f"No step version found for (ID: {step_id}) (version: {version})",
            stage="lookup",
        )
        self.step_id = step_id
        self.version = version


__all__ = [
    "StepmanLookupError",
    "PathExpansionError",
    "FileReadError",
    "JSONParseError",
    "CollectionNotFoundError",
    "StepNotFoundError",
    "VersionNotFoundError",
]
