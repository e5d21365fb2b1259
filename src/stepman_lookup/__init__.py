"""Read-only lookups of stepman step collections and step versions."""

from .core.config import StepmanConfig, load_config
from .core.errors import (
    CollectionNotFoundError,
    FileReadError,
    JSONParseError,
    PathExpansionError,
    StepmanLookupError,
    StepNotFoundError,
    VersionNotFoundError,
)
from .reader import StepmanReader, read_collection, read_step_version
from .routing import resolve_spec_path

__all__ = [
    "StepmanConfig",
    "load_config",
    "StepmanReader",
    "read_collection",
    "read_step_version",
    "resolve_spec_path",
    "StepmanLookupError",
    "PathExpansionError",
    "FileReadError",
    "JSONParseError",
    "CollectionNotFoundError",
    "StepNotFoundError",
    "VersionNotFoundError",
]
