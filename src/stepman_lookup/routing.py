"""Resolve a step collection id to the absolute path of its ``spec.json``.

The routing table is re-read on every call; nothing is cached.
"""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Dict, Optional

from .core.config import StepmanConfig
from .core.errors import CollectionNotFoundError, PathExpansionError
from .core.io_utils import abs_path, expand, read_json
from .core.validation_utils import require_str_mapping

logger = logging.getLogger(__name__)


def read_routing(config: Optional[StepmanConfig] = None) -> Dict[str, str]:
    """Return the routing table mapping collection ids to directory tokens."""

    config = config or StepmanConfig()
    routing_path = abs_path(config.routing_path, "stepman routing file")
    return read_json(
        routing_path,
        "content of routing file",
        stage="routing",
        decode=partial(require_str_mapping, field="routing"),
        encoding=config.encoding,
    )


def resolve_spec_path(collection_id: str, config: Optional[StepmanConfig] = None) -> Path:
    """Return the absolute ``spec.json`` path of ``collection_id``.

    Raises
    ------
    PathExpansionError
        The routing file or the spec path cannot be made absolute.
    FileReadError
        The routing file cannot be read.
    JSONParseError
        The routing file is not a JSON object of strings.
    CollectionNotFoundError
        ``collection_id`` has no routing entry.
    """

    config = config or StepmanConfig()
    routes = read_routing(config)

    try:
        token = routes[collection_id]
    except KeyError as exc:
        raise CollectionNotFoundError(collection_id) from exc

    try:
        spec_path = expand(config.spec_path_template, token=token)
    except (KeyError, IndexError, ValueError) as exc:
        raise PathExpansionError(
            f"Failed to get absolute path of spec.json: bad template {config.spec_path_template!r}",
            stage="routing",
        ) from exc
    resolved = abs_path(spec_path, "spec.json")
    logger.debug("resolved collection %s to %s", collection_id, resolved)
    return resolved


__all__ = ["read_routing", "resolve_spec_path"]
