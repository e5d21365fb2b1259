"""Read step collections and individual step versions from local stepman data.

Two views of the same ``spec.json`` are offered:

* :func:`read_collection` decodes the whole document into a
  :class:`~.core.collection_models.StepCollectionModel`.
* :func:`read_step_version` decodes the flat
  :class:`~.core.contracts.SpecDocument` view and returns one step version.

Each call resolves the path, reads and decodes the file afresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from .core.collection_models import StepCollectionModel
from .core.config import StepmanConfig
from .core.contracts import SpecDocument, StepVersion
from .core.errors import StepNotFoundError, VersionNotFoundError
from .core.io_utils import read_json
from .routing import resolve_spec_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepmanReader:
    """Lookup operations bound to an explicit :class:`StepmanConfig`."""

    config: StepmanConfig = field(default_factory=StepmanConfig)

    def spec_path(self, collection_id: str) -> Path:
        return resolve_spec_path(collection_id, self.config)

    def read_collection(self, collection_id: str) -> StepCollectionModel:
        """Return the full collection model of ``collection_id``.

        Routing errors propagate unchanged; :class:`FileReadError` and
        :class:`JSONParseError` are raised for the spec file itself.
        """
        path = self.spec_path(collection_id)
        return read_json(
            path,
            "spec json",
            stage="spec",
            decode=StepCollectionModel.from_dict,
            encoding=self.config.encoding,
        )

    def read_spec(self, collection_id: str) -> SpecDocument:
        path = self.spec_path(collection_id)
        return read_json(
            path,
            "spec json",
            stage="spec",
            decode=SpecDocument.from_dict,
            encoding=self.config.encoding,
        )

    def read_step_version(
        self, collection_id: str, step_id: str, version: Optional[str] = ""
    ) -> Tuple[StepVersion, str]:
        """Return ``(step_version, effective_version)`` for a step.

        An empty or ``None`` ``version`` selects the step's latest version. The
        effective version is returned so callers can see what "latest" meant.

        Raises
        ------
        StepNotFoundError
            ``step_id`` is not part of the collection.
        VersionNotFoundError
            The requested (or latest) version is not published.
        """
        spec = self.read_spec(collection_id)

        try:
            info = spec.steps[step_id]
        except KeyError as exc:
            raise StepNotFoundError(step_id) from exc

        if not version:
            version = info.latest_version
            logger.debug("using latest version %s of step %s", version, step_id)

        try:
            step_version = info.versions[version]
        except KeyError as exc:
            raise VersionNotFoundError(step_id, version) from exc
        return step_version, version


def read_collection(collection_id: str, config: Optional[StepmanConfig] = None) -> StepCollectionModel:
    """Module-level shortcut for :meth:`StepmanReader.read_collection`."""
    return StepmanReader(config or StepmanConfig()).read_collection(collection_id)


def read_step_version(
    collection_id: str,
    step_id: str,
    version: Optional[str] = "",
    config: Optional[StepmanConfig] = None,
) -> Tuple[StepVersion, str]:
    """Module-level shortcut for :meth:`StepmanReader.read_step_version`."""
    return StepmanReader(config or StepmanConfig()).read_step_version(collection_id, step_id, version)


__all__ = ["StepmanReader", "read_collection", "read_step_version"]
