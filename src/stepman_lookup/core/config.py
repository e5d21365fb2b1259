"""Location settings for the stepman routing table and collection specs.

stepman itself offers no way to query where a collection lives, so the
routing file location is a configurable constant that defaults to the
well-known ``~/.stepman`` layout.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

DEFAULT_ROUTING_PATH = "~/.stepman/routing.json"
DEFAULT_SPEC_PATH_TEMPLATE = "~/.stepman/step_collections/{token}/spec/spec.json"


@dataclass(frozen=True)
class StepmanConfig:
    """Where to find the routing table and each collection's ``spec.json``.

    Attributes
    ----------
    routing_path
        JSON file mapping collection ids to directory tokens. ``~`` is expanded.
    spec_path_template
        ``str.format`` template with a ``{token}`` field producing the spec
        path of a collection. ``~`` is expanded after formatting.
    encoding
        Text encoding of both files.
    """

    routing_path: str = DEFAULT_ROUTING_PATH
    spec_path_template: str = DEFAULT_SPEC_PATH_TEMPLATE
    encoding: str = "utf-8"

    @classmethod
    def for_root(cls, root: Union[str, Path], **kw: Any) -> "StepmanConfig":
        """Return a config using the ``~/.stepman`` layout below ``root``."""
        base = Path(root)
        # braces in the root itself must survive str.format
        escaped = str(base).replace("{", "{{").replace("}", "}}")
        return cls(
            routing_path=str(base / "routing.json"),
            spec_path_template=str(Path(escaped) / "step_collections" / "{token}" / "spec" / "spec.json"),
            **kw,
        )


def _from_mapping(data: Mapping[str, Any]) -> StepmanConfig:
    section = data.get("stepman", data)
    if not isinstance(section, Mapping):
        raise ValueError("'stepman' section must be a mapping")

    known = {f.name for f in fields(StepmanConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown stepman config keys: {', '.join(unknown)}")

    values: Dict[str, str] = {}
    for key, value in section.items():
        if not isinstance(value, (str, Path)):
            raise ValueError(f"Config key '{key}' must be a string")
        values[key] = str(value)
    return StepmanConfig(**values)


def load_config(cfg: Union[None, str, Path, Mapping[str, Any], StepmanConfig] = None) -> StepmanConfig:
    """Build a :class:`StepmanConfig` from ``cfg``.

    ``cfg`` may be ``None`` (defaults), a ready config, a mapping, or a path to
    a YAML file. Keys may sit at the top level or below a ``stepman:`` section.

    Raises
    ------
    ValueError
        On unknown keys or non-string values.
    """

    if cfg is None:
        return StepmanConfig()
    if isinstance(cfg, StepmanConfig):
        return cfg
    if isinstance(cfg, Mapping):
        return _from_mapping(cfg)

    path = Path(cfg).expanduser()
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return StepmanConfig()
    if not isinstance(data, Mapping):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return _from_mapping(data)


__all__ = ["StepmanConfig", "load_config", "DEFAULT_ROUTING_PATH", "DEFAULT_SPEC_PATH_TEMPLATE"]
