"""Flat view of a collection's ``spec.json`` used for step version lookups.

Only the fields needed to describe a step version and its inputs are decoded.
The richer collection schema lives in :mod:`.collection_models`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .validation_utils import get_bool, get_list, get_mapping, get_str, get_str_list, require_mapping


@dataclass(frozen=True)
class StepInput:
    """A single input declared by a step version."""

    key: str = ""
    description: str = ""
    default_value: str = ""
    value_options: List[str] = field(default_factory=list)
    is_expand: bool = False

    @classmethod
    def from_dict(cls, data: Any, where: str = "input") -> "StepInput":
        obj = require_mapping(data, where)
        return cls(
            key=get_str(obj, "key", where),
            description=get_str(obj, "description", where),
            default_value=get_str(obj, "default_value", where),
            value_options=get_str_list(obj, "value_options", where),
            is_expand=get_bool(obj, "is_expand", where),
        )


@dataclass(frozen=True)
class StepVersion:
    """Title, description and inputs of one published step version."""

    title: str = ""
    description: str = ""
    inputs: List[StepInput] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str = "version") -> "StepVersion":
        obj = require_mapping(data, where)
        inputs = [
            StepInput.from_dict(item, f"{where}.inputs[{idx}]")
            for idx, item in enumerate(get_list(obj, "inputs", where))
        ]
        return cls(
            title=get_str(obj, "title", where),
            description=get_str(obj, "description", where),
            inputs=inputs,
        )


@dataclass(frozen=True)
class StepInfo:
    """All published versions of a step plus the version marked as latest."""

    latest_version: str = ""
    versions: Dict[str, StepVersion] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, where: str = "step") -> "StepInfo":
        obj = require_mapping(data, where)
        versions = {
            version: StepVersion.from_dict(raw, f"{where}.versions.{version}")
            for version, raw in get_mapping(obj, "versions", where).items()
        }
        return cls(
            latest_version=get_str(obj, "latest_version_number", where),
            versions=versions,
        )


@dataclass(frozen=True)
class SpecDocument:
    """Mapping of step id to :class:`StepInfo` decoded from ``spec.json``."""

    steps: Dict[str, StepInfo] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "SpecDocument":
        obj: Mapping[str, Any] = require_mapping(data, "spec")
        steps = {
            step_id: StepInfo.from_dict(raw, f"steps.{step_id}")
            for step_id, raw in get_mapping(obj, "steps", "").items()
        }
        return cls(steps=steps)


__all__ = ["StepInput", "StepVersion", "StepInfo", "SpecDocument"]
