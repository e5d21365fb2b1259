"""Full step collection schema decoded from a collection's ``spec.json``.

This is the steplib-wide view of the document: collection level metadata,
download locations and, per step, the group info and every published
version.  It shares no decoding code with :mod:`.contracts` apart from the
shape helpers.

Fields that are not modelled explicitly stay reachable through ``raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .validation_utils import (
    get_bool,
    get_int,
    get_list,
    get_mapping,
    get_str,
    get_str_list,
    require_mapping,
    require_str_mapping,
)

JSON = Dict[str, Any]


@dataclass(frozen=True)
class StepSourceModel:
    git: str = ""
    commit: str = ""


@dataclass(frozen=True)
class StepModel:
    """One published version of a step."""

    title: str = ""
    summary: str = ""
    description: str = ""
    website: str = ""
    source_code_url: str = ""
    support_url: str = ""
    published_at: str = ""
    source: StepSourceModel = field(default_factory=StepSourceModel)
    asset_urls: Dict[str, str] = field(default_factory=dict)
    host_os_tags: List[str] = field(default_factory=list)
    project_type_tags: List[str] = field(default_factory=list)
    type_tags: List[str] = field(default_factory=list)
    is_requires_admin_user: bool = False
    is_always_run: bool = False
    is_skippable: bool = False
    run_if: str = ""
    timeout: Optional[int] = None
    # environment items, e.g. {"KEY": "default", "opts": {...}}
    inputs: List[JSON] = field(default_factory=list)
    outputs: List[JSON] = field(default_factory=list)
    raw: JSON = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "StepModel":
        obj = require_mapping(data, where)
        source = get_mapping(obj, "source", where)
        return cls(
            title=get_str(obj, "title", where),
            summary=get_str(obj, "summary", where),
            description=get_str(obj, "description", where),
            website=get_str(obj, "website", where),
            source_code_url=get_str(obj, "source_code_url", where),
            support_url=get_str(obj, "support_url", where),
            published_at=get_str(obj, "published_at", where),
            source=StepSourceModel(
                git=get_str(source, "git", f"{where}.source"),
                commit=get_str(source, "commit", f"{where}.source"),
            ),
            asset_urls=require_str_mapping(obj.get("asset_urls"), f"{where}.asset_urls"),
            host_os_tags=get_str_list(obj, "host_os_tags", where),
            project_type_tags=get_str_list(obj, "project_type_tags", where),
            type_tags=get_str_list(obj, "type_tags", where),
            is_requires_admin_user=get_bool(obj, "is_requires_admin_user", where),
            is_always_run=get_bool(obj, "is_always_run", where),
            is_skippable=get_bool(obj, "is_skippable", where),
            run_if=get_str(obj, "run_if", where),
            timeout=get_int(obj, "timeout", where) if obj.get("timeout") is not None else None,
            inputs=_env_items(obj, "inputs", where),
            outputs=_env_items(obj, "outputs", where),
            raw=obj,
        )


def _env_items(obj: JSON, key: str, where: str) -> List[JSON]:
    return [
        require_mapping(item, f"{where}.{key}[{idx}]")
        for idx, item in enumerate(get_list(obj, key, where))
    ]


@dataclass(frozen=True)
class StepGroupInfoModel:
    maintainer: str = ""
    removal_date: str = ""
    deprecate_notes: str = ""
    asset_urls: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "StepGroupInfoModel":
        obj = require_mapping(data, where)
        return cls(
            maintainer=get_str(obj, "maintainer", where),
            removal_date=get_str(obj, "removal_date", where),
            deprecate_notes=get_str(obj, "deprecate_notes", where),
            asset_urls=require_str_mapping(obj.get("asset_urls"), f"{where}.asset_urls"),
        )


@dataclass(frozen=True)
class StepGroupModel:
    """Every version of a single step, keyed by version string."""

    latest_version_number: str = ""
    info: StepGroupInfoModel = field(default_factory=StepGroupInfoModel)
    versions: Dict[str, StepModel] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "StepGroupModel":
        obj = require_mapping(data, where)
        return cls(
            latest_version_number=get_str(obj, "latest_version_number", where),
            info=StepGroupInfoModel.from_dict(obj.get("info"), f"{where}.info"),
            versions={
                version: StepModel.from_dict(raw, f"{where}.versions.{version}")
                for version, raw in get_mapping(obj, "versions", where).items()
            },
        )

    @property
    def latest_version(self) -> Optional[StepModel]:
        return self.versions.get(self.latest_version_number)


@dataclass(frozen=True)
class DownloadLocationModel:
    type: str = ""
    src: str = ""


@dataclass(frozen=True)
class StepCollectionModel:
    """A whole step collection as described by its ``spec.json``."""

    format_version: str = ""
    generated_at_timestamp: int = 0
    steplib_source: str = ""
    download_locations: List[DownloadLocationModel] = field(default_factory=list)
    assets_download_base_uri: str = ""
    steps: Dict[str, StepGroupModel] = field(default_factory=dict)
    raw: JSON = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> "StepCollectionModel":
        obj = require_mapping(data, "collection")
        locations = []
        for idx, item in enumerate(get_list(obj, "download_locations")):
            where = f"download_locations[{idx}]"
            loc = require_mapping(item, where)
            locations.append(DownloadLocationModel(type=get_str(loc, "type", where), src=get_str(loc, "src", where)))
        return cls(
            format_version=get_str(obj, "format_version"),
            generated_at_timestamp=get_int(obj, "generated_at_timestamp"),
            steplib_source=get_str(obj, "steplib_source"),
            download_locations=locations,
            assets_download_base_uri=get_str(obj, "assets_download_base_uri"),
            steps={
                step_id: StepGroupModel.from_dict(raw, f"steps.{step_id}")
                for step_id, raw in get_mapping(obj, "steps", "").items()
            },
            raw=obj,
        )

    def step_ids(self) -> List[str]:
        return sorted(self.steps)


__all__ = [
    "StepSourceModel",
    "StepModel",
    "StepGroupInfoModel",
    "StepGroupModel",
    "DownloadLocationModel",
    "StepCollectionModel",
]
