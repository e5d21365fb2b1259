from __future__ import annotations

import json
from pathlib import Path

import pytest

from stepman_lookup import (
    CollectionNotFoundError,
    FileReadError,
    JSONParseError,
    StepmanConfig,
    StepmanReader,
    StepNotFoundError,
    VersionNotFoundError,
    read_collection,
    read_step_version,
)
from stepman_lookup.core.contracts import StepInput

STEPLIB = "https://github.com/bitrise-io/bitrise-steplib.git"

SPEC = {
    "format_version": "1.0.0",
    "generated_at_timestamp": 1500000000,
    "steplib_source": STEPLIB,
    "download_locations": [{"type": "zip", "src": "https://example.com/steps/"}],
    "assets_download_base_uri": "https://example.com/assets",
    "steps": {
        "script": {
            "latest_version_number": "2.0.0",
            "info": {"maintainer": "bitrise"},
            "versions": {
                "1.0.0": {
                    "title": "Script (old)",
                    "description": "Runs a script",
                    "inputs": [],
                },
                "2.0.0": {
                    "title": "Script",
                    "summary": "Run a bash script",
                    "description": "Runs a bash script",
                    "source": {"git": "https://github.com/bitrise-io/steps-script.git", "commit": "abc123"},
                    "type_tags": ["utility"],
                    "is_always_run": True,
                    "timeout": 600,
                    "inputs": [
                        {
                            "key": "content",
                            "description": "Script body",
                            "default_value": "echo hi",
                            "value_options": [],
                            "is_expand": True,
                        },
                        {
                            "key": "runner_bin",
                            "description": "Runner",
                            "default_value": "/bin/bash",
                            "value_options": ["/bin/bash", "/bin/sh"],
                            "is_expand": False,
                        },
                    ],
                },
            },
        },
        "git-clone": {
            "latest_version_number": "9.9.9",
            "versions": {"4.0.0": {"title": "Git Clone"}},
        },
    },
}


def _write_tree(root: Path, spec=SPEC, token: str = "1") -> StepmanConfig:
    root.mkdir(parents=True, exist_ok=True)
    (root / "routing.json").write_text(json.dumps({STEPLIB: token}), encoding="utf-8")
    spec_dir = root / "step_collections" / token / "spec"
    spec_dir.mkdir(parents=True, exist_ok=True)
    text = spec if isinstance(spec, str) else json.dumps(spec)
    (spec_dir / "spec.json").write_text(text, encoding="utf-8")
    return StepmanConfig.for_root(root)


def test_latest_version_is_used_when_version_empty(tmp_path):
    config = _write_tree(tmp_path)

    step, version = read_step_version(STEPLIB, "script", "", config)

    assert version == "2.0.0"
    assert step.title == "Script"
    assert step.description == "Runs a bash script"
    assert step.inputs[1] == StepInput(
        key="runner_bin",
        description="Runner",
        default_value="/bin/bash",
        value_options=["/bin/bash", "/bin/sh"],
        is_expand=False,
    )
    assert step.inputs[0].is_expand is True


def test_none_version_means_latest(tmp_path):
    config = _write_tree(tmp_path)
    assert read_step_version(STEPLIB, "script", None, config)[1] == "2.0.0"


def test_latest_equals_explicit_latest(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    implicit = reader.read_step_version(STEPLIB, "script")
    explicit = reader.read_step_version(STEPLIB, "script", "2.0.0")

    assert implicit == explicit


def test_explicit_older_version(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    step, version = reader.read_step_version(STEPLIB, "script", "1.0.0")

    assert version == "1.0.0"
    assert step.title == "Script (old)"
    assert step.inputs == []


def test_unknown_step(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    with pytest.raises(StepNotFoundError) as excinfo:
        reader.read_step_version(STEPLIB, "no-such-step")

    assert excinfo.value.step_id == "no-such-step"
    assert excinfo.value.stage == "lookup"
    assert str(excinfo.value) == "No step found for ID: no-such-step"


def test_unknown_step_in_spec_without_steps(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path, spec={"format_version": "1.0.0"}))

    with pytest.raises(StepNotFoundError):
        reader.read_step_version(STEPLIB, "script")


def test_unknown_version(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    with pytest.raises(VersionNotFoundError) as excinfo:
        reader.read_step_version(STEPLIB, "script", "3.0.0")

    assert excinfo.value.step_id == "script"
    assert excinfo.value.version == "3.0.0"
    assert str(excinfo.value) == "No step version found for (ID: script) (version: 3.0.0)"


def test_latest_version_missing_from_versions(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    with pytest.raises(VersionNotFoundError) as excinfo:
        reader.read_step_version(STEPLIB, "git-clone")

    assert excinfo.value.version == "9.9.9"


def test_unknown_collection_propagates(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    with pytest.raises(CollectionNotFoundError):
        reader.read_step_version("https://example.com/other.git", "script")
    with pytest.raises(CollectionNotFoundError):
        reader.read_collection("https://example.com/other.git")


def test_missing_spec_file(tmp_path):
    config = _write_tree(tmp_path)
    (tmp_path / "step_collections" / "1" / "spec" / "spec.json").unlink()

    with pytest.raises(FileReadError) as excinfo:
        read_step_version(STEPLIB, "script", config=config)
    assert excinfo.value.stage == "spec"

    with pytest.raises(FileReadError):
        read_collection(STEPLIB, config)


def test_malformed_spec_json(tmp_path):
    config = _write_tree(tmp_path, spec='{"steps": {')

    with pytest.raises(JSONParseError) as excinfo:
        read_step_version(STEPLIB, "script", config=config)
    assert str(excinfo.value).startswith("Failed to parse spec json")

    with pytest.raises(JSONParseError):
        read_collection(STEPLIB, config)


def test_spec_with_wrong_field_type(tmp_path):
    spec = {"steps": {"script": {"latest_version_number": 2, "versions": {}}}}
    config = _write_tree(tmp_path, spec=spec)

    with pytest.raises(JSONParseError) as excinfo:
        read_step_version(STEPLIB, "script", config=config)

    assert "steps.script.latest_version_number" in str(excinfo.value)


def test_read_collection(tmp_path):
    collection = read_collection(STEPLIB, _write_tree(tmp_path))

    assert collection.format_version == "1.0.0"
    assert collection.generated_at_timestamp == 1500000000
    assert collection.steplib_source == STEPLIB
    assert collection.download_locations[0].type == "zip"
    assert collection.step_ids() == ["git-clone", "script"]

    group = collection.steps["script"]
    assert group.info.maintainer == "bitrise"
    assert group.latest_version is group.versions["2.0.0"]

    step = group.versions["2.0.0"]
    assert step.summary == "Run a bash script"
    assert step.source.commit == "abc123"
    assert step.is_always_run is True
    assert step.is_skippable is False
    assert step.timeout == 600
    assert step.inputs[0]["key"] == "content"
    assert group.versions["1.0.0"].timeout is None


def test_repeated_calls_return_equal_results(tmp_path):
    reader = StepmanReader(_write_tree(tmp_path))

    assert reader.read_step_version(STEPLIB, "script") == reader.read_step_version(STEPLIB, "script")
    assert reader.read_collection(STEPLIB) == reader.read_collection(STEPLIB)


def test_spec_changes_are_picked_up(tmp_path):
    config = _write_tree(tmp_path)
    reader = StepmanReader(config)
    assert reader.read_step_version(STEPLIB, "script")[1] == "2.0.0"

    spec = json.loads(json.dumps(SPEC))
    spec["steps"]["script"]["latest_version_number"] = "1.0.0"
    _write_tree(tmp_path, spec=spec)

    assert reader.read_step_version(STEPLIB, "script")[1] == "1.0.0"


def test_deeply_nested_spec_is_parse_error(tmp_path):
    config = _write_tree(tmp_path, spec='{"steps": ' + "[" * 200000)

    with pytest.raises(JSONParseError):
        read_step_version(STEPLIB, "script", config=config)


def test_nan_in_spec_is_parse_error(tmp_path):
    config = _write_tree(tmp_path, spec='{"steps": {}, "x": NaN}')

    with pytest.raises(JSONParseError):
        read_collection(STEPLIB, config)


def test_reads_from_root_with_braces(tmp_path):
    config = _write_tree(tmp_path / "a{b}")

    assert read_step_version(STEPLIB, "script", config=config)[1] == "2.0.0"
