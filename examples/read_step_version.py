#!/usr/bin/env python3
"""Example lookup of a step version from a sample stepman tree."""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from pathlib import Path

import yaml


REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(REPO_ROOT / "src"))

from stepman_lookup import StepmanReader, load_config  # noqa: E402


STEPLIB = "https://github.com/bitrise-io/bitrise-steplib.git"


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp) / ".stepman"
        spec_dir = root / "step_collections" / "1500000000" / "spec"
        spec_dir.mkdir(parents=True)

        # Routing table and a single-step collection
        (root / "routing.json").write_text(json.dumps({STEPLIB: "1500000000"}), encoding="utf-8")
        spec = {
            "format_version": "1.0.0",
            "steplib_source": STEPLIB,
            "steps": {
                "script": {
                    "latest_version_number": "1.1.5",
                    "versions": {
                        "1.1.5": {
                            "title": "Script",
                            "description": "Runs a bash script",
                            "inputs": [
                                {
                                    "key": "runner_bin",
                                    "description": "Interpreter used to run the script",
                                    "default_value": "/bin/bash",
                                    "value_options": ["/bin/bash", "/bin/sh"],
                                    "is_expand": False,
                                }
                            ],
                        }
                    },
                }
            },
        }
        (spec_dir / "spec.json").write_text(json.dumps(spec, indent=2), encoding="utf-8")

        config_path = Path(tmp) / "stepman.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "stepman": {
                        "routing_path": str(root / "routing.json"),
                        "spec_path_template": str(root / "step_collections" / "{token}" / "spec" / "spec.json"),
                    }
                },
                sort_keys=False,
            ),
            encoding="utf-8",
        )

        reader = StepmanReader(load_config(config_path))
        step, version = reader.read_step_version(STEPLIB, "script")
        print(f"{step.title} {version}: {step.description}")
        for item in step.inputs:
            print(f"  - {item.key} (default: {item.default_value!r}, options: {item.value_options})")

        collection = reader.read_collection(STEPLIB)
        print(f"Collection {collection.steplib_source} has steps: {', '.join(collection.step_ids())}")


if __name__ == "__main__":
    main()
