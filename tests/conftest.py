import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def write_result(path: Path, counts: Optional[Dict[str, object]] = None, messages: Optional[List[dict]] = None) -> Path:
    sbom: Dict[str, object] = {}
    if counts is not None:
        sbom["vulnerability_count"] = counts
    if messages is not None:
        sbom["messages"] = messages
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"sbom": sbom}))
    return path


def write_paths(path: Path, entries: List[Path]) -> Path:
    path.write_text("".join(f"{entry}\n" for entry in entries))
    return path



class RecordingSink:
    """Metrics sink that keeps every event in memory."""

    def __init__(self) -> None:
        self.events: List[Dict[str, Any]] = []

    def emit(self, name: str, value: float, dimensions: Dict[str, str]) -> None:
        self.events.append({"name": name, "value": value, "dimensions": dict(dimensions)})

    def names(self) -> List[str]:
        return [event["name"] for event in self.events]

@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "results"
    directory.mkdir()
    return directory
