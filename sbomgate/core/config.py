"""Layered settings: defaults, YAML file, environment, then CLI flags."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from sbomgate.core import correlator
from sbomgate.core.errors import ConfigError
from sbomgate.core.labels import LabelMap
from sbomgate.core.targets import DEFAULT_TARGETS, ScanTarget, parse_targets

DEFAULT_CONFIG_NAME = ".sbomgate.yml"
DEFAULT_NAMESPACE = "GitHub/Workflows"
DEFAULT_WORKFLOW = "SecurityScanning"

ENV_CONFIG = "SBOMGATE_CONFIG"
ENV_NAMESPACE = "SBOMGATE_METRICS_NAMESPACE"
ENV_WORKFLOW = "SBOMGATE_WORKFLOW"
ENV_RESULTS_PATHS = "SBOMGATE_RESULTS_PATHS"
ENV_METRICS = "SBOMGATE_METRICS"

_FALSEY = {"0", "false", "no", "off"}


@dataclass
class Settings:
    source_root: pathlib.Path
    output_dir: pathlib.Path
    results_paths: pathlib.Path
    targets: List[ScanTarget] = field(default_factory=lambda: list(DEFAULT_TARGETS))
    namespace: str = DEFAULT_NAMESPACE
    workflow: str = DEFAULT_WORKFLOW
    metrics_enabled: bool = True


def load_settings(
    source_root: Optional[pathlib.Path] = None,
    output_dir: Optional[pathlib.Path] = None,
    results_paths: Optional[pathlib.Path] = None,
    config_path: Optional[pathlib.Path] = None,
    metrics_enabled: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    env = os.environ if environ is None else environ
    root = (source_root or pathlib.Path.cwd()).resolve()

    config_file = config_path or _path_or_none(env.get(ENV_CONFIG)) or root / DEFAULT_CONFIG_NAME
    data = _read_yaml(config_file)

    targets = list(DEFAULT_TARGETS)
    if data.get("targets") is not None:
        if not isinstance(data["targets"], list):
            raise ConfigError(f"{config_file}: 'targets' must be a list")
        targets = parse_targets(data["targets"])
        LabelMap(targets)  # raises on colliding artifact labels

    metrics_cfg = data.get("metrics") or {}
    if not isinstance(metrics_cfg, dict):
        raise ConfigError(f"{config_file}: 'metrics' must be a mapping")

    configured_out = _path_or_none(data.get("output_dir"))
    out_dir = (output_dir or (root / configured_out if configured_out else root)).resolve()
    results = (
        results_paths
        or _path_or_none(env.get(ENV_RESULTS_PATHS))
        or _path_or_none(data.get("results_paths"))
        or out_dir / correlator.DEFAULT_FILENAME
    )

    enabled = bool(metrics_cfg.get("enabled", True))
    if env.get(ENV_METRICS) is not None:
        enabled = env[ENV_METRICS].strip().lower() not in _FALSEY
    if metrics_enabled is not None:
        enabled = metrics_enabled

    return Settings(
        source_root=root,
        output_dir=out_dir,
        results_paths=results.resolve(),
        targets=targets,
        namespace=env.get(ENV_NAMESPACE) or str(metrics_cfg.get("namespace") or DEFAULT_NAMESPACE),
        workflow=env.get(ENV_WORKFLOW) or str(metrics_cfg.get("workflow") or DEFAULT_WORKFLOW),
        metrics_enabled=enabled,
    )


def _read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


def _path_or_none(value: object) -> Optional[pathlib.Path]:
    if value is None or value == "":
        return None
    return pathlib.Path(str(value)).expanduser()
