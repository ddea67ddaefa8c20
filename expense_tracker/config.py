from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "storage_file": "expenses.tsv",
    "sidecar_suffix": ".meta",
    "export_file": "expenses_export.csv",
    "log_level": "WARNING",
    "output_modules": {
        "csv": "expense_tracker.outputs.csv_output.CSVOutput",
        "excel": "expense_tracker.outputs.excel_output.ExcelOutput",
    },
    "input_modules": {
        "csv": "expense_tracker.loaders.csv_loader.CSVLoader",
    },
}

CONFIG_PATH = Path("config.yaml")

# Environment variable -> config key
ENV_OVERRIDES = {
    "EXPENSE_TRACKER_STORE": "storage_file",
    "EXPENSE_TRACKER_LOG_LEVEL": "log_level",
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: Path | str | None = None, environ=None) -> Dict[str, object]:
    """Read a YAML config file, fill in defaults and apply environment overrides.

    A missing file yields the defaults.
    """
    target = Path(path) if path else CONFIG_PATH
    data: Dict[str, object] = {}
    if target.exists():
        with target.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {target} must contain a mapping")
    config = _merge_defaults(data, DEFAULT_CONFIG)

    env = os.environ if environ is None else environ
    for var, key in ENV_OVERRIDES.items():
        if env.get(var):
            config[key] = env[var]
    return config


def save_config(config: Dict[str, object], path: Path | str | None = None) -> None:
    target = Path(path) if path else CONFIG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)
