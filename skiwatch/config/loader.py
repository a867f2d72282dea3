"""YAML config loading and saving, with dotted-key edits for the CLI."""

import hashlib
from pathlib import Path
from typing import Any

import yaml

from skiwatch.config.defaults import DEFAULT_LOCATIONS
from skiwatch.config.schema import SkiwatchConfig

_TRUTHY = ("1", "true", "yes", "on")


def load_config(path: str | Path | None = None) -> SkiwatchConfig:
    """Load and validate config from a YAML file.

    A missing path yields the defaults. If no locations are specified in
    the YAML, injects DEFAULT_LOCATIONS.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}

    if not raw.get("locations"):
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    return SkiwatchConfig(**raw)


def save_config(config: SkiwatchConfig, path: str | Path) -> None:
    """Write the full config back as YAML, locations included."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.model_dump(mode="json"), f, sort_keys=False, allow_unicode=True
        )


def config_hash(config: SkiwatchConfig) -> str:
    """Short SHA256 of the canonical JSON dump, logged at daemon start."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def _step(node: Any, part: str, dotted_key: str) -> Any:
    try:
        if isinstance(node, list):
            return node[int(part)]
        if isinstance(node, dict):
            return node[part]
    except (IndexError, KeyError, ValueError):
        raise KeyError(f"Config key not found: {dotted_key}") from None
    if not hasattr(node, part):
        raise KeyError(f"Config key not found: {dotted_key}")
    return getattr(node, part)


def get_config_value(config: SkiwatchConfig, dotted_key: str) -> Any:
    """Look up e.g. ``ops.refresh_interval_minutes`` or ``locations.0.name``."""
    node: Any = config
    for part in dotted_key.split("."):
        node = _step(node, part, dotted_key)
    return node


def _coerce(current: Any, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(current, bool):
        return value.lower() in _TRUTHY
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    return value


def set_config_value(config: SkiwatchConfig, dotted_key: str, value: Any) -> SkiwatchConfig:
    """Return a re-validated copy of ``config`` with one leaf replaced.

    String values from the command line are coerced to the type of the
    value they replace. Only existing mapping keys can be set.
    """
    data = config.model_dump(mode="json")
    *parents, leaf = dotted_key.split(".")
    node: Any = data
    for part in parents:
        node = _step(node, part, dotted_key)
    if not isinstance(node, dict) or leaf not in node:
        raise KeyError(f"Config key not found: {dotted_key}")
    node[leaf] = _coerce(node[leaf], value)
    return SkiwatchConfig(**data)
