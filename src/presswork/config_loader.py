"""Load PressworkConfig from presswork.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from presswork._errors import ConfigError
from presswork.config import PressworkConfig

_KNOWN_KEYS = frozenset({
    "content_dir", "templates_dir", "partials_dir", "output", "site_file",
    "sections", "feed_file", "feed_limit", "feed_template", "base_url",
})


def load_config(root: Path, **overrides: object) -> PressworkConfig:
    """Load PressworkConfig from root, optionally merging presswork.yaml.

    Looks for presswork.yaml, presswork.yml, or presswork.toml in root. If
    found, loads and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the config file exists but cannot be parsed.

    """
    file_config = _read_presswork_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "sections" in merged and not isinstance(merged["sections"], tuple):
        merged["sections"] = tuple(merged["sections"])  # type: ignore[arg-type]
    return PressworkConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_presswork_config(root: Path) -> dict[str, object]:
    """Read presswork config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("presswork.yaml", "presswork.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "presswork.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_presswork_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_presswork_section(data)


def _flatten_presswork_section(data: dict[str, object]) -> dict[str, object]:
    """Extract presswork.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("presswork")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
