from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

# YAML section -> prefix of the flat AppConfig field names it holds.
_SECTION_PREFIXES: dict[str, str] = {
    "http": "http_",
    "doodstream": "doodstream_",
    "probe": "probe_",
    "logging": "log_",
}


def _flatten(layer: Mapping[str, Any]) -> dict[str, Any]:
    """``{"http": {"timeout_seconds": 5}}`` → ``{"http_timeout_seconds": 5}``.

    Keys that are already flat pass through unchanged, so a layer may mix
    both shapes.
    """
    flat: dict[str, Any] = {}
    for key, value in layer.items():
        prefix = _SECTION_PREFIXES.get(key)
        if prefix is not None and isinstance(value, Mapping):
            flat.update({prefix + name: item for name, item in value.items()})
        else:
            flat[key] = value
    return flat


def _read_yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return _flatten(parsed)


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """
    Build the validated config from defaults < YAML < env (incl. .env) < CLI.

    Every layer is flattened to AppConfig field names and applied in order,
    so a later layer only replaces the keys it actually sets. Nothing is
    written to disk.
    """
    # .env is loaded into os.environ so it reaches EnvOverrides as plain env.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged = _flatten(DEFAULT_CONFIG)
    if config_path is not None:
        merged.update(_read_yaml_layer(config_path))
    merged.update(EnvOverrides().to_update_dict())
    merged.update(_flatten(cli_overrides or {}))

    return AppConfig.model_validate(merged)
