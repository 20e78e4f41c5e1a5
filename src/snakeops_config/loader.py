"""Config file loading with per-environment overlays

A deployment keeps ``config.yaml`` next to one overlay per environment
(``config.production.yaml``, ``config.staging.yaml``, ...). The overlay is
deep-merged over the base before validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .models import AppConfig, AppSection

BASE_FILE_NAME = "config.yaml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto ``base`` without mutating either.

    Nested sections merge key by key. Lists such as ``emergency_kill`` are
    replaced so an overlay can clear them with ``[]``.
    """
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def environment_file(config_dir: Path, environment: str) -> Path:
    return config_dir / f"config.{environment}.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            path=path,
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            path=path,
            cause=e,
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Top level of {path} must be a mapping, got {type(data).__name__}",
            path=path,
        )
    return data


def _validate(data: dict[str, Any]) -> AppConfig:
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e


def load(base_path: Path, env_path: Path | None = None) -> AppConfig:
    """Load ``base_path`` and merge ``env_path`` over it when that file exists."""
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    return _validate(data)


def load_for_environment(config_dir: Path, environment: str | None = None) -> AppConfig:
    """Load ``config.yaml`` from ``config_dir`` plus the overlay for one environment.

    Without ``environment`` the overlay is picked from ``app.environment`` in
    the base file and may be absent. An explicitly requested environment must
    have its overlay file. The returned config always reports the environment
    that was loaded.

    Raises:
        ConfigError: READ_FILE, PARSE_YAML, VALIDATION or UNKNOWN_ENVIRONMENT
    """
    data = _read_yaml(config_dir / BASE_FILE_NAME)
    app = data.get("app") if isinstance(data.get("app"), dict) else {}
    name = environment or app.get("environment") or AppSection.model_fields["environment"].default

    overlay = environment_file(config_dir, name)
    if overlay.exists():
        data = deep_merge(data, _read_yaml(overlay))
    elif environment is not None:
        raise ConfigError(
            code=ConfigErrorCodes.UNKNOWN_ENVIRONMENT,
            message=f"No overlay for environment {environment!r}: {overlay}",
            path=overlay,
        )

    data = deep_merge(data, {"app": {"environment": name}})
    return _validate(data)
