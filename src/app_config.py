from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    ColorPairSettings,
    CursesSettings,
    KeySettings,
    PathSettings,
    TimerSettings,
    UIServerSettings,
)

CONFIG_FILE_ENV = "POMOCOM_CONFIG_FILE"

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "ColorPairSettings",
    "CursesSettings",
    "KeySettings",
    "PathSettings",
    "TimerSettings",
    "UIServerSettings",
    "apply_overrides",
    "default_config_path",
    "load_app_config",
    "resolve_config_path",
]


def default_config_path() -> Path:
    return DEFAULT_CONFIG_DIR.expanduser() / DEFAULT_CONFIG_FILE


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    raw = config_path or env.get(CONFIG_FILE_ENV) or str(default_config_path())
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def load_app_config(
    config_path: str | None = None,
    *,
    overrides: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load settings from TOML, falling back to defaults when no file exists.

    A missing file is only an error when it was requested explicitly, either
    through ``config_path`` or the ``POMOCOM_CONFIG_FILE`` variable.
    """
    env = environ if environ is not None else os.environ
    explicit = bool(config_path or env.get(CONFIG_FILE_ENV))
    path = resolve_config_path(config_path, environ=env)

    raw: dict[str, Any] = {}
    if path.exists():
        if not path.is_file():
            raise AppConfigurationError(f"Config path is not a file: {path}")
        try:
            with open(path, "rb") as fh:
                raw = tomllib.load(fh)
        except Exception as error:
            raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error
    elif explicit:
        raise AppConfigurationError(f"Config file not found: {path}")

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    raw = apply_overrides(raw, overrides)
    return parse_app_config(
        raw,
        base_dir=path.parent,
        source_file=str(path) if path.exists() else "",
    )


def apply_overrides(raw: Mapping[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """Merge ``section.key=value`` overrides into a copy of the raw settings.

    Values are read as TOML literals when possible (``2``, ``true``,
    ``"text"``) and as plain strings otherwise.
    """
    merged = _deep_copy(raw)
    for override in overrides:
        dotted, sep, raw_value = override.partition("=")
        dotted = dotted.strip()
        if not sep or not dotted:
            raise AppConfigurationError(
                f"Setting override must look like section.key=value, got: {override!r}"
            )

        *tables, key = dotted.split(".")
        if not tables:
            raise AppConfigurationError(
                f"Setting override must name a section, got: {dotted!r}"
            )

        target = merged
        for table in tables:
            child = target.setdefault(table, {})
            if not isinstance(child, dict):
                raise AppConfigurationError(f"[{table}] must be a table.")
            target = child
        target[key] = _parse_override_value(raw_value.strip())
    return merged


def _parse_override_value(text: str) -> Any:
    try:
        return tomllib.loads(f"value = {text}")["value"]
    except tomllib.TOMLDecodeError:
        return text


def _deep_copy(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: _deep_copy(value) if isinstance(value, Mapping) else value
        for key, value in raw.items()
    }
