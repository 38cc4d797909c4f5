"""Typed parser for pomocom.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    ALLOWED_COLOR_NAMES,
    ALLOWED_INTERFACES,
    AppConfig,
    AppConfigurationError,
    ColorPairSettings,
    CursesSettings,
    KeySettings,
    PathSettings,
    TimerSettings,
    UIServerSettings,
)

_COLOR_PAIR_NAMES = ("pomocom", "section_work", "section_break", "time")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    keys = _parse_key_settings(_section(raw, "keys"))
    paths = _parse_path_settings(_section(raw, "paths"), base_dir=base_dir)
    curses = _parse_curses_settings(_section(raw, "curses"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        timer=timer,
        keys=keys,
        paths=paths,
        curses=curses,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    defaults = TimerSettings()
    interface = _as_str(section.get("interface", defaults.interface), "timer.interface").lower()
    if interface not in ALLOWED_INTERFACES:
        allowed = ", ".join(sorted(ALLOWED_INTERFACES))
        raise AppConfigurationError(f"timer.interface must be one of: {allowed}.")

    update_interval = _as_float(
        section.get("update_interval", defaults.update_interval),
        "timer.update_interval",
    )
    if update_interval <= 0:
        raise AppConfigurationError(
            f"timer.update_interval must be greater than zero, got: {update_interval}"
        )

    breaks_until_long_reset = _as_int(
        section.get("breaks_until_long_reset", defaults.breaks_until_long_reset),
        "timer.breaks_until_long_reset",
    )
    if breaks_until_long_reset < 0:
        raise AppConfigurationError(
            "timer.breaks_until_long_reset must be zero or greater, "
            f"got: {breaks_until_long_reset}"
        )

    return TimerSettings(
        interface=interface,
        update_interval=update_interval,
        pause_before_section_start=_as_bool(
            section.get("pause_before_section_start", defaults.pause_before_section_start),
            "timer.pause_before_section_start",
        ),
        breaks_until_long_reset=breaks_until_long_reset,
        set_terminal_title=_as_bool(
            section.get("set_terminal_title", defaults.set_terminal_title),
            "timer.set_terminal_title",
        ),
        show_controls=_as_bool(
            section.get("show_controls", defaults.show_controls),
            "timer.show_controls",
        ),
    )


def _parse_key_settings(section: Mapping[str, Any]) -> KeySettings:
    defaults = KeySettings()
    return KeySettings(
        quit=_as_key(section.get("quit", defaults.quit), "keys.quit"),
        pause=_as_key(section.get("pause", defaults.pause), "keys.pause"),
        section_begin=_as_key(
            section.get("section_begin", defaults.section_begin),
            "keys.section_begin",
        ),
        section_skip=_as_key(
            section.get("section_skip", defaults.section_skip),
            "keys.section_skip",
        ),
    )


def _parse_path_settings(section: Mapping[str, Any], *, base_dir: Path) -> PathSettings:
    defaults = PathSettings()
    sections_dir = _as_str(section.get("sections", ""), "paths.sections")
    bin_dir = _as_str(section.get("bin", ""), "paths.bin")
    return PathSettings(
        sections=_resolve_path(base_dir, sections_dir) if sections_dir else defaults.sections,
        bin=_resolve_path(base_dir, bin_dir) if bin_dir else defaults.bin,
    )


def _parse_curses_settings(section: Mapping[str, Any]) -> CursesSettings:
    colors = _section(section, "colors", parent="curses")
    defaults = CursesSettings()
    pairs = {}
    for name in _COLOR_PAIR_NAMES:
        default_pair: ColorPairSettings = getattr(defaults, name)
        raw_pair = _section(colors, name, parent="curses.colors")
        pairs[name] = ColorPairSettings(
            fg=_as_color(raw_pair.get("fg", default_pair.fg), f"curses.colors.{name}.fg"),
            bg=_as_color(raw_pair.get("bg", default_pair.bg), f"curses.colors.{name}.bg"),
        )
    return CursesSettings(**pairs)


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(
    root: Mapping[str, Any],
    name: str,
    *,
    parent: str = "",
) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        qualified = f"{parent}.{name}" if parent else name
        raise AppConfigurationError(f"[{qualified}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_key(value: Any, field: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise AppConfigurationError(f"{field} must be a single character.")
    return value


def _as_color(value: Any, field: str) -> str:
    name = _as_str(value, field).lower()
    if name not in ALLOWED_COLOR_NAMES:
        allowed = ", ".join(ALLOWED_COLOR_NAMES)
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
