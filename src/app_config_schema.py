"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_DIR = Path("~/.config/pomocom")
DEFAULT_CONFIG_FILE = "pomocom.toml"

INTERFACE_ANSI = "ansi"
INTERFACE_CURSES = "curses"
INTERFACE_WEB = "web"
ALLOWED_INTERFACES: frozenset[str] = frozenset(
    {INTERFACE_ANSI, INTERFACE_CURSES, INTERFACE_WEB}
)

# Color names accepted in `[curses.colors.*]`; "default" keeps the terminal color.
ALLOWED_COLOR_NAMES: tuple[str, ...] = (
    "default",
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Timing behaviour loaded from `[timer]`."""
    interface: str = INTERFACE_CURSES
    update_interval: float = 1.0
    pause_before_section_start: bool = False
    breaks_until_long_reset: int = 3
    set_terminal_title: bool = True
    show_controls: bool = False


@dataclass(frozen=True)
class KeySettings:
    """Single-character key bindings loaded from `[keys]`."""
    quit: str = "q"
    pause: str = "j"
    section_begin: str = "j"
    section_skip: str = "k"


@dataclass(frozen=True)
class PathSettings:
    """Directories holding pomo files and `+` transition scripts."""
    sections: str = str(DEFAULT_CONFIG_DIR.expanduser())
    bin: str = str(DEFAULT_CONFIG_DIR.expanduser())


@dataclass(frozen=True)
class ColorPairSettings:
    fg: str = "default"
    bg: str = "default"


@dataclass(frozen=True)
class CursesSettings:
    """Color pairs for the curses interface, loaded from `[curses.colors.*]`."""
    pomocom: ColorPairSettings = field(default_factory=ColorPairSettings)
    section_work: ColorPairSettings = field(
        default_factory=lambda: ColorPairSettings(fg="red")
    )
    section_break: ColorPairSettings = field(
        default_factory=lambda: ColorPairSettings(fg="green")
    )
    time: ColorPairSettings = field(default_factory=ColorPairSettings)


@dataclass(frozen=True)
class UIServerSettings:
    """Browser interface server loaded from `[ui_server]`."""
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    timer: TimerSettings
    keys: KeySettings
    paths: PathSettings
    curses: CursesSettings
    ui_server: UIServerSettings
    source_file: str
