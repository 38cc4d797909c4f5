"""Full-screen curses interface: presentation and key input in one window."""

from __future__ import annotations

import contextlib
import curses
import logging
import math
from typing import Any, Iterator, Optional

from app_config import ColorPairSettings, CursesSettings
from pomodoro import (
    ControlEvent,
    ControllerPhase,
    InputSourceError,
    Section,
    SectionInfo,
    SectionUpdate,
)
from pomodoro.constants import EVENT_RESIZE, EVENT_TICK, PHASE_ARMED, PHASE_PAUSED, PHASE_RUNNING

from .ansi import PAUSED_SUFFIX, format_time_left
from .errors import InterfaceError
from .keys import KeyBindings

# Pair ids start at 1; pair 0 is fixed once default colors are in use.
CP_POMOCOM = 1
CP_SECTION_WORK = 2
CP_SECTION_BREAK = 3
CP_TIME = 4

COLOR_NUMBERS: dict[str, int] = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}


class CursesInterface:
    """Curses screen acting as both the presentation sink and the input source."""

    def __init__(
        self,
        *,
        file_name: str,
        bindings: KeyBindings,
        colors: CursesSettings,
        show_controls: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self._file_name = file_name
        self._bindings = bindings
        self._colors = colors
        self._show_controls = show_controls
        self._logger = logger or logging.getLogger("interface.curses")
        self._screen: Any = None
        self._section: Section = Section.WORK

    def __enter__(self) -> "CursesInterface":
        try:
            self._screen = curses.initscr()
            curses.cbreak()
            curses.noecho()
            self._screen.keypad(True)
            with _curses_step("hide cursor"):
                curses.curs_set(0)
            curses.start_color()
            curses.use_default_colors()
            self._init_pair(CP_POMOCOM, self._colors.pomocom)
            self._init_pair(CP_SECTION_WORK, self._colors.section_work)
            self._init_pair(CP_SECTION_BREAK, self._colors.section_break)
            self._init_pair(CP_TIME, self._colors.time)
        except curses.error as error:
            self._restore()
            raise InterfaceError(f"Failed to initialize curses: {error}") from error
        height, width = self._screen.getmaxyx()
        self._logger.debug("Curses screen initialized (%dx%d)", width, height)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()

    def begin_section(self, section: Section, info: SectionInfo) -> None:
        self._section = section
        screen = self._require_screen()
        screen.clear()
        self._print_header()
        self._print_section_name(info.name)

    def show_upcoming(self, section: Section, info: SectionInfo) -> None:
        self._section = section
        screen = self._require_screen()
        screen.clear()
        self._print_header()
        self._addstr(
            1,
            f"next up: {info.name} ({info.minutes_part}m{info.seconds_part}s)",
            self._section_attr(),
        )
        self._addstr(
            2,
            f"press {self._bindings.keys.section_begin} to begin.",
            curses.color_pair(CP_TIME),
        )
        self._print_controls(PHASE_ARMED, row=3)
        screen.refresh()

    def render(self, update: SectionUpdate, *, redraw: bool = False) -> None:
        screen = self._require_screen()
        self._section = update.section
        if redraw:
            screen.clear()
            self._print_header()
            self._print_section_name(update.name)

        text = format_time_left(update.minutes, update.seconds)
        if update.paused:
            text += PAUSED_SUFFIX
        screen.move(2, 0)
        screen.clrtoeol()
        self._addstr(2, text, curses.color_pair(CP_TIME))
        self._print_controls(PHASE_PAUSED if update.paused else PHASE_RUNNING, row=3)
        screen.refresh()

    def poll(self, timeout: Optional[float], phase: ControllerPhase) -> ControlEvent:
        screen = self._require_screen()
        screen.timeout(_timeout_millis(timeout))
        try:
            key = screen.getch()
        except curses.error as error:
            raise InputSourceError(f"Reading curses input failed: {error}") from error

        if key == -1:
            return EVENT_TICK
        if key == curses.KEY_RESIZE:
            # Keep a burst of resize notifications from queueing up.
            curses.flushinp()
            return EVENT_RESIZE
        if 0 <= key < 0x110000:
            return self._bindings.event_for(chr(key), phase)
        return self._bindings.event_for("", phase)

    def _print_header(self) -> None:
        self._addstr(0, f"pomocom: {self._file_name}", curses.color_pair(CP_POMOCOM))

    def _print_section_name(self, name: str) -> None:
        self._addstr(1, name, self._section_attr())

    def _print_controls(self, phase: ControllerPhase, *, row: int) -> None:
        if not self._show_controls:
            return
        screen = self._require_screen()
        screen.move(row, 0)
        screen.clrtoeol()
        self._addstr(row, self._bindings.controls_hint(phase), curses.A_DIM)

    def _section_attr(self) -> int:
        pair = CP_SECTION_WORK if self._section is Section.WORK else CP_SECTION_BREAK
        return curses.color_pair(pair)

    def _addstr(self, row: int, text: str, attr: int = 0) -> None:
        screen = self._require_screen()
        # Writing past the last column of a small window raises; clip instead.
        _, width = screen.getmaxyx()
        with _curses_step("draw text"):
            screen.addstr(row, 0, text[: max(0, width - 1)], attr)

    def _init_pair(self, pair: int, colors: ColorPairSettings) -> None:
        curses.init_pair(pair, COLOR_NUMBERS[colors.fg], COLOR_NUMBERS[colors.bg])

    def _require_screen(self) -> Any:
        if self._screen is None:
            raise RuntimeError("Curses interface is not active")
        return self._screen

    def _restore(self) -> None:
        if self._screen is None:
            return
        with _curses_step("restore terminal"):
            self._screen.keypad(False)
            curses.nocbreak()
            curses.echo()
            curses.endwin()
        self._screen = None


def _timeout_millis(timeout: Optional[float]) -> int:
    """Round a poll timeout up to whole milliseconds so getch never wakes early."""
    if timeout is None:
        return -1
    if timeout <= 0:
        return 0
    return max(1, math.ceil(timeout * 1000))


@contextlib.contextmanager
def _curses_step(label: str) -> Iterator[None]:
    """Tolerate `curses.error` from cosmetic calls some terminals do not support."""
    try:
        yield
    except curses.error as error:
        logging.getLogger("interface.curses").debug("curses %s failed: %s", label, error)
