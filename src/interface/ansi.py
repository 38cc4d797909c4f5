"""Plain terminal presentation built on ANSI escape codes."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from pomodoro import Section, SectionInfo, SectionUpdate
from pomodoro.constants import PHASE_ARMED, PHASE_PAUSED, PHASE_RUNNING

from .keys import KeyBindings

CLEAR_SCREEN = "\033[2J\033[0;0H"
CLEAR_LINE = "\r\033[K"
PAUSED_SUFFIX = " (paused)"


def format_time_left(minutes: int, seconds: int) -> str:
    return f"{minutes}m {seconds}s"


class AnsiPresentation:
    """Three-line display: header, section name, and time left.

    Only the time line is rewritten on ordinary updates; a redraw repaints
    the whole screen.
    """

    def __init__(
        self,
        *,
        file_name: str,
        bindings: Optional[KeyBindings] = None,
        show_controls: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self._file_name = file_name
        self._bindings = bindings
        self._show_controls = show_controls and bindings is not None
        self._stream = stream or sys.stdout
        self._info: Optional[SectionInfo] = None
        self._header_phase: Optional[str] = None

    def begin_section(self, section: Section, info: SectionInfo) -> None:
        del section
        self._info = info
        self._write_header(info.name, PHASE_RUNNING)

    def show_upcoming(self, section: Section, info: SectionInfo) -> None:
        del section
        self._info = None
        out = self._stream
        out.write(CLEAR_SCREEN)
        out.write(f"pomocom: {self._file_name}\n")
        out.write(f"next up: {info.name} ({info.minutes_part}m{info.seconds_part}s)\n")
        if self._bindings is not None:
            out.write(f"press {self._bindings.keys.section_begin} to begin.\n")
        if self._show_controls:
            out.write(self._bindings.controls_hint(PHASE_ARMED) + "\n")
        out.flush()

    def render(self, update: SectionUpdate, *, redraw: bool = False) -> None:
        phase = PHASE_PAUSED if update.paused else PHASE_RUNNING
        # The controls hint depends on the pause state.
        hint_changed = self._show_controls and phase != self._header_phase
        if redraw or self._info is None or hint_changed:
            self._write_header(update.name, phase)

        out = self._stream
        out.write(CLEAR_LINE)
        out.write(format_time_left(update.minutes, update.seconds))
        if update.paused:
            out.write(PAUSED_SUFFIX)
        out.flush()

    def _write_header(self, name: str, phase: str) -> None:
        self._header_phase = phase
        out = self._stream
        out.write(CLEAR_SCREEN)
        out.write(f"pomocom: {self._file_name}\n")
        if self._show_controls:
            out.write(self._bindings.controls_hint(phase) + "\n")
        out.write(f"{name}\n")
