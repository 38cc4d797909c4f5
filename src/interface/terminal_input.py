"""Keyboard input source for the plain terminal interface."""

from __future__ import annotations

import contextlib
import logging
import os
import select
import signal
import sys
import termios
import tty
from typing import Optional, TextIO

from pomodoro import ControlEvent, ControllerPhase, InputSourceError
from pomodoro.constants import EVENT_RESIZE, EVENT_TICK

from .keys import KeyBindings


class TerminalInput:
    """Reads single key presses from a terminal without waiting for Enter.

    ``poll`` waits on stdin and on a wake-up pipe written by the SIGWINCH
    handler, so a terminal resize ends the wait early as a ``resize`` event.
    """

    def __init__(
        self,
        bindings: KeyBindings,
        *,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._bindings = bindings
        self._stream = stream or sys.stdin
        self._logger = logger or logging.getLogger("interface.terminal_input")
        self._fd = self._stream.fileno()
        self._saved_attrs: Optional[list] = None
        self._resize_r: Optional[int] = None
        self._resize_w: Optional[int] = None
        self._previous_winch = None

    def __enter__(self) -> "TerminalInput":
        if os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        else:
            self._logger.warning("stdin is not a terminal; key controls are unavailable")

        self._resize_r, self._resize_w = os.pipe()
        os.set_blocking(self._resize_w, False)
        if hasattr(signal, "SIGWINCH"):
            self._previous_winch = signal.signal(signal.SIGWINCH, self._on_resize)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._previous_winch is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch)
            self._previous_winch = None
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        for fd in (self._resize_r, self._resize_w):
            if fd is not None:
                with contextlib.suppress(OSError):
                    os.close(fd)
        self._resize_r = self._resize_w = None

    def poll(self, timeout: Optional[float], phase: ControllerPhase) -> ControlEvent:
        watched = [self._fd]
        if self._resize_r is not None:
            watched.append(self._resize_r)

        try:
            readable, _, _ = select.select(watched, [], [], timeout)
        except (OSError, ValueError) as error:
            raise InputSourceError(f"Waiting for terminal input failed: {error}") from error

        if not readable:
            return EVENT_TICK

        if self._resize_r is not None and self._resize_r in readable:
            _drain_pipe(self._resize_r)
            return EVENT_RESIZE

        try:
            data = os.read(self._fd, 1)
        except OSError as error:
            raise InputSourceError(f"Reading terminal input failed: {error}") from error
        if not data:
            raise InputSourceError("stdin reached end of file")

        key = data.decode("utf-8", errors="replace")
        return self._bindings.event_for(key, phase)

    def _on_resize(self, signum, frame) -> None:
        del signum, frame
        if self._resize_w is not None:
            with contextlib.suppress(OSError):
                os.write(self._resize_w, b"\0")


def _drain_pipe(fd: int) -> None:
    os.set_blocking(fd, False)
    with contextlib.suppress(BlockingIOError):
        while os.read(fd, 64):
            pass
