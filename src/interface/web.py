"""Browser interface: publishes timer screens and queues page commands."""

from __future__ import annotations

import logging
from queue import Empty, Queue
from typing import Any, Optional, Protocol

from contracts.ui_protocol import (
    EVENT_GOODBYE,
    EVENT_SECTION,
    EVENT_UPCOMING,
    STATE_ARMED,
    STATE_PAUSED,
    STATE_RUNNING,
    STATE_STOPPED,
)
from pomodoro import ControlEvent, ControllerPhase, Section, SectionInfo, SectionUpdate
from pomodoro.constants import CONTROL_EVENTS, EVENT_TICK


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class CommandQueueInput:
    """Input source fed by commands arriving from the browser page."""

    def __init__(self, *, logger: Optional[logging.Logger] = None):
        self._queue: Queue[str] = Queue()
        self._logger = logger or logging.getLogger("interface.web")

    def submit(self, command: str) -> None:
        """Called from the server thread for each command a page sends."""
        if command not in CONTROL_EVENTS:
            self._logger.debug("Dropping unknown command: %r", command)
            return
        self._queue.put(command)

    def poll(self, timeout: Optional[float], phase: ControllerPhase) -> ControlEvent:
        del phase  # Page commands are already phase-specific.
        try:
            return self._queue.get(timeout=timeout)  # type: ignore[return-value]
        except Empty:
            return EVENT_TICK


class WebPresentation:
    """Publishes section screens to connected browser pages."""

    def __init__(self, ui_server: UIServerLike, *, file_name: str):
        self._ui_server = ui_server
        self._file_name = file_name

    def begin_section(self, section: Section, info: SectionInfo) -> None:
        self._ui_server.publish(
            EVENT_SECTION,
            file=self._file_name,
            state=STATE_RUNNING,
            section=section.value,
            name=info.name,
            minutes=info.minutes_part,
            seconds=info.seconds_part,
            paused=False,
        )

    def show_upcoming(self, section: Section, info: SectionInfo) -> None:
        self._ui_server.publish(
            EVENT_UPCOMING,
            file=self._file_name,
            state=STATE_ARMED,
            section=section.value,
            name=info.name,
            minutes=info.minutes_part,
            seconds=info.seconds_part,
        )

    def render(self, update: SectionUpdate, *, redraw: bool = False) -> None:
        del redraw  # Every message carries the full screen.
        self._ui_server.publish(
            EVENT_SECTION,
            file=self._file_name,
            state=STATE_PAUSED if update.paused else STATE_RUNNING,
            section=update.section.value,
            name=update.name,
            minutes=update.minutes,
            seconds=update.seconds,
            paused=update.paused,
        )

    def goodbye(self) -> None:
        self._ui_server.publish(EVENT_GOODBYE, file=self._file_name, state=STATE_STOPPED)
