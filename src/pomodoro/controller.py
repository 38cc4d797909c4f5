"""Section controller: runs one timing section against an input source."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .constants import (
    CONTROL_EVENTS,
    DEFAULT_UPDATE_INTERVAL_SECONDS,
    EVENT_BEGIN,
    EVENT_NO_INPUT,
    EVENT_QUIT,
    EVENT_RESIZE,
    EVENT_RESUME,
    EVENT_PAUSE,
    EVENT_SKIP,
    OUTCOME_COMPLETED,
    OUTCOME_QUIT,
    OUTCOME_SKIPPED,
    PHASE_ARMED,
    PHASE_FINISHED,
    PHASE_PAUSED,
    PHASE_RUNNING,
)
from .contracts import (
    CommandRunner,
    ControlEvent,
    ControllerPhase,
    InputSource,
    Presentation,
    SectionOutcome,
    SectionResult,
    SectionSource,
    SectionUpdate,
)
from .countdown import Countdown
from .errors import InputSourceError, SectionConfigurationError
from .sections import Section, SectionInfo
from .sequencer import SectionSequencer


class SectionController:
    """Drives the live countdown of the current section.

    ``run_section`` blocks until the section ends. It returns a
    ``SectionResult`` describing whether time ran out, the user skipped, or
    the user quit. Only completed and skipped sections advance the sequencer
    and run the next section's transition command, exactly once each.
    """

    def __init__(
        self,
        *,
        sections: SectionSource,
        sequencer: SectionSequencer,
        input_source: InputSource,
        presentation: Presentation,
        command_runner: CommandRunner,
        update_interval: float = DEFAULT_UPDATE_INTERVAL_SECONDS,
        pause_before_section_start: bool = False,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if update_interval <= 0:
            raise SectionConfigurationError(
                f"update_interval must be greater than zero, got: {update_interval}"
            )

        self._sections = sections
        self._sequencer = sequencer
        self._input = input_source
        self._presentation = presentation
        self._command_runner = command_runner
        self._update_interval = float(update_interval)
        self._pause_before_start = pause_before_section_start
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._logger = logger or logging.getLogger("pomodoro")

        self._phase: ControllerPhase = PHASE_FINISHED
        self._countdown: Optional[Countdown] = None

    @property
    def phase(self) -> ControllerPhase:
        return self._phase

    @property
    def countdown(self) -> Optional[Countdown]:
        return self._countdown

    @property
    def current_section(self) -> Section:
        return self._sequencer.current_section

    def run_section(self) -> SectionResult:
        section = self._sequencer.current_section
        info = self._sections[section]

        if self._pause_before_start:
            event = self._hold_armed(section, info)
            if event == EVENT_QUIT:
                return self._quit(section)
            if event == EVENT_SKIP:
                return self._finish(section, OUTCOME_SKIPPED)

        return self._run_countdown(section, info)

    def _hold_armed(self, section: Section, info: SectionInfo) -> ControlEvent:
        self._phase = PHASE_ARMED
        self._countdown = None
        self._logger.info(
            "Waiting to begin section: %s (%ss)", info.name, info.seconds
        )
        self._presentation.show_upcoming(section, info)

        while True:
            event = self._poll(None)
            if event in (EVENT_BEGIN, EVENT_SKIP, EVENT_QUIT):
                return event
            if event == EVENT_RESIZE:
                self._presentation.show_upcoming(section, info)

    def _run_countdown(self, section: Section, info: SectionInfo) -> SectionResult:
        countdown = Countdown.begin(info.seconds, self._clock())
        self._countdown = countdown
        self._phase = PHASE_RUNNING
        self._logger.info(
            "Section started: %s (%ss)", info.name, info.seconds
        )
        self._presentation.begin_section(section, info)

        while True:
            now = self._clock()
            if countdown.is_expired(now):
                return self._finish(section, OUTCOME_COMPLETED)

            self._presentation.render(self._snapshot(section, info, now))
            result = self._wait_for_next_update(section, info, tick_started=now)
            if result is not None:
                return result

    def _wait_for_next_update(
        self,
        section: Section,
        info: SectionInfo,
        *,
        tick_started: float,
    ) -> Optional[SectionResult]:
        """Wait out one update interval, reacting to events that arrive early.

        Returns a result when the section ended, ``None`` when the next
        update is due.
        """
        countdown = self._require_countdown()
        next_update = tick_started + self._update_interval

        while True:
            now = self._clock()
            wait = min(next_update, countdown.end) - now
            if wait <= 0:
                return None

            event = self._poll(wait)
            if event == EVENT_PAUSE:
                return self._hold_paused(section, info)
            if event == EVENT_SKIP:
                return self._finish(section, OUTCOME_SKIPPED)
            if event == EVENT_QUIT:
                return self._quit(section)
            if event == EVENT_RESIZE:
                self._presentation.render(
                    self._snapshot(section, info, self._clock()),
                    redraw=True,
                )
            # A tick only means the poll timed out. Sources may wake a little
            # early, so the deadline check above decides when the update is due.

    def _hold_paused(self, section: Section, info: SectionInfo) -> Optional[SectionResult]:
        countdown = self._require_countdown()
        countdown.pause(self._clock())
        self._phase = PHASE_PAUSED
        self._logger.info(
            "Section paused: %s remaining=%ss",
            info.name,
            countdown.remaining_seconds(self._clock()),
        )
        self._presentation.render(self._snapshot(section, info, self._clock()))

        while True:
            event = self._poll(None)
            if event == EVENT_RESUME:
                countdown.resume(self._clock())
                self._phase = PHASE_RUNNING
                self._logger.info("Section resumed: %s", info.name)
                return None
            if event == EVENT_SKIP:
                return self._finish(section, OUTCOME_SKIPPED)
            if event == EVENT_QUIT:
                return self._quit(section)
            if event == EVENT_RESIZE:
                self._presentation.render(
                    self._snapshot(section, info, self._clock()),
                    redraw=True,
                )

    def _finish(self, section: Section, outcome: SectionOutcome) -> SectionResult:
        self._phase = PHASE_FINISHED
        self._countdown = None

        next_section = self._sequencer.advance()
        next_info = self._sections[next_section]
        self._logger.info(
            "Section %s: %s -> %s (breaks until long: %d)",
            outcome,
            section.value,
            next_section.value,
            self._sequencer.breaks_until_long,
        )
        try:
            self._command_runner.run(next_info.command)
        except Exception as error:
            self._logger.error(
                "Section command %r failed: %s",
                next_info.command,
                error,
                exc_info=True,
            )
        return SectionResult(outcome=outcome, section=section, next_section=next_section)

    def _quit(self, section: Section) -> SectionResult:
        self._phase = PHASE_FINISHED
        self._countdown = None
        self._logger.info("Quit requested during section: %s", section.value)
        return SectionResult(outcome=OUTCOME_QUIT, section=section)

    def _poll(self, timeout: Optional[float]) -> ControlEvent:
        try:
            event = self._input.poll(timeout, self._phase)
        except (InputSourceError, OSError) as error:
            self._logger.warning("Input poll failed, continuing without input: %s", error)
            self._sleep(timeout if timeout is not None else self._update_interval)
            return EVENT_NO_INPUT

        if event not in CONTROL_EVENTS:
            self._logger.debug("Ignoring unknown control event: %r", event)
            return EVENT_NO_INPUT
        return event

    def _snapshot(self, section: Section, info: SectionInfo, now: float) -> SectionUpdate:
        countdown = self._require_countdown()
        remaining = countdown.remaining(now)
        return SectionUpdate(
            section=section,
            name=info.name,
            minutes=remaining.minutes,
            seconds=remaining.seconds,
            paused=countdown.is_paused,
        )

    def _require_countdown(self) -> Countdown:
        if self._countdown is None:
            raise RuntimeError("No section countdown is active")
        return self._countdown
