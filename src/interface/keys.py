"""Translate pressed keys into control events for the current phase."""

from __future__ import annotations

from app_config import KeySettings
from pomodoro import ControlEvent, ControllerPhase
from pomodoro.constants import (
    EVENT_BEGIN,
    EVENT_NO_INPUT,
    EVENT_PAUSE,
    EVENT_QUIT,
    EVENT_RESUME,
    EVENT_SKIP,
    PHASE_ARMED,
    PHASE_PAUSED,
    PHASE_RUNNING,
)


class KeyBindings:
    """Phase-aware key map.

    The pause key toggles: it pauses a running section and resumes a paused
    one. The begin key only means something while a section is armed, so it
    may share a key with pause (the default binds both to ``j``).
    """

    def __init__(self, keys: KeySettings):
        self._keys = keys

    @property
    def keys(self) -> KeySettings:
        return self._keys

    def event_for(self, key: str, phase: ControllerPhase) -> ControlEvent:
        if key == self._keys.quit:
            return EVENT_QUIT
        if key == self._keys.section_skip:
            return EVENT_SKIP
        if phase == PHASE_ARMED and key == self._keys.section_begin:
            return EVENT_BEGIN
        if key == self._keys.pause:
            if phase == PHASE_RUNNING:
                return EVENT_PAUSE
            if phase == PHASE_PAUSED:
                return EVENT_RESUME
        return EVENT_NO_INPUT

    def controls_hint(self, phase: ControllerPhase) -> str:
        keys = self._keys
        if phase == PHASE_ARMED:
            return (
                f"{keys.section_begin}: begin  {keys.section_skip}: skip  "
                f"{keys.quit}: quit"
            )
        pause_label = "resume" if phase == PHASE_PAUSED else "pause"
        return (
            f"{keys.pause}: {pause_label}  {keys.section_skip}: skip  "
            f"{keys.quit}: quit"
        )
