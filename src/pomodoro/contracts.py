"""Protocols for the collaborators the section controller talks to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from .sections import Section, SectionInfo

ControlEvent = Literal[
    "pause",
    "resume",
    "begin",
    "skip",
    "quit",
    "resize",
    "tick",
    "no_input",
]
ControllerPhase = Literal["armed", "running", "paused", "finished"]
SectionOutcome = Literal["completed", "skipped", "quit"]


@dataclass(frozen=True)
class SectionUpdate:
    """Snapshot of the active section handed to presentation sinks."""
    section: Section
    name: str
    minutes: int
    seconds: int
    paused: bool


class InputSource(Protocol):
    """Yields control events; ``timeout=None`` waits until an event arrives."""
    def poll(self, timeout: Optional[float], phase: ControllerPhase) -> ControlEvent:
        ...


class Presentation(Protocol):
    """Renders timer state; never mutates it."""
    def begin_section(self, section: Section, info: SectionInfo) -> None:
        ...

    def show_upcoming(self, section: Section, info: SectionInfo) -> None:
        ...

    def render(self, update: SectionUpdate, *, redraw: bool = False) -> None:
        ...


class CommandRunner(Protocol):
    """Runs a section transition command and returns its exit status."""
    def run(self, command: str) -> int:
        ...


class SectionSource(Protocol):
    def __getitem__(self, section: Section) -> SectionInfo:
        ...


@dataclass(frozen=True)
class SectionResult:
    """How one section ended and which section comes next."""
    outcome: SectionOutcome
    section: Section
    next_section: Optional[Section] = None

    @property
    def quit(self) -> bool:
        return self.outcome == "quit"
