"""Section identifiers and the per-section metadata table."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping

from .errors import SectionConfigurationError


class Section(Enum):
    WORK = "work"
    BREAK = "break"
    LONG_BREAK = "long_break"


# Order in which sections appear in pomo files and quick-setup arguments.
SECTION_ORDER: tuple[Section, ...] = (Section.WORK, Section.BREAK, Section.LONG_BREAK)


@dataclass(frozen=True)
class SectionInfo:
    """Display name, transition command, and nominal duration of a section."""
    name: str
    command: str
    seconds: int

    @property
    def minutes_part(self) -> int:
        return self.seconds // 60

    @property
    def seconds_part(self) -> int:
        return self.seconds % 60


class SectionTable:
    """Immutable lookup of ``SectionInfo`` for all three sections."""

    def __init__(self, infos: Mapping[Section, SectionInfo], *, source: str = ""):
        missing = [section.value for section in SECTION_ORDER if section not in infos]
        if missing:
            raise SectionConfigurationError(
                f"Missing section metadata for: {', '.join(missing)}"
            )
        self._infos = {section: infos[section] for section in SECTION_ORDER}
        self._source = source

    @property
    def source(self) -> str:
        """Name of the pomo file the table was loaded from, if any."""
        return self._source

    def __getitem__(self, section: Section) -> SectionInfo:
        return self._infos[section]

    def validate(self) -> None:
        for section, info in self._infos.items():
            if info.seconds <= 0:
                raise SectionConfigurationError(
                    f"Section '{section.value}' ({info.name!r}) must last longer "
                    f"than zero seconds, got: {info.seconds}"
                )

    def with_durations(self, minutes: tuple[int, int, int]) -> "SectionTable":
        """Return a copy with each section's duration replaced, in pomo-file order."""
        infos = {
            section: replace(self._infos[section], seconds=int(mins) * 60)
            for section, mins in zip(SECTION_ORDER, minutes)
        }
        return SectionTable(infos, source=self._source)
