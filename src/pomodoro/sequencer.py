"""Pure next-section decision logic driven by the long-break cadence."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import DEFAULT_BREAKS_UNTIL_LONG_RESET
from .errors import SectionConfigurationError
from .sections import Section


@dataclass(frozen=True)
class SequencerState:
    current_section: Section
    breaks_until_long: int


def initial_state(
    breaks_until_long_reset: int,
    *,
    start_section: Section = Section.WORK,
) -> SequencerState:
    return SequencerState(
        current_section=start_section,
        breaks_until_long=breaks_until_long_reset,
    )


def advance(state: SequencerState, breaks_until_long_reset: int) -> SequencerState:
    """Return the state after the current section ends.

    A work section is followed by a long break once the counter has reached
    zero (the counter is then reset), otherwise by a short break (the counter
    is decremented). Any break is followed by work.
    """
    if state.current_section is not Section.WORK:
        return replace(state, current_section=Section.WORK)

    if state.breaks_until_long <= 0:
        return SequencerState(
            current_section=Section.LONG_BREAK,
            breaks_until_long=breaks_until_long_reset,
        )
    return SequencerState(
        current_section=Section.BREAK,
        breaks_until_long=state.breaks_until_long - 1,
    )


class SectionSequencer:
    """Owns the ``SequencerState`` of a run and applies ``advance`` to it."""

    def __init__(
        self,
        *,
        breaks_until_long_reset: int = DEFAULT_BREAKS_UNTIL_LONG_RESET,
        start_section: Section = Section.WORK,
    ):
        if breaks_until_long_reset < 0:
            raise SectionConfigurationError(
                "breaks_until_long_reset must be zero or greater, "
                f"got: {breaks_until_long_reset}"
            )
        self._reset = int(breaks_until_long_reset)
        self._state = initial_state(self._reset, start_section=start_section)

    @property
    def current_section(self) -> Section:
        return self._state.current_section

    @property
    def breaks_until_long(self) -> int:
        return self._state.breaks_until_long

    def advance(self) -> Section:
        self._state = advance(self._state, self._reset)
        return self._state.current_section
