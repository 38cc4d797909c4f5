"""Runtime loop that runs timing sections back to back until the user quits."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Optional

from pomodoro import SectionController, SectionResult


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable callbacks around the section loop lifecycle."""
    on_section_result: Optional[Callable[[SectionResult], None]] = None
    on_shutdown: Optional[Callable[[], None]] = None


@dataclass
class RuntimeStats:
    """Per-run tally of how sections ended, keyed by section and outcome."""
    outcomes: Counter = field(default_factory=Counter)

    def record(self, result: SectionResult) -> None:
        self.outcomes[(result.section.value, result.outcome)] += 1

    def count(self, section: str, outcome: str) -> int:
        return self.outcomes[(section, outcome)]


class RuntimeEngine:
    """Owns the control loop: one section at a time, strictly in order."""
    def __init__(
        self,
        controller: SectionController,
        *,
        hooks: Optional[RuntimeHooks] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._controller = controller
        self._hooks = hooks or RuntimeHooks()
        self._logger = logger or logging.getLogger("runtime")
        self._stats = RuntimeStats()

    @property
    def stats(self) -> RuntimeStats:
        return self._stats

    def run(self) -> int:
        try:
            while True:
                result = self._controller.run_section()
                self._stats.record(result)
                if self._hooks.on_section_result is not None:
                    self._hooks.on_section_result(result)
                if result.quit:
                    self._logger.info("Timer stopped by user request.")
                    return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._logger.info(
                "Work sections completed: %d, skipped: %d",
                self._stats.count("work", "completed"),
                self._stats.count("work", "skipped"),
            )
            if self._hooks.on_shutdown is not None:
                self._hooks.on_shutdown()
