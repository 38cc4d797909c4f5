"""Phase, event, and outcome constants used by the section state machine."""

from __future__ import annotations

DEFAULT_UPDATE_INTERVAL_SECONDS = 1.0
DEFAULT_BREAKS_UNTIL_LONG_RESET = 3

SECTION_INFO_NAME_LEN = 100
SECTION_INFO_CMD_LEN = 100

PHASE_ARMED = "armed"
PHASE_RUNNING = "running"
PHASE_PAUSED = "paused"
PHASE_FINISHED = "finished"

EVENT_PAUSE = "pause"
EVENT_RESUME = "resume"
EVENT_BEGIN = "begin"
EVENT_SKIP = "skip"
EVENT_QUIT = "quit"
EVENT_RESIZE = "resize"
EVENT_TICK = "tick"
EVENT_NO_INPUT = "no_input"

CONTROL_EVENTS: frozenset[str] = frozenset(
    {
        EVENT_PAUSE,
        EVENT_RESUME,
        EVENT_BEGIN,
        EVENT_SKIP,
        EVENT_QUIT,
        EVENT_RESIZE,
        EVENT_TICK,
        EVENT_NO_INPUT,
    }
)

OUTCOME_COMPLETED = "completed"
OUTCOME_SKIPPED = "skipped"
OUTCOME_QUIT = "quit"

# Status reported when a transition command cannot be spawned (shell convention).
COMMAND_NOT_RUN_STATUS = 127
