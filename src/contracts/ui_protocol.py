"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Server -> browser event types
EVENT_HELLO = "hello"
EVENT_SECTION = "section"
EVENT_UPCOMING = "upcoming"
EVENT_GOODBYE = "goodbye"

# Browser -> server command message type and its payload values
MESSAGE_COMMAND = "command"
COMMAND_PAUSE = "pause"
COMMAND_RESUME = "resume"
COMMAND_BEGIN = "begin"
COMMAND_SKIP = "skip"
COMMAND_QUIT = "quit"

ALLOWED_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_PAUSE,
        COMMAND_RESUME,
        COMMAND_BEGIN,
        COMMAND_SKIP,
        COMMAND_QUIT,
    }
)

# Timer states shown by the page
STATE_ARMED = "armed"
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_STOPPED = "stopped"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_SECTION,
        EVENT_UPCOMING,
        EVENT_GOODBYE,
    }
)

