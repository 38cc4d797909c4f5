"""Utilities for serializing UI events and preserving sticky state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import ALLOWED_COMMANDS, MESSAGE_COMMAND, STICKY_EVENT_TYPES


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_command(message: str | bytes) -> Optional[str]:
    """Return the command named by a browser message, or ``None`` if invalid."""
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    try:
        data = json.loads(message)
    except ValueError:
        return None
    if not isinstance(data, dict) or data.get("type") != MESSAGE_COMMAND:
        return None
    command = data.get("command")
    if not isinstance(command, str) or command not in ALLOWED_COMMANDS:
        return None
    return command


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients.

    Events are replayed oldest first, so the screen a late client ends up on
    is the one published most recently.
    """
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events.pop(event_type, None)
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return list(self._events.values())
