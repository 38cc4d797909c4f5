from __future__ import annotations

import sys
from typing import Optional, TextIO


def set_terminal_title(title: str, *, stream: Optional[TextIO] = None) -> None:
    """Set the terminal window title with an OSC 0 escape sequence."""
    out = stream or sys.stdout
    out.write(f"\033]0;{title}\007")
    out.flush()


def pomocom_title(file_name: str) -> str:
    return f"pomocom - {file_name}" if file_name else "pomocom"
