"""Presentation adapters and input sources that drive the section controller."""

from .ansi import AnsiPresentation
from .errors import InterfaceError
from .keys import KeyBindings
from .terminal_title import pomocom_title, set_terminal_title
from .web import CommandQueueInput, WebPresentation

__all__ = [
    "AnsiPresentation",
    "CommandQueueInput",
    "InterfaceError",
    "KeyBindings",
    "WebPresentation",
    "pomocom_title",
    "set_terminal_title",
]
