class PomodoroError(Exception):
    """Base exception for the section timer."""


class SectionConfigurationError(PomodoroError):
    """Raised when section metadata or timer settings are invalid."""


class PomoFileError(PomodoroError):
    """Raised when a pomo file cannot be read or parsed."""


class InputSourceError(PomodoroError):
    """Raised by an input source when polling for control events fails."""
