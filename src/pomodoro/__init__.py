from .commands import ShellCommandRunner
from .contracts import (
    CommandRunner,
    ControlEvent,
    ControllerPhase,
    InputSource,
    Presentation,
    SectionOutcome,
    SectionResult,
    SectionUpdate,
)
from .controller import SectionController
from .countdown import Countdown, RemainingTime
from .errors import (
    InputSourceError,
    PomodoroError,
    PomoFileError,
    SectionConfigurationError,
)
from .pomo_file import DEFAULT_POMO_FILE, load_pomo_file, parse_pomo_text
from .sections import SECTION_ORDER, Section, SectionInfo, SectionTable
from .sequencer import SectionSequencer, SequencerState, advance

__all__ = [
    "CommandRunner",
    "ControlEvent",
    "ControllerPhase",
    "Countdown",
    "DEFAULT_POMO_FILE",
    "InputSource",
    "InputSourceError",
    "PomoFileError",
    "PomodoroError",
    "Presentation",
    "RemainingTime",
    "SECTION_ORDER",
    "Section",
    "SectionConfigurationError",
    "SectionController",
    "SectionInfo",
    "SectionOutcome",
    "SectionResult",
    "SectionSequencer",
    "SectionTable",
    "SectionUpdate",
    "SequencerState",
    "ShellCommandRunner",
    "advance",
    "load_pomo_file",
    "parse_pomo_text",
]
