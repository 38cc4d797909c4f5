"""Reader for ``.pomo`` section definition files.

A pomo file holds three records, in the order work, break, long break.
Each record is three lines::

    work time
    +notify-send-work
    25m0s

The first line is the display name, the second the transition command, and
the third the nominal duration. A command starting with ``+`` names a script
in the configured bin directory; any other command is run as-is through the
shell.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from .constants import SECTION_INFO_CMD_LEN, SECTION_INFO_NAME_LEN
from .errors import PomoFileError
from .sections import SECTION_ORDER, SectionInfo, SectionTable

DEFAULT_POMO_FILE = "standard"
POMO_FILE_SUFFIX = ".pomo"
BIN_COMMAND_PREFIX = "+"

_DURATION_PATTERN = re.compile(r"^\s*(-?\d+)\s*m\s*(-?\d+)\s*s\s*$")


def resolve_pomo_path(name: str, *, sections_dir: str) -> Path:
    """Map a pomo file name to a path.

    Names starting with ``./`` are relative to the working directory; other
    names are looked up in ``sections_dir``. The ``.pomo`` suffix is always
    appended.
    """
    if name.startswith("./"):
        return Path(name[2:] + POMO_FILE_SUFFIX)
    return Path(sections_dir).expanduser() / f"{name}{POMO_FILE_SUFFIX}"


def load_pomo_file(name: str, *, sections_dir: str, bin_dir: str) -> SectionTable:
    path = resolve_pomo_path(name, sections_dir=sections_dir)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as error:
        raise PomoFileError(f"Pomo file not found: {path}") from error
    except OSError as error:
        raise PomoFileError(f"Failed to read pomo file {path}: {error}") from error
    return parse_pomo_text(text, bin_dir=bin_dir, source=name)


def parse_pomo_text(text: str, *, bin_dir: str, source: str = "") -> SectionTable:
    lines = text.splitlines()
    infos = {}
    for index, section in enumerate(SECTION_ORDER):
        offset = index * 3
        record = lines[offset:offset + 3]
        if len(record) < 3:
            raise PomoFileError(
                f"{_label(source)}: expected 3 lines for the {section.value} "
                f"section, found {len(record)}"
            )
        raw_name, raw_command, raw_duration = record
        line_number = offset + 1
        infos[section] = SectionInfo(
            name=_parse_name(raw_name, source=source, line_number=line_number),
            command=_parse_command(
                raw_command,
                bin_dir=bin_dir,
                source=source,
                line_number=line_number + 1,
            ),
            seconds=parse_duration(
                raw_duration,
                source=source,
                line_number=line_number + 2,
            ),
        )
    return SectionTable(infos, source=source)


def parse_duration(raw: str, *, source: str = "", line_number: Optional[int] = None) -> int:
    """Parse ``<minutes>m<seconds>s`` into seconds."""
    match = _DURATION_PATTERN.match(raw)
    if match is None:
        raise PomoFileError(
            f"{_label(source, line_number)}: duration must look like '25m0s', got: {raw!r}"
        )
    minutes, seconds = (int(part) for part in match.groups())
    return minutes * 60 + seconds


def _parse_name(raw: str, *, source: str, line_number: int) -> str:
    if len(raw) > SECTION_INFO_NAME_LEN - 1:
        raise PomoFileError(
            f"{_label(source, line_number)}: section name is longer than "
            f"{SECTION_INFO_NAME_LEN - 1} characters"
        )
    return raw


def _parse_command(raw: str, *, bin_dir: str, source: str, line_number: int) -> str:
    if len(raw) > SECTION_INFO_CMD_LEN - 1:
        raise PomoFileError(
            f"{_label(source, line_number)}: section command is longer than "
            f"{SECTION_INFO_CMD_LEN - 1} characters"
        )
    if raw.startswith(BIN_COMMAND_PREFIX):
        return os.path.join(os.path.expanduser(bin_dir), raw[len(BIN_COMMAND_PREFIX):])
    return raw


def _label(source: str, line_number: Optional[int] = None) -> str:
    label = f"{source}{POMO_FILE_SUFFIX}" if source else "pomo file"
    if line_number is not None:
        return f"{label}:{line_number}"
    return label
