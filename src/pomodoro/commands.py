"""Best-effort execution of section transition commands."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from .constants import COMMAND_NOT_RUN_STATUS


class ShellCommandRunner:
    """Runs transition commands through the user's shell, like ``system(3)``."""

    def __init__(self, *, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("pomodoro.commands")

    def run(self, command: str) -> int:
        command = command.strip()
        if not command:
            self._logger.debug("No transition command configured; skipping")
            return 0

        try:
            completed = subprocess.run(command, shell=True, check=False)
        except OSError as error:
            self._logger.error(
                "Section command %r could not be started: %s", command, error
            )
            return COMMAND_NOT_RUN_STATUS

        if completed.returncode != 0:
            self._logger.warning(
                "Section command %r exited with nonzero exit code %d",
                command,
                completed.returncode,
            )
        return completed.returncode
