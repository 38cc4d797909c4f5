import subprocess
import unittest
from unittest.mock import patch

from pomodoro import ShellCommandRunner


class ShellCommandRunnerTests(unittest.TestCase):
    def test_runs_command_through_shell(self) -> None:
        runner = ShellCommandRunner()
        completed = subprocess.CompletedProcess(args="notify-send hi", returncode=0)

        with patch("pomodoro.commands.subprocess.run", return_value=completed) as run:
            status = runner.run("notify-send hi")

        self.assertEqual(0, status)
        run.assert_called_once_with("notify-send hi", shell=True, check=False)

    def test_nonzero_status_is_logged_and_returned(self) -> None:
        runner = ShellCommandRunner()
        completed = subprocess.CompletedProcess(args="false", returncode=1)

        with patch("pomodoro.commands.subprocess.run", return_value=completed):
            with self.assertLogs("pomodoro.commands", level="WARNING") as logs:
                status = runner.run("false")

        self.assertEqual(1, status)
        self.assertIn("nonzero exit code 1", logs.output[0])

    def test_spawn_failure_reports_127(self) -> None:
        runner = ShellCommandRunner()

        with patch(
            "pomodoro.commands.subprocess.run",
            side_effect=OSError("no shell"),
        ):
            with self.assertLogs("pomodoro.commands", level="ERROR"):
                status = runner.run("anything")

        self.assertEqual(127, status)

    def test_blank_command_is_not_run(self) -> None:
        runner = ShellCommandRunner()

        with patch("pomodoro.commands.subprocess.run") as run:
            status = runner.run("   ")

        self.assertEqual(0, status)
        run.assert_not_called()


if __name__ == "__main__":
    unittest.main()
