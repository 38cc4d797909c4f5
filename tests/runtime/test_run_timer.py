import contextlib
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

import main
from pomodoro import Section

STANDARD = textwrap.dedent(
    """\
    work time
    echo work
    0m5s
    break time
    echo break
    0m3s
    long break
    echo long
    0m7s
    """
)


class QuitInput:
    def __init__(self):
        self.phases = []

    def poll(self, timeout, phase):
        self.phases.append(phase)
        return "quit"


class SilentPresentation:
    def __init__(self):
        self.begun = []

    def begin_section(self, section, info) -> None:
        self.begun.append((section, info.seconds))

    def show_upcoming(self, section, info) -> None:
        pass

    def render(self, update, *, redraw=False) -> None:
        pass


class RunTimerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        root = Path(self._temp_dir.name)
        (root / "standard.pomo").write_text(STANDARD, encoding="utf-8")
        self.config_path = root / "pomocom.toml"
        self.config_path.write_text(
            textwrap.dedent(
                f"""
                [timer]
                interface = "web"

                [paths]
                sections = "{root.as_posix()}"
                bin = "{root.as_posix()}"
                """
            ),
            encoding="utf-8",
        )
        self.presentation = SilentPresentation()
        self.input_source = QuitInput()
        self.opened = []
        logging_patch = patch("main.setup_logging", side_effect=lambda *a, **kw: main.logging.getLogger("pomocom"))
        logging_patch.start()
        self.addCleanup(logging_patch.stop)
        self.addCleanup(self._temp_dir.cleanup)

    @contextlib.contextmanager
    def _fake_interface(self, app_config, *, file_name, logger):
        self.opened.append((app_config.timer.interface, file_name))
        yield main.InterfaceSession(
            presentation=self.presentation,
            input_source=self.input_source,
        )

    def test_quit_prints_goodbye(self) -> None:
        with patch("main.typer.echo") as echo:
            exit_code = main.run_timer(
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual(0, exit_code)
        echo.assert_called_once_with("Hey thanks for using pomocom.")
        self.assertEqual([("web", "standard")], self.opened)
        self.assertEqual([(Section.WORK, 5)], self.presentation.begun)

    def test_start_section_and_quick_durations_are_applied(self) -> None:
        with patch("main.typer.echo"):
            main.run_timer(
                start_section=Section.LONG_BREAK,
                quick=(50, 10, 30),
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual([(Section.LONG_BREAK, 1800)], self.presentation.begun)

    def test_armed_gate_from_override(self) -> None:
        with patch("main.typer.echo"):
            main.run_timer(
                overrides=("timer.pause_before_section_start=true",),
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual(["armed"], self.input_source.phases)
        self.assertEqual([], self.presentation.begun)

    def test_bad_config_exits_before_timing(self) -> None:
        with self.assertLogs("pomocom", level="ERROR"):
            exit_code = main.run_timer(
                overrides=("timer.update_interval=0",),
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual(1, exit_code)
        self.assertEqual([], self.opened)

    def test_missing_pomo_file_exits_before_timing(self) -> None:
        with self.assertLogs("pomocom", level="ERROR"):
            exit_code = main.run_timer(
                pomo_file="absent",
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual(1, exit_code)
        self.assertEqual([], self.opened)

    def test_zero_quick_duration_is_rejected(self) -> None:
        with self.assertLogs("pomocom", level="ERROR"):
            exit_code = main.run_timer(
                quick=(25, 0, 15),
                config_path=str(self.config_path),
                interface_factory=self._fake_interface,
            )

        self.assertEqual(1, exit_code)


class CommandLineTests(unittest.TestCase):
    def test_arguments_are_passed_to_run_timer(self) -> None:
        runner = CliRunner()
        with patch("main.run_timer", return_value=0) as run_timer:
            result = runner.invoke(
                main.app,
                [
                    "deep",
                    "-B",
                    "-q",
                    "50",
                    "10",
                    "30",
                    "--set",
                    "timer.interface=ansi",
                    "--set",
                    "keys.quit=x",
                    "--config",
                    "custom.toml",
                ],
            )

        self.assertEqual(0, result.exit_code, result.output)
        run_timer.assert_called_once_with(
            pomo_file="deep",
            start_section=Section.LONG_BREAK,
            quick=(50, 10, 30),
            overrides=("timer.interface=ansi", "keys.quit=x"),
            config_path="custom.toml",
            verbose=False,
        )

    def test_defaults(self) -> None:
        runner = CliRunner()
        with patch("main.run_timer", return_value=1) as run_timer:
            result = runner.invoke(main.app, ["-b"])

        self.assertEqual(1, result.exit_code)
        kwargs = run_timer.call_args.kwargs
        self.assertEqual("standard", kwargs["pomo_file"])
        self.assertIs(Section.BREAK, kwargs["start_section"])
        self.assertIsNone(kwargs["quick"])
        self.assertEqual((), kwargs["overrides"])

    def test_break_flags_are_exclusive(self) -> None:
        runner = CliRunner()
        with patch("main.run_timer") as run_timer:
            result = runner.invoke(main.app, ["-b", "-B"])

        self.assertNotEqual(0, result.exit_code)
        run_timer.assert_not_called()


if __name__ == "__main__":
    unittest.main()
