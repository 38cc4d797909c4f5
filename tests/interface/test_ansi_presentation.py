import io
import unittest

from app_config import KeySettings
from interface import AnsiPresentation, KeyBindings, pomocom_title, set_terminal_title
from interface.ansi import CLEAR_LINE, CLEAR_SCREEN
from pomodoro import Section, SectionInfo, SectionUpdate

WORK = SectionInfo(name="work time", command="", seconds=25 * 60)


def _update(minutes: int, seconds: int, *, paused: bool = False) -> SectionUpdate:
    return SectionUpdate(
        section=Section.WORK,
        name=WORK.name,
        minutes=minutes,
        seconds=seconds,
        paused=paused,
    )


class AnsiPresentationTests(unittest.TestCase):
    def test_begin_section_paints_header_and_name(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(file_name="standard", stream=stream)

        presentation.begin_section(Section.WORK, WORK)

        self.assertEqual(f"{CLEAR_SCREEN}pomocom: standard\nwork time\n", stream.getvalue())

    def test_render_rewrites_only_the_time_line(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(file_name="standard", stream=stream)
        presentation.begin_section(Section.WORK, WORK)
        stream.seek(0)
        stream.truncate()

        presentation.render(_update(24, 59))
        presentation.render(_update(24, 58, paused=True))

        self.assertEqual(
            f"{CLEAR_LINE}24m 59s{CLEAR_LINE}24m 58s (paused)",
            stream.getvalue(),
        )

    def test_redraw_repaints_whole_screen(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(file_name="standard", stream=stream)
        presentation.begin_section(Section.WORK, WORK)
        stream.seek(0)
        stream.truncate()

        presentation.render(_update(3, 0), redraw=True)

        self.assertEqual(
            f"{CLEAR_SCREEN}pomocom: standard\nwork time\n{CLEAR_LINE}3m 0s",
            stream.getvalue(),
        )

    def test_show_upcoming_names_begin_key(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(
            file_name="standard",
            bindings=KeyBindings(KeySettings(section_begin="b")),
            show_controls=True,
            stream=stream,
        )

        presentation.show_upcoming(Section.WORK, WORK)

        output = stream.getvalue()
        self.assertIn("next up: work time (25m0s)\n", output)
        self.assertIn("press b to begin.\n", output)
        self.assertIn("b: begin  k: skip  q: quit\n", output)

    def test_controls_hint_tracks_pause_state(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(
            file_name="standard",
            bindings=KeyBindings(KeySettings()),
            show_controls=True,
            stream=stream,
        )
        presentation.begin_section(Section.WORK, WORK)

        presentation.render(_update(1, 0, paused=True))

        self.assertTrue(stream.getvalue().rstrip().endswith("1m 0s (paused)"))
        self.assertIn("j: resume", stream.getvalue())

    def test_controls_hint_repaints_only_when_pause_state_changes(self) -> None:
        stream = io.StringIO()
        presentation = AnsiPresentation(
            file_name="standard",
            bindings=KeyBindings(KeySettings()),
            show_controls=True,
            stream=stream,
        )
        presentation.begin_section(Section.WORK, WORK)
        stream.seek(0)
        stream.truncate()

        presentation.render(_update(1, 2))
        presentation.render(_update(1, 1))
        self.assertNotIn(CLEAR_SCREEN, stream.getvalue())

        presentation.render(_update(1, 1, paused=True))
        presentation.render(_update(1, 1, paused=True))
        self.assertEqual(1, stream.getvalue().count(CLEAR_SCREEN))

        presentation.render(_update(1, 1))
        self.assertEqual(2, stream.getvalue().count(CLEAR_SCREEN))


class TerminalTitleTests(unittest.TestCase):
    def test_title_uses_osc_sequence(self) -> None:
        stream = io.StringIO()

        set_terminal_title(pomocom_title("deep"), stream=stream)

        self.assertEqual("\033]0;pomocom - deep\007", stream.getvalue())

    def test_title_without_file_name(self) -> None:
        self.assertEqual("pomocom", pomocom_title(""))


if __name__ == "__main__":
    unittest.main()
