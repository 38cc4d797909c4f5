import unittest

from app_config import KeySettings
from interface import KeyBindings


class KeyBindingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bindings = KeyBindings(KeySettings())

    def test_shared_pause_and_begin_key_depends_on_phase(self) -> None:
        self.assertEqual("begin", self.bindings.event_for("j", "armed"))
        self.assertEqual("pause", self.bindings.event_for("j", "running"))
        self.assertEqual("resume", self.bindings.event_for("j", "paused"))

    def test_quit_and_skip_work_in_every_phase(self) -> None:
        for phase in ("armed", "running", "paused"):
            with self.subTest(phase=phase):
                self.assertEqual("quit", self.bindings.event_for("q", phase))
                self.assertEqual("skip", self.bindings.event_for("k", phase))

    def test_unbound_keys_are_no_input(self) -> None:
        self.assertEqual("no_input", self.bindings.event_for("x", "running"))
        self.assertEqual("no_input", self.bindings.event_for("", "paused"))

    def test_separate_begin_key_does_not_pause(self) -> None:
        bindings = KeyBindings(KeySettings(pause="p", section_begin="b"))

        self.assertEqual("no_input", bindings.event_for("b", "running"))
        self.assertEqual("no_input", bindings.event_for("p", "armed"))
        self.assertEqual("begin", bindings.event_for("b", "armed"))
        self.assertEqual("pause", bindings.event_for("p", "running"))

    def test_controls_hint_follows_phase(self) -> None:
        self.assertEqual("j: begin  k: skip  q: quit", self.bindings.controls_hint("armed"))
        self.assertEqual("j: pause  k: skip  q: quit", self.bindings.controls_hint("running"))
        self.assertEqual("j: resume  k: skip  q: quit", self.bindings.controls_hint("paused"))


if __name__ == "__main__":
    unittest.main()
