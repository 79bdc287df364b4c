import io
import unittest
from contextlib import redirect_stdout

from chordtrainer.app import explain
from chordtrainer.config.settings import StrumDelays, TrainerSettings
from chordtrainer.engine.session import (
    DEFAULT_KEYSTATE,
    Command,
    KeyState,
    KeyVisual,
    TrainerSession,
    state_for,
)
from chordtrainer.theory.chords import ChordKind
from chordtrainer.theory.pitch import parse_pitch

from mock_audio import ManualClock, RecordingSink


def P(name):
    return parse_pitch(name)


class TrainerSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = ManualClock(0)
        self.sink = RecordingSink()
        self.session = TrainerSession(TrainerSettings(), self.sink, clock=self.clock)

    def test_initial_selection(self) -> None:
        self.assertEqual(self.session.selection(), (P("C3"), ChordKind.Major))

    def test_navigation_commands(self) -> None:
        self.assertTrue(self.session.handle(Command.RIGHT))
        self.assertTrue(self.session.handle(Command.DOWN))
        self.assertEqual(self.session.selection(), (P("Db3"), ChordKind.Minor))
        self.session.handle(Command.LEFT)
        self.session.handle(Command.LEFT)
        self.session.handle(Command.UP)
        self.assertEqual(self.session.selection(), (P("B3"), ChordKind.Major))

    def test_quit(self) -> None:
        self.assertFalse(self.session.handle(Command.QUIT))
        self.assertFalse(self.session.handle_key("Escape"))
        self.assertFalse(self.session.handle_key("q"))

    def test_unbound_key_is_ignored(self) -> None:
        self.assertTrue(self.session.handle_key("x"))
        self.assertEqual(self.session.selection(), (P("C3"), ChordKind.Major))

    def test_strum_delays(self) -> None:
        self.clock.ticks = 500
        self.session.handle_key("s")
        self.assertEqual([t.time for t in self.session.scheduler.pending()], [500, 570, 640])
        self.session.handle_key("d")
        self.assertEqual([t.time for t in self.session.scheduler.pending()], [500, 900, 1300])
        self.session.handle_key("a")
        self.assertEqual([t.time for t in self.session.scheduler.pending()], [500, 500, 500])
        self.assertEqual(self.sink.stop_count(), 3)

    def test_custom_strum_delays(self) -> None:
        settings = TrainerSettings(strum=StrumDelays(fast_ms=10))
        session = TrainerSession(settings, RecordingSink(), clock=self.clock)
        session.handle(Command.STRUM_FAST)
        self.assertEqual([t.time for t in session.scheduler.pending()], [0, 10, 20])

    def test_frame_fires_and_marks_sounding(self) -> None:
        self.session.handle(Command.STRUM_INSTANT)
        self.clock.ticks = 10
        state = self.session.frame()
        self.assertEqual(state.fired, [P("C3"), P("E3"), P("G3")])
        self.assertEqual(self.sink.played(), [P("C3"), P("E3"), P("G3")])
        self.assertEqual(state.states[P("C3")], KeyState(KeyVisual.SOUNDING, "R"))
        self.assertEqual(state.states[P("E3")], KeyState(KeyVisual.SOUNDING, "3"))
        self.assertEqual(state.states[P("G3")], KeyState(KeyVisual.SOUNDING, "5"))
        self.assertEqual(self.session.frame_count, 1)

        self.clock.ticks = 3010
        later = self.session.frame()
        self.assertEqual(later.fired, [])
        self.assertEqual(later.states[P("E3")], KeyState(KeyVisual.PRESSED, "3"))

    def test_root_highlight_when_chord_moves_away(self) -> None:
        self.session.handle(Command.RIGHT)
        state = self.session.frame()
        self.assertEqual(state.states[P("C3")], KeyState(KeyVisual.HIGHLIGHTED, "C3"))
        self.assertEqual(state.states[P("Db3")], KeyState(KeyVisual.PRESSED, "R"))
        self.assertEqual(state.states[P("Ab3")].text, "5")
        self.assertEqual(state.position, (1, 0))
        self.assertEqual((state.root, state.kind), (P("Db3"), ChordKind.Major))

    def test_all_chord_labels(self) -> None:
        self.session.handle(Command.UP)
        states = self.session.display_states(0)
        self.assertEqual(states[P("C4")].text, "8")
        self.assertEqual(states[P("Gb3")].text, "4a\n5m")
        self.assertEqual(len(states), 13)

    def test_absent_pitch_defaults_to_normal(self) -> None:
        states = self.session.display_states(0)
        self.assertIs(state_for(states, P("A4")), DEFAULT_KEYSTATE)
        self.assertEqual(DEFAULT_KEYSTATE.visual, KeyVisual.NORMAL)
        self.assertIsNone(DEFAULT_KEYSTATE.text)

    def test_retrigger_mid_arpeggio(self) -> None:
        self.session.handle(Command.STRUM_SLOW)
        self.clock.ticks = 1
        self.session.frame()
        self.session.handle(Command.RIGHT)
        self.session.handle(Command.STRUM_INSTANT)
        self.clock.ticks = 5000
        self.session.frame()
        self.assertEqual(self.sink.played(), [P("C3"), P("Db3"), P("F3"), P("Ab3")])

    def test_display_reads_frame_snapshot(self) -> None:
        self.session.handle(Command.STRUM_INSTANT)
        self.clock.ticks = 10
        self.session.frame()
        # Deadlines come from the snapshot passed in, not the live scheduler
        states = self.session.display_states(20, {P("E3"): 30})
        self.assertEqual(states[P("C3")].visual, KeyVisual.PRESSED)
        self.assertEqual(states[P("E3")].visual, KeyVisual.SOUNDING)
        self.assertEqual(self.session.display_states(20)[P("C3")].visual, KeyVisual.SOUNDING)

    def test_close_cancels_pending_and_releases_sink(self) -> None:
        self.session.handle(Command.STRUM_SLOW)
        self.session.close()
        self.assertEqual(self.session.scheduler.pending(), ())
        self.assertTrue(self.sink.closed)
        self.clock.ticks = 5000
        self.assertEqual(self.session.frame().fired, [])
        self.assertEqual(self.sink.played(), [])


class ExplainTraceTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.enable(False)

    def test_traces_pitches_and_kinds_by_name(self) -> None:
        explain.enable(True)
        out = io.StringIO()
        with redirect_stdout(out):
            session = TrainerSession(TrainerSettings(), RecordingSink(), clock=ManualClock(0))
            session.handle(Command.STRUM_INSTANT)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], '[EXPLAIN] session_started :: {"root":"C3","mode":"grid"}')
        self.assertEqual(lines[1], '[EXPLAIN] chord_scheduled :: {"chord":"C","kind":"Major","delay_ms":0}')

    def test_event_filter(self) -> None:
        explain.enable(True, events=["note_triggered"])
        clock = ManualClock(0)
        out = io.StringIO()
        with redirect_stdout(out):
            session = TrainerSession(TrainerSettings(), RecordingSink(), clock=clock)
            session.handle(Command.RIGHT)
            session.handle(Command.STRUM_INSTANT)
            clock.ticks = 5
            session.frame()
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[0], '[EXPLAIN] note_triggered :: {"pitch":"Db3","at":5}')

    def test_disabled_prints_nothing(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            explain.trace("cursor_moved", {"chord": "C"})
        self.assertEqual(out.getvalue(), "")


class LinearModeTests(unittest.TestCase):
    def test_linear_mode_keeps_root(self) -> None:
        settings = TrainerSettings(root="Eb3", mode="linear")
        session = TrainerSession(settings, RecordingSink(), clock=ManualClock())
        session.handle(Command.RIGHT)
        self.assertEqual(session.selection(), (P("Eb3"), ChordKind.Minor))
        session.handle(Command.LEFT)
        session.handle(Command.LEFT)
        self.assertEqual(session.selection(), (P("Eb3"), ChordKind.All))
        self.assertEqual(session.root, P("Eb3"))


if __name__ == "__main__":
    unittest.main()
