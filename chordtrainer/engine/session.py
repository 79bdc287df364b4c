from __future__ import annotations

"""Trainer session: wires cursor, chord model and scheduler to a clock and sink.

The host window feeds it Commands and calls frame() once per loop
iteration; everything it returns is plain data for the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..audio.synthesis import AudioSink, Clock, MonotonicClock
from ..config.settings import TrainerSettings
from ..theory.chords import ChordKind, chord_name, interval_label, resolve
from ..theory.pitch import Pitch
from .cursor import make_cursor
from .scheduler import PlaybackScheduler


class Command(Enum):
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"
    STRUM_INSTANT = "strum_instant"
    STRUM_FAST = "strum_fast"
    STRUM_SLOW = "strum_slow"
    QUIT = "quit"


# Tk keysyms; any other toolkit can translate to the same names.
KEY_BINDINGS: Dict[str, Command] = {
    "Right": Command.RIGHT,
    "Left": Command.LEFT,
    "Up": Command.UP,
    "Down": Command.DOWN,
    "a": Command.STRUM_INSTANT,
    "s": Command.STRUM_FAST,
    "d": Command.STRUM_SLOW,
    "Escape": Command.QUIT,
    "q": Command.QUIT,
}


class KeyVisual(Enum):
    NORMAL = "normal"
    PRESSED = "pressed"
    HIGHLIGHTED = "highlighted"
    SOUNDING = "sounding"


@dataclass(frozen=True)
class KeyState:
    visual: KeyVisual = KeyVisual.NORMAL
    text: Optional[str] = None


DEFAULT_KEYSTATE = KeyState()


def state_for(states: Dict[Pitch, KeyState], pitch: Pitch) -> KeyState:
    return states.get(pitch, DEFAULT_KEYSTATE)


@dataclass
class FrameState:
    """What the renderer needs for one frame."""

    now: int
    root: Pitch
    kind: ChordKind
    position: Tuple[int, int]
    states: Dict[Pitch, KeyState] = field(default_factory=dict)
    fired: List[Pitch] = field(default_factory=list)


class TrainerSession:
    def __init__(self, settings: TrainerSettings, sink: AudioSink, clock: Optional[Clock] = None) -> None:
        self.settings = settings
        self.root = settings.root_pitch()
        self.clock = clock or MonotonicClock()
        self.cursor = make_cursor(settings.mode, self.root)
        self.scheduler = PlaybackScheduler(sink, settings.sounding_ms)
        self.frame_count = 0
        self._delays = {
            Command.STRUM_INSTANT: settings.strum.instant_ms,
            Command.STRUM_FAST: settings.strum.fast_ms,
            Command.STRUM_SLOW: settings.strum.slow_ms,
        }
        xtrace("session_started", {"root": self.root, "mode": settings.mode})

    def selection(self) -> Tuple[Pitch, ChordKind]:
        return self.cursor.current()

    def handle(self, command: Command) -> bool:
        """Apply one input command. Returns False when the session should end."""
        if command is Command.QUIT:
            return False
        if command in self._delays:
            self.strum(self._delays[command])
            return True
        move = {
            Command.RIGHT: self.cursor.right,
            Command.LEFT: self.cursor.left,
            Command.UP: self.cursor.up,
            Command.DOWN: self.cursor.down,
        }[command]
        move()
        chord_root, kind = self.selection()
        xtrace("cursor_moved", {"chord": chord_name(chord_root, kind), "position": list(self.cursor.position())})
        return True

    def handle_key(self, keysym: str) -> bool:
        command = KEY_BINDINGS.get(keysym)
        if command is None:
            return True
        return self.handle(command)

    def strum(self, inter_delay: int) -> None:
        chord_root, kind = self.selection()
        self.scheduler.schedule_chord(resolve(kind, chord_root), inter_delay, self.clock.now())
        xtrace("chord_scheduled", {"chord": chord_name(chord_root, kind), "kind": kind, "delay_ms": inter_delay})

    def display_states(self, now: int, sounding: Optional[Dict[Pitch, int]] = None) -> Dict[Pitch, KeyState]:
        """Key display map: session root highlighted, chord tones labelled by degree.

        sounding is a scheduler snapshot taken for this frame; when omitted a
        fresh one is taken.
        """
        if sounding is None:
            sounding = self.scheduler.snapshot()
        states: Dict[Pitch, KeyState] = {self.root: KeyState(KeyVisual.HIGHLIGHTED, self.root.text)}
        chord_root, kind = self.selection()
        for pitch in resolve(kind, chord_root):
            visual = KeyVisual.SOUNDING if now < sounding.get(pitch, now) else KeyVisual.PRESSED
            states[pitch] = KeyState(visual, interval_label(pitch - chord_root))
        return states

    def frame(self) -> FrameState:
        """Advance one frame on a single clock reading and scheduler snapshot."""
        now = self.clock.now()
        fired = self.scheduler.tick(now)
        for pitch in fired:
            xtrace("note_triggered", {"pitch": pitch, "at": now})
        sounding = self.scheduler.snapshot()
        chord_root, kind = self.selection()
        self.frame_count += 1
        return FrameState(
            now=now,
            root=chord_root,
            kind=kind,
            position=self.cursor.position(),
            states=self.display_states(now, sounding),
            fired=fired,
        )

    def close(self) -> None:
        """Drop pending triggers, silence and release the audio sink."""
        self.scheduler.cancel()
        try:
            self.scheduler.sink.stop_all()
        finally:
            self.scheduler.sink.close()
