from __future__ import annotations

"""Wrapping cursors over the chord-picker grid.

Indices are never clamped; the effective selection is always index mod N,
and Python's % keeps that non-negative for negative indices.
"""

from typing import Tuple

from ..theory.chords import CHORD_KINDS, ChordKind
from ..theory.pitch import PITCH_CLASSES, Pitch

CURSOR_OCTAVE = 3
CURSOR_MODES = ("grid", "linear")


class NavigationCursor:
    """Two independent wrapping indices: root pitch class (x) and chord kind (y)."""

    def __init__(self) -> None:
        self.pitch_index = 0
        self.chord_index = 0

    def right(self) -> None:
        self.pitch_index += 1

    def left(self) -> None:
        self.pitch_index -= 1

    def up(self) -> None:
        self.chord_index -= 1

    def down(self) -> None:
        self.chord_index += 1

    def position(self) -> Tuple[int, int]:
        """Effective (column, row) in the 12 x len(CHORD_KINDS) grid."""
        return (self.pitch_index % len(PITCH_CLASSES), self.chord_index % len(CHORD_KINDS))

    def current(self) -> Tuple[Pitch, ChordKind]:
        x, y = self.position()
        return (Pitch(PITCH_CLASSES[x], CURSOR_OCTAVE), CHORD_KINDS[y])


class LinearCursor:
    """Single chord index over a fixed root; every direction steps the chord kind."""

    def __init__(self, root: Pitch) -> None:
        self.root = root
        self.chord_index = 0

    def right(self) -> None:
        self.chord_index += 1

    def left(self) -> None:
        self.chord_index -= 1

    def up(self) -> None:
        self.chord_index -= 1

    def down(self) -> None:
        self.chord_index += 1

    def position(self) -> Tuple[int, int]:
        return (int(self.root.pitch_class), self.chord_index % len(CHORD_KINDS))

    def current(self) -> Tuple[Pitch, ChordKind]:
        return (self.root, CHORD_KINDS[self.chord_index % len(CHORD_KINDS)])


def make_cursor(mode: str, root: Pitch):
    if mode == "grid":
        return NavigationCursor()
    if mode == "linear":
        return LinearCursor(root)
    raise ValueError(f"Unsupported cursor mode: {mode}")
