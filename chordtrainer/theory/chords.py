from __future__ import annotations

"""Chord helpers: named chord shapes resolved against a root pitch."""

from enum import Enum
from typing import Dict, List, Tuple

from .pitch import Pitch, transpose


class ChordKind(Enum):
    Major = "major"
    Minor = "minor"
    Seventh = "seventh"
    MajorSeventh = "major_seventh"
    MinorSeventh = "minor_seventh"
    Diminished = "diminished"
    All = "all"


CHORD_KINDS: Tuple[ChordKind, ...] = tuple(ChordKind)

CHORD_INTERVALS: Dict[ChordKind, Tuple[int, ...]] = {
    ChordKind.Major: (0, 4, 7),
    ChordKind.Minor: (0, 3, 7),
    ChordKind.Seventh: (0, 4, 7, 10),
    ChordKind.MajorSeventh: (0, 4, 7, 11),
    ChordKind.MinorSeventh: (0, 3, 7, 10),
    ChordKind.Diminished: (0, 3, 6, 9),
    # Full chromatic octave, root to root, for study mode
    ChordKind.All: tuple(range(13)),
}

CHORD_SUFFIXES: Dict[ChordKind, str] = {
    ChordKind.Major: "",
    ChordKind.Minor: "m",
    ChordKind.Seventh: "7",
    ChordKind.MajorSeventh: "maj7",
    ChordKind.MinorSeventh: "m7",
    ChordKind.Diminished: "dim",
    ChordKind.All: "(All)",
}

INTERVAL_LABELS: Dict[int, str] = {
    0: "R",
    1: "1a\n2m",
    2: "2",
    3: "2a\n3m",
    4: "3",
    5: "4",
    6: "4a\n5m",
    7: "5",
    8: "5a\n6m",
    9: "6",
    10: "7",
    11: "7M",
    12: "8",
}


def intervals(kind: ChordKind) -> Tuple[int, ...]:
    """Semitone offsets from the root, ascending and starting at 0."""
    return CHORD_INTERVALS[kind]


def resolve(kind: ChordKind, root: Pitch) -> List[Pitch]:
    """Return the absolute pitches of a chord built on root, lowest first."""
    return [transpose(root, offset) for offset in intervals(kind)]


def label(kind: ChordKind) -> str:
    return CHORD_SUFFIXES[kind]


def chord_name(root: Pitch, kind: ChordKind) -> str:
    """Compact chord symbol without octave, e.g. 'Ebm7'."""
    return f"{root.pitch_class.text}{label(kind)}"


def interval_label(offset: int) -> str:
    """Degree label for a semitone offset; alternatives are newline-separated."""
    return INTERVAL_LABELS.get(offset, f"({offset})")
