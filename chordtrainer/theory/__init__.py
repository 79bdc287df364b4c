"""Pitch and chord theory for the 12-tone chromatic scale."""

from .pitch import Pitch, PitchClass, PITCH_CLASSES  # noqa: F401
from .chords import ChordKind, CHORD_KINDS  # noqa: F401
