from __future__ import annotations

"""Pitch classes and absolute pitches over the 12-tone chromatic scale.

A pitch is stored as (pitch class, octave); every arithmetic operation goes
through the absolute semitone index so the pitch class always stays in 0..11.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


NOTES_PER_OCTAVE = 12


class PitchClass(IntEnum):
    C = 0
    CSharp = 1
    D = 2
    DSharp = 3
    E = 4
    F = 5
    FSharp = 6
    G = 7
    GSharp = 8
    A = 9
    ASharp = 10
    B = 11

    @property
    def text(self) -> str:
        """Display spelling, flats for the black keys."""
        return PITCH_CLASS_NAMES[self.value]


PITCH_CLASSES: Tuple[PitchClass, ...] = tuple(PitchClass)

PITCH_CLASS_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

NAME_TO_PC: Dict[str, int] = {
    "C": 0, "B#": 0, "C#": 1, "Db": 1, "D": 2, "D#": 3, "Eb": 3, "E": 4, "Fb": 4,
    "F": 5, "E#": 5, "F#": 6, "Gb": 6, "G": 7, "G#": 8, "Ab": 8, "A": 9, "A#": 10,
    "Bb": 10, "B": 11, "Cb": 11,
}


@dataclass(frozen=True)
class Pitch:
    """An absolute pitch: pitch class plus octave."""

    pitch_class: PitchClass
    octave: int

    @property
    def semitone_index(self) -> int:
        return int(self.pitch_class) + NOTES_PER_OCTAVE * self.octave

    @staticmethod
    def from_semitone_index(index: int) -> "Pitch":
        octave, pc = divmod(index, NOTES_PER_OCTAVE)
        return Pitch(PITCH_CLASSES[pc], octave)

    def transpose(self, amount: int) -> "Pitch":
        return transpose(self, amount)

    @property
    def text(self) -> str:
        return label(self)

    def __add__(self, amount: int) -> "Pitch":
        if not isinstance(amount, int):
            return NotImplemented
        return transpose(self, amount)

    def __sub__(self, other: "Pitch") -> int:
        if not isinstance(other, Pitch):
            return NotImplemented
        return difference(self, other)

    def __str__(self) -> str:
        return label(self)


def transpose(pitch: Pitch, amount: int) -> Pitch:
    """Move a pitch by a signed number of semitones.

    divmod floors, so a negative result index borrows from the octave instead
    of leaving a negative pitch class behind.
    """
    return Pitch.from_semitone_index(pitch.semitone_index + amount)


def difference(a: Pitch, b: Pitch) -> int:
    """Signed semitone distance from b up to a."""
    return a.semitone_index - b.semitone_index


def label(pitch: Pitch) -> str:
    return f"{pitch.pitch_class.text}{pitch.octave}"


def parse_pitch(text: str) -> Pitch:
    """Parse a pitch string like 'C3', 'Db3', 'G#-1' into a Pitch."""
    if not text or len(text) < 2:
        raise ValueError(f"Invalid pitch string: {text!r}")
    name = text[0].upper()
    idx = 1
    if text[idx] in ("#", "b"):
        name += text[idx]
        idx += 1
    if name not in NAME_TO_PC:
        raise ValueError(f"Unsupported note name: {name}")
    try:
        octave = int(text[idx:])
    except ValueError as e:
        raise ValueError(f"Invalid octave in pitch string: {text!r}") from e
    # B# and Cb cross the octave boundary: B#3 sounds as C4.
    base = Pitch(PitchClass.C, octave)
    offset = NAME_TO_PC[name]
    if name == "B#":
        offset += NOTES_PER_OCTAVE
    elif name == "Cb":
        offset = -1
    return transpose(base, offset)
