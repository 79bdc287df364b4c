from __future__ import annotations

"""Piano keyboard and chord-grid geometry, independent of any toolkit.

Two octaves plus the closing C: 15 white keys and the 10 black keys between
them. All sizes derive from a base unit of width/24: white keys are 1.5 units
wide and full height, black keys 1 unit wide and two thirds high.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..engine.session import KeyVisual
from ..theory.chords import CHORD_KINDS, ChordKind, chord_name
from ..theory.pitch import PITCH_CLASSES, Pitch, PitchClass

WHITE_COUNT = 15
BLACK_POSITIONS = 14
BORDER_COLOR = "#323232"

WHITE_CLASSES = [PitchClass.C, PitchClass.D, PitchClass.E, PitchClass.F, PitchClass.G, PitchClass.A, PitchClass.B]
# None marks the E-F and B-C gaps
BLACK_CLASSES: List[Optional[PitchClass]] = [
    PitchClass.CSharp,
    PitchClass.DSharp,
    None,
    PitchClass.FSharp,
    PitchClass.GSharp,
    PitchClass.ASharp,
    None,
]

WHITE_COLORS: Dict[KeyVisual, str] = {
    KeyVisual.NORMAL: "#ffffff",
    KeyVisual.PRESSED: "#ff0000",
    KeyVisual.HIGHLIGHTED: "#00ffff",
    KeyVisual.SOUNDING: "#00ff00",
}
BLACK_COLORS: Dict[KeyVisual, str] = {
    KeyVisual.NORMAL: "#000000",
    KeyVisual.PRESSED: "#800000",
    KeyVisual.HIGHLIGHTED: "#008080",
    KeyVisual.SOUNDING: "#008000",
}


@dataclass(frozen=True)
class KeyRect:
    pitch: Pitch
    x: int
    y: int
    width: int
    height: int
    is_black: bool


@dataclass(frozen=True)
class GridCell:
    column: int
    row: int
    x: int
    y: int
    text: str
    selected: bool


def white_key(index: int, octave: int = 3) -> Pitch:
    return Pitch(WHITE_CLASSES[index % 7], octave + index // 7)


def black_key(index: int, octave: int = 3) -> Optional[Pitch]:
    pc = BLACK_CLASSES[index % 7]
    if pc is None:
        return None
    return Pitch(pc, octave + index // 7)


def keyboard_layout(x: int, y: int, width: int, height: int, octave: int = 3) -> List[KeyRect]:
    """White keys first, then black keys, so drawing in order layers correctly."""
    base_width = width // 24
    base_height = height // 3
    white_width = (3 * base_width) // 2
    black_width = base_width
    black_height = 2 * base_height

    keys: List[KeyRect] = []
    for pos in range(WHITE_COUNT):
        keys.append(KeyRect(white_key(pos, octave), x + white_width * pos, y, white_width, height, False))
    for pos in range(BLACK_POSITIONS):
        pitch = black_key(pos, octave)
        if pitch is not None:
            keys.append(KeyRect(pitch, x + white_width * pos + base_width, y, black_width, black_height, True))
    return keys


def key_color(visual: KeyVisual, is_black: bool) -> str:
    return (BLACK_COLORS if is_black else WHITE_COLORS)[visual]


def label_lines(text: str) -> List[str]:
    """Label lines bottom-up: the last line sits on the key's lower edge."""
    return list(reversed(text.split("\n")))


def grid_cells(x: int, y: int, width: int, height: int, position: Tuple[int, int]) -> List[GridCell]:
    """One cell per (root, chord kind); position is the selected (column, row)."""
    cell_width = width // len(PITCH_CLASSES)
    cell_height = height // len(CHORD_KINDS)
    cells: List[GridCell] = []
    for column, pc in enumerate(PITCH_CLASSES):
        for row, kind in enumerate(CHORD_KINDS):
            cells.append(
                GridCell(
                    column=column,
                    row=row,
                    x=x + column * cell_width,
                    y=y + row * cell_height,
                    text=chord_name(Pitch(pc, 0), kind),
                    selected=(column, row) == position,
                )
            )
    return cells


def selection_title(root: Pitch, kind: ChordKind) -> str:
    return f"{chord_name(root, kind)} ({root.text})"
