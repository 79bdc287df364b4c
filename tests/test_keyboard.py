import unittest

from chordtrainer.app.keyboard import (
    black_key,
    grid_cells,
    key_color,
    keyboard_layout,
    label_lines,
    selection_title,
    white_key,
)
from chordtrainer.engine.session import KeyVisual
from chordtrainer.theory.chords import ChordKind
from chordtrainer.theory.pitch import parse_pitch


class KeyboardLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.keys = keyboard_layout(150, 600, 900, 300)
        self.white = [k for k in self.keys if not k.is_black]
        self.black = [k for k in self.keys if k.is_black]

    def test_key_counts(self) -> None:
        self.assertEqual(len(self.white), 15)
        self.assertEqual(len(self.black), 10)

    def test_white_keys_span_two_octaves(self) -> None:
        self.assertEqual(self.white[0].pitch, parse_pitch("C3"))
        self.assertEqual(self.white[7].pitch, parse_pitch("C4"))
        self.assertEqual(self.white[-1].pitch, parse_pitch("C5"))

    def test_geometry(self) -> None:
        # base unit 900 // 24 = 37, white keys 55 wide
        first, second = self.white[0], self.white[1]
        self.assertEqual((first.x, first.y, first.width, first.height), (150, 600, 55, 300))
        self.assertEqual(second.x, 205)
        db = self.black[0]
        self.assertEqual(db.pitch, parse_pitch("Db3"))
        self.assertEqual((db.x, db.width, db.height), (187, 37, 200))

    def test_black_keys_skip_gaps(self) -> None:
        names = [k.pitch.text for k in self.black]
        self.assertEqual(names, ["Db3", "Eb3", "Gb3", "Ab3", "Bb3", "Db4", "Eb4", "Gb4", "Ab4", "Bb4"])
        self.assertIsNone(black_key(2))
        self.assertIsNone(black_key(13))

    def test_octave_offset(self) -> None:
        self.assertEqual(white_key(8, octave=2), parse_pitch("D3"))
        self.assertEqual(black_key(7, octave=4), parse_pitch("Db5"))

    def test_white_keys_drawn_first(self) -> None:
        self.assertFalse(any(k.is_black for k in self.keys[:15]))


class KeyAppearanceTests(unittest.TestCase):
    def test_colors(self) -> None:
        self.assertEqual(key_color(KeyVisual.NORMAL, False), "#ffffff")
        self.assertEqual(key_color(KeyVisual.NORMAL, True), "#000000")
        self.assertEqual(key_color(KeyVisual.SOUNDING, False), "#00ff00")
        self.assertEqual(key_color(KeyVisual.PRESSED, True), "#800000")

    def test_label_lines_bottom_up(self) -> None:
        self.assertEqual(label_lines("2a\n3m"), ["3m", "2a"])
        self.assertEqual(label_lines("R"), ["R"])


class GridTests(unittest.TestCase):
    def test_cells(self) -> None:
        cells = grid_cells(0, 0, 1200, 600, (3, 4))
        self.assertEqual(len(cells), 84)
        selected = [c for c in cells if c.selected]
        self.assertEqual(len(selected), 1)
        self.assertEqual(selected[0].text, "Ebm7")
        self.assertEqual((selected[0].x, selected[0].y), (300, 340))

    def test_cell_text(self) -> None:
        texts = {(c.column, c.row): c.text for c in grid_cells(0, 0, 1200, 600, (0, 0))}
        self.assertEqual(texts[(0, 0)], "C")
        self.assertEqual(texts[(11, 6)], "B(All)")
        self.assertEqual(texts[(10, 3)], "Bbmaj7")

    def test_selection_title(self) -> None:
        self.assertEqual(selection_title(parse_pitch("F#3"), ChordKind.Diminished), "Gbdim (Gb3)")


if __name__ == "__main__":
    unittest.main()
