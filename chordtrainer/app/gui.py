from __future__ import annotations

"""Tkinter window: chord-picker grid on top, two-octave keyboard below.

Arrows move the grid cursor, a/s/d play the selected chord instantly, as a
fast arpeggio or as a slow arpeggio, Escape or q quits.
"""

import tkinter as tk
import tkinter.font as tkfont

from ..engine.session import FrameState, TrainerSession, state_for
from .keyboard import BORDER_COLOR, grid_cells, key_color, keyboard_layout, label_lines, selection_title

GRID_HEIGHT = 600
KEYBOARD_X = 150
KEYBOARD_WIDTH = 900


class App(tk.Tk):
    def __init__(self, session: TrainerSession) -> None:
        super().__init__()
        self.session = session
        display = session.settings.display
        self.width = display.width
        self.height = display.height
        self.frame_ms = session.settings.frame_ms

        self.title("ChordTrainer")
        self.geometry(f"{self.width}x{self.height}")
        self.resizable(False, False)

        self.font = tkfont.Font(family="Courier", size=display.font_size)
        self.canvas = tk.Canvas(self, width=self.width, height=self.height, background="#000000", highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.bind("<Key>", self._on_key)
        self.protocol("WM_DELETE_WINDOW", self.close)
        self._closed = False
        self.after(0, self._on_frame)

    def _on_key(self, event: tk.Event) -> None:
        if not self.session.handle_key(event.keysym):
            self.close()

    def _on_frame(self) -> None:
        if self._closed:
            return
        state = self.session.frame()
        self._draw(state)
        self.after(self.frame_ms, self._on_frame)

    def _draw(self, state: FrameState) -> None:
        self.canvas.delete("all")
        self._draw_grid(state)
        self._draw_keyboard(state)
        self.title(f"ChordTrainer - {selection_title(state.root, state.kind)}")

    def _draw_grid(self, state: FrameState) -> None:
        for cell in grid_cells(0, 0, self.width, GRID_HEIGHT, state.position):
            self.canvas.create_text(
                cell.x,
                cell.y,
                text=cell.text,
                anchor=tk.NW,
                fill="#ff0000" if cell.selected else "#ffffff",
                font=self.font,
            )

    def _draw_keyboard(self, state: FrameState) -> None:
        top = GRID_HEIGHT
        height = self.height - GRID_HEIGHT
        line_height = self.font.metrics("linespace")
        for key in keyboard_layout(KEYBOARD_X, top, KEYBOARD_WIDTH, height, self.session.root.octave):
            ks = state_for(state.states, key.pitch)
            self.canvas.create_rectangle(
                key.x,
                key.y,
                key.x + key.width,
                key.y + key.height,
                fill=key_color(ks.visual, key.is_black),
                outline=BORDER_COLOR,
            )
            if ks.text is None:
                continue
            bottom = key.y + key.height
            center = key.x + key.width // 2
            for line in label_lines(ks.text):
                self.canvas.create_text(
                    center,
                    bottom,
                    text=line,
                    anchor=tk.S,
                    fill="#ffffff" if key.is_black else "#000000",
                    font=self.font,
                )
                bottom -= line_height

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.session.close()
        finally:
            self.destroy()


def run(session: TrainerSession) -> int:
    app = App(session)
    app.mainloop()
    return 0
