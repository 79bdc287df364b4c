"""ChordTrainer package initialization.

Re-exports the toolkit-free engine so notebooks and other hosts can simply
`import chordtrainer` and drive a session without opening a window.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .theory.pitch import Pitch, PitchClass, difference, label, transpose  # noqa: E402
from .theory.chords import ChordKind, intervals, interval_label, resolve  # noqa: E402
from .engine.cursor import LinearCursor, NavigationCursor  # noqa: E402
from .engine.scheduler import PendingTrigger, PlaybackScheduler  # noqa: E402

__all__ = [
    "__version__",
    "Pitch",
    "PitchClass",
    "transpose",
    "difference",
    "label",
    "ChordKind",
    "intervals",
    "resolve",
    "interval_label",
    "NavigationCursor",
    "LinearCursor",
    "PendingTrigger",
    "PlaybackScheduler",
]
