from __future__ import annotations

"""Retriggerable note scheduler.

Turns a resolved chord into a time-ordered queue of note triggers, fires the
due ones on each frame, and remembers until when each pitch counts as
sounding. Starting a new chord always discards whatever is still queued.
"""

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Tuple

from ..audio.synthesis import AudioSink
from ..theory.pitch import Pitch

SOUNDING_MS = 3000


@dataclass(frozen=True)
class PendingTrigger:
    pitch: Pitch
    time: int


class PlaybackScheduler:
    """Owns the pending-trigger queue and the per-pitch sounding deadlines."""

    def __init__(self, sink: AudioSink, sounding_ms: int = SOUNDING_MS) -> None:
        self.sink = sink
        self.sounding_ms = int(sounding_ms)
        self._queue: Deque[PendingTrigger] = deque()
        self._sounding_until: Dict[Pitch, int] = {}
        self._lock = threading.Lock()

    def schedule_chord(self, pitches: Iterable[Pitch], inter_delay: int, now: int) -> None:
        """Replace any in-flight chord with pitches spaced inter_delay ms apart."""
        if inter_delay < 0:
            raise ValueError(f"inter_delay must be non-negative, got {inter_delay}")
        with self._lock:
            self.sink.stop_all()
            self._queue.clear()
            time = now
            for pitch in pitches:
                self._queue.append(PendingTrigger(pitch, time))
                time += inter_delay

    def tick(self, now: int) -> List[Pitch]:
        """Fire every trigger due strictly before now, in queue order."""
        fired: List[Pitch] = []
        with self._lock:
            # Queue times never decrease, so stop at the first one not yet due
            while self._queue and self._queue[0].time < now:
                pending = self._queue.popleft()
                self.sink.play(pending.pitch)
                self._sounding_until[pending.pitch] = now + self.sounding_ms
                fired.append(pending.pitch)
        return fired

    def is_sounding(self, pitch: Pitch, now: int) -> bool:
        until = self._sounding_until.get(pitch)
        return until is not None and now < until

    def cancel(self) -> None:
        with self._lock:
            self._queue.clear()

    def pending(self) -> Tuple[PendingTrigger, ...]:
        with self._lock:
            return tuple(self._queue)

    def snapshot(self) -> Dict[Pitch, int]:
        """Copy of the sounding deadlines for one frame of rendering."""
        with self._lock:
            return dict(self._sounding_until)
