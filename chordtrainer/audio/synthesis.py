from __future__ import annotations

"""Abstract-ish audio and clock interfaces consumed by the engine.

Concrete sinks trigger one pre-recorded sound per pitch and can silence
everything at once; the engine never talks to an audio library directly.
"""

import time

from ..theory.pitch import Pitch


class Clock:
    """Monotonic millisecond tick source."""

    def now(self) -> int:
        raise NotImplementedError


class MonotonicClock(Clock):
    """Milliseconds elapsed since construction."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def now(self) -> int:
        return int((time.monotonic() - self._start) * 1000)


class AudioSink:
    """Abstract-like sink interface for playback engines."""

    def play(self, pitch: Pitch) -> None:
        """Start the sound mapped to pitch on any free channel."""
        raise NotImplementedError

    def stop_all(self) -> None:
        """Halt every channel that is currently playing."""
        raise NotImplementedError

    def close(self) -> None:
        """Release resources."""
        pass


class NullSink(AudioSink):
    """Silent sink for running without an audio device."""

    def play(self, pitch: Pitch) -> None:
        pass

    def stop_all(self) -> None:
        pass
