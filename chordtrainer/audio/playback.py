from __future__ import annotations

"""FluidSynth-based audio sink and the sink factory."""

import sys
import threading
from pathlib import Path
from typing import Dict

from ..theory.pitch import Pitch
from .samples import SampleBank, PygameSampleSink
from .synthesis import AudioSink, NullSink


def pitch_to_midi(pitch: Pitch) -> int:
    """MIDI note number with C4 = 60."""
    return pitch.semitone_index + 12


class FluidSynthSink(AudioSink):
    """Concrete AudioSink using pyfluidsynth and a General MIDI soundfont."""

    def __init__(self, soundfont_path: str, sample_rate: int = 44100, gain: float = 0.5, velocity: int = 100, note_ms: int = 3000) -> None:
        try:
            import fluidsynth  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("pyfluidsynth is not installed") from e
        if not soundfont_path or not Path(soundfont_path).is_file():
            raise RuntimeError(f"SoundFont not found at '{soundfont_path}'. Place a .sf2 there or update audio.soundfont_path.")

        self.velocity = max(0, min(127, int(velocity)))
        self.note_ms = int(note_ms)
        self._fs = fluidsynth.Synth(samplerate=sample_rate, gain=gain)
        # Start audio driver; prefer CoreAudio on macOS to avoid SDL warnings
        driver = None
        if sys.platform == "darwin":
            driver = "coreaudio"
        try:
            if driver:
                self._fs.start(driver=driver)
            else:
                self._fs.start()
        except Exception:
            # Fallback to default driver if preferred one fails
            self._fs.start()
        self._sfid = self._fs.sfload(soundfont_path)
        self._fs.program_select(0, self._sfid, 0, 0)  # channel 0 = Acoustic Grand
        self._lock = threading.Lock()
        # One pending release per MIDI note; replaying a note restarts its timer
        self._releases: Dict[int, threading.Timer] = {}
        self._closed = False

    def play(self, pitch: Pitch) -> None:
        midi = pitch_to_midi(pitch)
        timer = threading.Timer(self.note_ms / 1000.0, self._release, args=(midi,))
        timer.daemon = True
        with self._lock:
            if self._closed:
                return
            previous = self._releases.pop(midi, None)
            if previous is not None:
                previous.cancel()
            self._releases[midi] = timer
            self._fs.noteon(0, midi, self.velocity)
        timer.start()

    def _release(self, midi: int) -> None:
        with self._lock:
            if self._closed or self._releases.get(midi) is not threading.current_thread():
                return
            del self._releases[midi]
            self._fs.noteoff(0, midi)

    def stop_all(self) -> None:
        with self._lock:
            for t in self._releases.values():
                t.cancel()
            self._releases.clear()
            if self._closed:
                return
            # CC#123 = All Notes Off
            self._fs.cc(0, 123, 0)

    def close(self) -> None:
        self.stop_all()
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._fs.delete()


def make_sink_from_config(cfg: Dict, root: Pitch) -> AudioSink:
    """Factory for AudioSink from the validated config dict."""
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "samples")
    if backend == "samples":
        bank = SampleBank(
            root,
            directory=str(audio.get("sample_dir", "notes")),
            ext=str(audio.get("sample_ext", "ogg")),
            count=int(audio.get("sample_count", 24)),
        )
        return PygameSampleSink(
            bank,
            sample_rate=int(audio.get("sample_rate", 44100)),
            channels=int(audio.get("channels", 16)),
        )
    if backend == "fluidsynth":
        return FluidSynthSink(
            soundfont_path=audio.get("soundfont_path"),
            sample_rate=int(audio.get("sample_rate", 44100)),
            gain=float(audio.get("gain", 0.5)),
            note_ms=int(cfg.get("session", {}).get("sounding_ms", 3000)),
        )
    if backend == "none":
        return NullSink()
    raise ValueError(f"Unsupported backend: {backend}")
