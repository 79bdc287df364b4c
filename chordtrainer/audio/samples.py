from __future__ import annotations

"""Sample-based audio sink backed by pygame.mixer.

One recorded file per absolute pitch, named by spelling and octave
(e.g. notes/Db3.ogg), covering a fixed range above the session root.
"""

from pathlib import Path
from typing import Dict, List, Tuple

from ..theory.pitch import Pitch, transpose
from .synthesis import AudioSink


SAMPLE_COUNT = 24


class SampleLoadError(RuntimeError):
    """A required sample is missing or cannot be decoded."""


def sample_paths(root: Pitch, count: int = SAMPLE_COUNT, directory: str = "notes", ext: str = "ogg") -> List[Tuple[Pitch, Path]]:
    """Return (pitch, path) for count consecutive semitones starting at root."""
    base = Path(directory)
    out: List[Tuple[Pitch, Path]] = []
    for interval in range(count):
        pitch = transpose(root, interval)
        out.append((pitch, base / f"{pitch.text}.{ext}"))
    return out


class SampleBank:
    """The fixed set of sample files a session needs."""

    def __init__(self, root: Pitch, directory: str = "notes", ext: str = "ogg", count: int = SAMPLE_COUNT) -> None:
        self.root = root
        self.directory = directory
        self.entries = sample_paths(root, count, directory, ext)

    def missing(self) -> List[Path]:
        return [path for _, path in self.entries if not path.is_file()]

    def check(self) -> None:
        """Raise SampleLoadError listing every missing file."""
        missing = self.missing()
        if missing:
            names = ", ".join(str(p) for p in missing)
            raise SampleLoadError(f"Missing {len(missing)} sample(s) in '{self.directory}': {names}")


class PygameSampleSink(AudioSink):
    """Concrete AudioSink using pygame.mixer channels."""

    def __init__(self, bank: SampleBank, sample_rate: int = 44100, channels: int = 16, buffer: int = 1024) -> None:
        bank.check()
        try:
            import pygame  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("pygame is not installed") from e

        self._pygame = pygame
        pygame.mixer.init(frequency=sample_rate, size=-16, channels=2, buffer=buffer)
        pygame.mixer.set_num_channels(channels)

        self._sounds: Dict[Pitch, object] = {}
        for i, (pitch, path) in enumerate(bank.entries):
            print(f"Loading #{i}: {path}")
            try:
                self._sounds[pitch] = pygame.mixer.Sound(str(path))
            except pygame.error as e:
                pygame.mixer.quit()
                raise SampleLoadError(f"Cannot load sample '{path}': {e}") from e

    def play(self, pitch: Pitch) -> None:
        sound = self._sounds.get(pitch)
        # Pitches outside the loaded range stay silent but still light up
        if sound is not None:
            sound.play()

    def stop_all(self) -> None:
        self._pygame.mixer.stop()

    def close(self) -> None:
        try:
            self._pygame.mixer.quit()
        except Exception:
            pass
