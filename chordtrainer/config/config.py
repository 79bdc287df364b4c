from __future__ import annotations

"""Configuration loading and validation for ChordTrainer.

This module loads YAML configuration, applies defaults, and validates
enumerations so the window and audio backends start from sane values.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..engine.cursor import CURSOR_MODES, CURSOR_OCTAVE
from ..theory.pitch import Pitch, PitchClass, parse_pitch


ALLOWED_BACKENDS = {"samples", "fluidsynth", "none"}
ALLOWED_MODES = set(CURSOR_MODES)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown enum values fall back to their default with a warning. Checking
    that sample files or a soundfont exist is left to the audio backend,
    which fails at startup.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("session", {})
    cfg.setdefault("strum", {})
    cfg.setdefault("audio", {})
    cfg.setdefault("display", {})

    session = cfg["session"]
    strum = cfg["strum"]
    audio = cfg["audio"]
    display = cfg["display"]

    session.setdefault("root", "C3")
    session.setdefault("mode", "grid")
    session.setdefault("sounding_ms", 3000)
    session.setdefault("frame_ms", 10)

    strum.setdefault("instant_ms", 0)
    strum.setdefault("fast_ms", 70)
    strum.setdefault("slow_ms", 400)

    audio.setdefault("backend", "samples")
    audio.setdefault("sample_dir", "notes")
    audio.setdefault("sample_ext", "ogg")
    audio.setdefault("sample_count", 24)
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("channels", 16)
    audio.setdefault("soundfont_path", "./soundfonts/GrandPiano.sf2")
    audio.setdefault("gain", 0.5)

    display.setdefault("width", 1200)
    display.setdefault("height", 900)
    display.setdefault("font_size", 20)

    # Enum validations
    mode = session.get("mode")
    if mode not in ALLOWED_MODES:
        print(f"WARNING: Unsupported mode '{mode}', using 'grid'.")
        session["mode"] = "grid"

    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported audio backend '{backend}', falling back to 'samples'.")
        audio["backend"] = "samples"

    try:
        root = parse_pitch(str(session.get("root")))
    except ValueError:
        print(f"WARNING: Invalid session root '{session.get('root')}', using 'C3'.")
        session["root"] = "C3"
    else:
        # Grid chords are built on octave CURSOR_OCTAVE; samples start at the root
        grid_root = Pitch(PitchClass.C, CURSOR_OCTAVE)
        if session["mode"] == "grid" and root != grid_root:
            print(f"WARNING: Grid mode needs root '{grid_root.text}', ignoring '{session.get('root')}'.")
            session["root"] = grid_root.text

    for name in ("instant_ms", "fast_ms", "slow_ms"):
        if int(strum.get(name, 0)) < 0:
            print(f"WARNING: Negative strum.{name}, using 0.")
            strum[name] = 0

    return cfg
