from __future__ import annotations

"""CLI entry point for ChordTrainer."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .app.explain import enable as explain_enable
from .audio.playback import make_sink_from_config
from .audio.samples import SampleLoadError
from .config.config import load_config, validate_config
from .config.settings import settings_from_config
from .engine.session import TrainerSession


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="chordtrainer", description="ChordTrainer keyboard and chord picker")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--mode", choices=["grid", "linear"], default=None, help="Root x chord grid, or chord kind only")
    p.add_argument("--root", type=str, default=None, help="Session root pitch, e.g. C3")
    p.add_argument("--no-audio", action="store_true", help="Run without an audio device")
    p.add_argument("--explain", nargs="?", const="", default=None, metavar="EVENTS", help="Trace engine events to stdout, optionally only a comma-separated list")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def cli(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.version:
        print(f"chordtrainer {__version__}")
        return 0
    if args.explain is not None:
        explain_enable(True, [e.strip() for e in args.explain.split(",") if e.strip()])

    cfg = load_config(args.config)
    # CLI overrides
    if args.mode is not None:
        cfg.setdefault("session", {})["mode"] = args.mode
    if args.root is not None:
        cfg.setdefault("session", {})["root"] = args.root
    if args.no_audio:
        cfg.setdefault("audio", {})["backend"] = "none"
    cfg = validate_config(cfg)

    try:
        settings = settings_from_config(cfg)
    except ValidationError as e:
        print(f"ERROR: Invalid configuration:\n{e}", file=sys.stderr)
        return 1

    root = settings.root_pitch()
    print(f"Starting ChordTrainer at {root.text} ({settings.mode} mode).")

    try:
        sink = make_sink_from_config(cfg, root)
    except SampleLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        print(f"ERROR: Audio backend failed to start: {e}", file=sys.stderr)
        return 1

    session = TrainerSession(settings, sink)
    return _run_gui(session)


def _run_gui(session: TrainerSession) -> int:
    # Imported late so --version and config errors work without a display
    from .app.gui import run

    return run(session)


if __name__ == "__main__":
    raise SystemExit(cli())
