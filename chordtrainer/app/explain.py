from __future__ import annotations

"""Explain Mode: session events as one-line JSON on stdout.

`--explain` traces every event; `--explain cursor_moved,note_triggered`
keeps only the named ones. Pitches and chord kinds in a payload are
written by name.
"""

import json
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from ..theory.pitch import Pitch

_ENABLED = False
_EVENTS: Optional[FrozenSet[str]] = None


def enable(flag: bool = True, events: Optional[Iterable[str]] = None) -> None:
    """Switch tracing on or off; events, if given, limits output to those names."""
    global _ENABLED, _EVENTS
    _ENABLED = bool(flag)
    _EVENTS = frozenset(events) if events else None


def _plain(value: Any) -> str:
    if isinstance(value, Pitch):
        return value.text
    if isinstance(value, Enum):
        return value.name
    return str(value)


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    if _EVENTS is not None and event not in _EVENTS:
        return
    text = json.dumps(payload or {}, separators=(",", ":"), default=_plain)
    print(f"[EXPLAIN] {event} :: {text}")
