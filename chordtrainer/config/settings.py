from __future__ import annotations

"""Typed session settings using Pydantic, built from the validated YAML dict."""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

from ..theory.pitch import Pitch, parse_pitch


class StrumDelays(BaseModel):
    """Gap between consecutive chord tones for each strum command, in ms."""

    instant_ms: int = Field(0, ge=0)
    fast_ms: int = Field(70, ge=0)
    slow_ms: int = Field(400, ge=0)


class DisplaySettings(BaseModel):
    width: int = Field(1200, gt=0)
    height: int = Field(900, gt=0)
    font_size: int = Field(20, gt=0)


class TrainerSettings(BaseModel):
    """Everything the engine and window need for one session.

    - root: lowest pitch of the keyboard and of the sample range
    - mode: "grid" (root x chord picker) or "linear" (chord kind only)
    - sounding_ms: how long a triggered key stays lit
    - frame_ms: period of the frame loop
    """

    root: str = "C3"
    mode: Literal["grid", "linear"] = "grid"
    sounding_ms: int = Field(3000, gt=0)
    frame_ms: int = Field(10, gt=0)
    strum: StrumDelays = Field(default_factory=StrumDelays)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    def root_pitch(self) -> Pitch:
        return parse_pitch(self.root)


def settings_from_config(cfg: Dict[str, Any]) -> TrainerSettings:
    """Build TrainerSettings from a dict returned by validate_config."""
    session = cfg.get("session", {})
    return TrainerSettings(
        root=str(session.get("root", "C3")),
        mode=session.get("mode", "grid"),
        sounding_ms=int(session.get("sounding_ms", 3000)),
        frame_ms=int(session.get("frame_ms", 10)),
        strum=StrumDelays(**cfg.get("strum", {})),
        display=DisplaySettings(**cfg.get("display", {})),
    )
