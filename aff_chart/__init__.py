"""Chart model, codec and time/position conversion for .aff rhythm-game charts."""

from __future__ import annotations

from .errors import AffError, ExportError, FormatError
from .types import (
    Arc,
    ArcLineType,
    ArctapNote,
    CameraEvent,
    CameraType,
    Chart,
    EventKind,
    HoldNote,
    TapNote,
    TimingEvent,
    TimingGroup,
    Vec2,
    Vec3,
)
from .formats.aff_impl import export_aff, load_aff_text
from .engine.timing import PlaybackClock, TimingTrack

__all__ = [
    "AffError",
    "ExportError",
    "FormatError",
    "Arc",
    "ArcLineType",
    "ArctapNote",
    "CameraEvent",
    "CameraType",
    "Chart",
    "EventKind",
    "HoldNote",
    "TapNote",
    "TimingEvent",
    "TimingGroup",
    "Vec2",
    "Vec3",
    "export_aff",
    "load_aff_text",
    "PlaybackClock",
    "TimingTrack",
]
