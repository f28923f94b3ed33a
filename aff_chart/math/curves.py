from __future__ import annotations

import math
from typing import Callable, Dict, Tuple

from .util import clamp
from ..types import Arc, ArcLineType, CameraEvent, CameraType

HALF_PI = 1.5707963


def ease_s(a: float, b: float, t: float) -> float:
    return (1.0 - t) * a + b * t

def ease_o(a: float, b: float, t: float) -> float:
    return a + (b - a) * (1.0 - math.cos(HALF_PI * t))

def ease_i(a: float, b: float, t: float) -> float:
    return a + (b - a) * math.sin(HALF_PI * t)

def ease_b(a: float, b: float, t: float) -> float:
    # cubic bezier with both control points doubled onto the endpoints
    o = 1.0 - t
    return o ** 3 * a + 3.0 * o ** 2 * t * a + 3.0 * o * t ** 2 * b + t ** 3 * b


_X_EASE: Dict[ArcLineType, Callable[[float, float, float], float]] = {
    ArcLineType.S: ease_s,
    ArcLineType.B: ease_b,
    ArcLineType.SI: ease_i,
    ArcLineType.SISI: ease_i,
    ArcLineType.SISO: ease_i,
    ArcLineType.SO: ease_o,
    ArcLineType.SOSI: ease_o,
    ArcLineType.SOSO: ease_o,
}

_Y_EASE: Dict[ArcLineType, Callable[[float, float, float], float]] = {
    ArcLineType.S: ease_s,
    ArcLineType.SI: ease_s,
    ArcLineType.SO: ease_s,
    ArcLineType.B: ease_b,
    ArcLineType.SISI: ease_i,
    ArcLineType.SOSI: ease_i,
    ArcLineType.SISO: ease_o,
    ArcLineType.SOSO: ease_o,
}


def resolve_x(a: float, b: float, t: float, line_type: ArcLineType) -> float:
    return _X_EASE.get(line_type, ease_s)(a, b, t)

def resolve_y(a: float, b: float, t: float, line_type: ArcLineType) -> float:
    return _Y_EASE.get(line_type, ease_s)(a, b, t)


def arc_progress(arc: Arc, t: float) -> float:
    span = arc.end_time - arc.time
    if span <= 0:
        return 0.0 if t < arc.time else 1.0
    return clamp((float(t) - arc.time) / span, 0.0, 1.0)


def arc_point(arc: Arc, t: float) -> Tuple[float, float]:
    """(x, y) of the arc in chart space at wall time ``t``."""
    p = arc_progress(arc, t)
    return (
        resolve_x(arc.start.x, arc.end.x, p, arc.line_type),
        resolve_y(arc.start.y, arc.end.y, p, arc.line_type),
    )


def qi(v: float) -> float:
    return v ** 3

def qo(v: float) -> float:
    return (v - 1.0) ** 3 + 1.0


def camera_progress(ev: CameraEvent, t: float) -> float:
    if t > ev.time + ev.duration:
        return 1.0
    if t < ev.time:
        return 0.0
    if ev.duration <= 0:
        return 1.0
    p = clamp((float(t) - ev.time) / ev.duration, 0.0, 1.0)
    if ev.camera_type is CameraType.QI:
        return qi(p)
    if ev.camera_type is CameraType.QO:
        return qo(p)
    if ev.camera_type is CameraType.S:
        return ease_s(0.0, 1.0, p)
    return p
