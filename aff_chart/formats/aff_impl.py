from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from ..errors import ExportError, FormatError
from ..math.util import num_to_2f, num_to_plain
from ..types import (
    Arc,
    ArcLineType,
    ArctapNote,
    CameraEvent,
    CameraType,
    Chart,
    Event,
    EventKind,
    HoldNote,
    TapNote,
    TimingEvent,
    Vec2,
    Vec3,
)

logger = logging.getLogger(__name__)

GROUP_OPEN = "timinggroup("
GROUP_CLOSE = "};"
INDENT = "    "

_HEADER_RE = re.compile(r"^AudioOffset:(-?\d+)$")
_GROUP_RE = re.compile(r"^timinggroup\((.*?)\)\s*\{?$")
_TAP_RE = re.compile(r"^\((.*?),(.*?)\);$")
_HOLD_RE = re.compile(r"^hold\((.*?),(.*?),(.*?)\);$")
_TIMING_RE = re.compile(r"^timing\((.*?),(.*?),(.*?)\);$")
_ARC_RE = re.compile(r"^arc\((.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?)\)(?:\[(.*?)\])?;$")
_ARCTAP_RE = re.compile(r"^arctap\((.*?)\)$")
_CAMERA_RE = re.compile(r"^camera\((.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?),(.*?)\);$")


def _int(s: str, line_no: Optional[int]) -> int:
    try:
        return int(s.strip())
    except ValueError:
        raise FormatError(f"invalid integer field: {s!r}", line_no) from None


def _float(s: str, line_no: Optional[int]) -> float:
    try:
        return float(s.strip())
    except ValueError:
        raise FormatError(f"invalid number field: {s!r}", line_no) from None


def _bool(s: str, line_no: Optional[int]) -> bool:
    v = s.strip()
    if v == "true":
        return True
    if v == "false":
        return False
    raise FormatError(f"invalid boolean field: {s!r}", line_no)


def _match(regex: "re.Pattern[str]", line: str, what: str, line_no: Optional[int]) -> "re.Match[str]":
    m = regex.match(line)
    if m is None:
        raise FormatError(f"malformed {what} event: {line!r}", line_no)
    return m


def _parse_tap(line: str, group: int, line_no: Optional[int]) -> TapNote:
    m = _match(_TAP_RE, line, "tap", line_no)
    return TapNote(time=_int(m.group(1), line_no), lane=_int(m.group(2), line_no), group=group)


def _parse_hold(line: str, group: int, line_no: Optional[int]) -> HoldNote:
    m = _match(_HOLD_RE, line, "hold", line_no)
    return HoldNote(
        time=_int(m.group(1), line_no),
        end_time=_int(m.group(2), line_no),
        lane=_int(m.group(3), line_no),
        group=group,
    )


def _parse_timing(line: str, group: int, line_no: Optional[int]) -> TimingEvent:
    m = _match(_TIMING_RE, line, "timing", line_no)
    return TimingEvent(
        time=_int(m.group(1), line_no),
        bpm=_float(m.group(2), line_no),
        beats_per_line=_float(m.group(3), line_no),
        group=group,
    )


def _parse_arc(line: str, group: int, line_no: Optional[int]) -> Arc:
    m = _match(_ARC_RE, line, "arc", line_no)
    try:
        line_type = ArcLineType(m.group(5).strip())
    except ValueError:
        raise FormatError(f"unknown arc line type: {m.group(5)!r}", line_no) from None

    arc = Arc(
        time=_int(m.group(1), line_no),
        end_time=_int(m.group(2), line_no),
        start=Vec2(_float(m.group(3), line_no), _float(m.group(6), line_no)),
        end=Vec2(_float(m.group(4), line_no), _float(m.group(7), line_no)),
        line_type=line_type,
        color=_int(m.group(8), line_no),
        # group 9 is the hitsound slot, always "none" in playable charts
        is_void=_bool(m.group(10), line_no),
        group=group,
    )

    taps = m.group(11)
    if taps:
        for part in taps.split(","):
            tm = _ARCTAP_RE.match(part.strip())
            if tm is None:
                raise FormatError(f"malformed arctap: {part!r}", line_no)
            arc.arc_taps.append(ArctapNote(time=_int(tm.group(1), line_no), group=group))
    return arc


def _parse_camera(line: str, group: int, line_no: Optional[int]) -> CameraEvent:
    m = _match(_CAMERA_RE, line, "camera", line_no)
    try:
        camera_type = CameraType(m.group(8).strip())
    except ValueError:
        raise FormatError(f"unknown camera type: {m.group(8)!r}", line_no) from None
    f = [_float(m.group(i), line_no) for i in range(2, 8)]
    return CameraEvent(
        time=_int(m.group(1), line_no),
        translation=Vec3(f[0], f[1], f[2]),
        rotation=Vec3(f[3], f[4], f[5]),
        camera_type=camera_type,
        duration=_int(m.group(9), line_no),
        group=group,
    )


_PARSERS: Dict[str, Callable[[str, int, Optional[int]], Event]] = {
    "": _parse_tap,
    "hold": _parse_hold,
    "arc": _parse_arc,
    "timing": _parse_timing,
    "camera": _parse_camera,
}


def parse_event_line(line: str, group: int = 0, line_no: Optional[int] = None) -> Optional[Event]:
    """Parse one event line; ``None`` when the line holds no event at all."""
    index = line.find("(")
    if index == -1:
        return None
    prefix = line[:index]
    parser = _PARSERS.get(prefix)
    if parser is None:
        raise FormatError(f"unknown event type: {prefix}", line_no)
    return parser(line, group, line_no)


def load_aff_text(text: str) -> Chart:
    lines = (text or "").split("\n")

    m = _HEADER_RE.match(lines[0].strip().lstrip("\ufeff")) if lines else None
    if m is None:
        raise FormatError("missing AudioOffset", 0)
    if len(lines) < 2 or lines[1].strip() != "-":
        raise FormatError("malformed header", 1)

    chart = Chart(audio_offset=int(m.group(1)))
    primary = chart.new_group()
    target = primary

    for i in range(2, len(lines)):
        ln = lines[i].strip()
        if not ln:
            continue
        if ln.startswith(GROUP_OPEN):
            gm = _GROUP_RE.match(ln)
            target = chart.new_group(attributes=gm.group(1) if gm else "")
            continue
        if ln.startswith(GROUP_CLOSE):
            target = primary
            continue
        ev = parse_event_line(ln, target.index, i)
        if ev is None:
            logger.warning("skipping line %d without event data: %r", i + 1, ln)
            continue
        target.events.append(ev)

    for g in chart.timing_groups:
        g.refresh_timing()
    chart.recompute_derived()

    logger.debug(
        "parsed chart: offset=%d groups=%d events=%d",
        chart.audio_offset,
        len(chart.timing_groups),
        sum(len(g.events) for g in chart.timing_groups),
    )
    return chart


def _export_tap(e: TapNote, offset: int) -> str:
    return f"({e.time + offset},{e.lane});"


def _export_hold(e: HoldNote, offset: int) -> str:
    return f"hold({e.time + offset},{e.end_time + offset},{e.lane});"


def _export_timing(e: TimingEvent, offset: int) -> str:
    return f"timing({e.time + offset},{num_to_2f(e.bpm)},{num_to_2f(e.beats_per_line)});"


def _export_arc(e: Arc, offset: int) -> str:
    line = (
        f"arc({e.time + offset},{e.end_time + offset},{num_to_2f(e.start.x)},{num_to_2f(e.end.x)}"
        f",{e.line_type.value},{num_to_2f(e.start.y)},{num_to_2f(e.end.y)},{e.color},none,"
        f"{'true' if e.is_void else 'false'})"
    )
    if not e.arc_taps:
        return line + ";"
    return line + "[" + ",".join(f"arctap({t.time + offset})" for t in e.arc_taps) + "];"


def _export_camera(e: CameraEvent, offset: int) -> str:
    tr, rot = e.translation, e.rotation
    nums = ",".join(num_to_plain(v) for v in (tr.x, tr.y, tr.z, rot.x, rot.y, rot.z))
    return f"camera({e.time + offset},{nums},{e.camera_type.value},{e.duration});"


_EXPORTERS: Dict[EventKind, Callable[..., str]] = {
    EventKind.TAP: _export_tap,
    EventKind.HOLD: _export_hold,
    EventKind.TIMING: _export_timing,
    EventKind.ARC: _export_arc,
    EventKind.CAMERA: _export_camera,
}


def export_event(event: Event, offset: int = 0) -> str:
    fn = _EXPORTERS.get(event.kind)
    if fn is None:
        raise ExportError(f"{event.kind.value} event cannot be exported on its own line")
    return fn(event, offset)


def export_aff(chart: Chart, fix_offset: bool = False) -> str:
    """Serialize ``chart``.

    With ``fix_offset`` the header offset becomes 0 and every time is shifted
    by the old offset, so notes keep their absolute position in the audio.
    """
    offset = chart.audio_offset if fix_offset else 0
    out: List[str] = [f"AudioOffset:{0 if fix_offset else chart.audio_offset}\n", "-\n"]
    for g in chart.timing_groups:
        if not g.is_primary:
            out.append(f"{GROUP_OPEN}{g.attributes}){{\n")
        prefix = "" if g.is_primary else INDENT
        for e in g.events:
            out.append(prefix + export_event(e, offset) + "\n")
        if not g.is_primary:
            out.append(GROUP_CLOSE + "\n")
    return "".join(out)
