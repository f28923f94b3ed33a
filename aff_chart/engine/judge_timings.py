from __future__ import annotations

import logging
import math
from typing import List, Union

from ..types import Arc, EventKind, HoldNote, TimingGroup
from .timing import TimingTrack

logger = logging.getLogger(__name__)

# at or above this tempo one judge per beat, below it two
DENSE_BPM = 255.0


def judge_interval(bpm: float) -> float:
    return 60000.0 / bpm / (1.0 if bpm >= DENSE_BPM else 2.0)


def calculate_judge_timings(note: Union[HoldNote, Arc], track: TimingTrack) -> List[int]:
    if note.kind is EventKind.ARC and note.is_void:
        return []
    duration = note.end_time - note.time
    if duration <= 0:
        return []

    bpm = track.bpm_by_timing(note.time)
    if bpm <= 0:
        return []

    interval = judge_interval(bpm)
    total = int(math.floor(duration / interval))
    if total <= 1:
        return [int(math.floor(note.time + duration * 0.5))]

    # a continued arc does not re-judge the shared head instant
    first = 1 if (note.kind is EventKind.ARC and not note.render_head) else 0

    out: List[int] = []
    for n in range(first, total + 1):
        t = int(math.floor(note.time + n * interval))
        if t >= note.end_time:
            break
        if out and t <= out[-1]:
            continue
        out.append(t)
    return out


def assign_judge_timings(group: TimingGroup) -> None:
    track = group.track if group.track is not None else group.refresh_timing()
    has_timing = len(track) > 0
    for e in group.events:
        if e.kind is not EventKind.HOLD and e.kind is not EventKind.ARC:
            continue
        if not has_timing:
            e.judge_timings = []
            continue
        e.judge_timings = calculate_judge_timings(e, track)
    if not has_timing:
        logger.debug("timing group %d has no timing event; judge timings left empty", group.index)
