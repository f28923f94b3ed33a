"""Chart-derived schedule computations.

Every function here takes its inputs explicitly (timing group, track,
playback clock); nothing reads global playback state.
"""

from __future__ import annotations

from .timing import PlaybackClock, TimingTrack
from .judge_timings import assign_judge_timings, calculate_judge_timings, judge_interval
from .arc_relations import arcs_connected, calculate_arc_relationship

__all__ = [
    "PlaybackClock",
    "TimingTrack",
    "assign_judge_timings",
    "calculate_judge_timings",
    "judge_interval",
    "arcs_connected",
    "calculate_arc_relationship",
]
