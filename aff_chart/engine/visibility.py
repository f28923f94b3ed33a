from __future__ import annotations

from typing import List, Tuple

from .timing import PlaybackClock, TimingTrack

# relative position of the far end of the visible track
FAR_POS = 100000.0


def render_windows(track: TimingTrack, clock: PlaybackClock, far: float = FAR_POS) -> List[Tuple[int, int]]:
    """Clock-time windows whose events are on the visible stretch of track.

    Args:
        track: Timing track of the group
        clock: Current playback state
        far: Relative position of the far end of the track

    Returns:
        List of inclusive (start, end) pairs in clock ms
    """
    now = int(clock.timing)
    return [
        (now, now),
        (track.timing_by_pos(0.0, clock), track.timing_by_pos(far, clock)),
    ]


def should_render(windows: List[Tuple[int, int]], t: float, delay: int = 120) -> bool:
    for start, end in windows:
        if start - delay <= t <= end:
            return True
    return False
