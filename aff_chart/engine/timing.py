"""Time <-> scroll position conversion for one timing group.

Position is scrolled on-track distance in ms-equivalent units. Inside the
segment that starts at breakpoint ``i`` it advances at

    rate_i = bpm_i / base_bpm * drop_rate

so a stop (``bpm == 0``) freezes the position for the segment's real-time
span and a negative bpm scrolls backwards.

The playback collaborator (clock, drop rate, audio offset, song length) is
passed in explicitly through :class:`PlaybackClock`; a track holds nothing but
its sorted breakpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..errors import FormatError
from ..types import TimingEvent


@dataclass(frozen=True)
class PlaybackClock:
    song_length: int
    timing: int = 0          # current playback time, ms (audio offset included)
    drop_rate: float = 100.0
    offset: int = 0          # chart audio offset, ms


class TimingTrack:
    def __init__(self, timings: Sequence[TimingEvent]):
        self.timings = tuple(timings)

    def __len__(self) -> int:
        return len(self.timings)

    @property
    def base_bpm(self) -> float:
        if not self.timings:
            raise FormatError("timing group has no timing event")
        return float(self.timings[0].bpm)

    @property
    def is_static(self) -> bool:
        """True when the group opens with a stop; its position never moves."""
        return self.base_bpm == 0

    def rate(self, i: int, drop_rate: float) -> float:
        if self.is_static:
            return 0.0
        return float(self.timings[i].bpm) / self.base_bpm * float(drop_rate)

    def segment_index(self, t: float, offset: float = 0.0) -> int:
        """Index of the breakpoint segment ``[T_i, T_i+1)`` containing ``t``.

        At/after the last breakpoint the last index is returned; before the
        first one the first segment is extended backwards (index 0).
        """
        ts = self.timings
        if not ts:
            raise FormatError("timing group has no timing event")
        last = len(ts) - 1
        if t >= ts[last].time + offset:
            return last
        for i in range(last):
            if ts[i].time + offset <= t < ts[i + 1].time + offset:
                return i
        return 0

    def bpm_by_timing(self, t: float) -> float:
        return float(self.timings[self.segment_index(t)].bpm)

    def pos_by_timing_with_start(self, start: float, timing: float, *, drop_rate: float, offset: float = 0.0) -> float:
        reverse = start > timing
        current = (timing if reverse else start) - offset
        target = (start if reverse else timing) - offset

        ts = self.timings
        a = self.segment_index(current)
        b = self.segment_index(target)

        if a == b:
            pos = (target - current) * self.rate(a, drop_rate)
        else:
            pos = (ts[a + 1].time - current) * self.rate(a, drop_rate)
            for i in range(a + 1, b):
                pos += (ts[i + 1].time - ts[i].time) * self.rate(i, drop_rate)
            pos += (target - ts[b].time) * self.rate(b, drop_rate)

        return -pos if reverse else pos

    def pos_by_timing(self, timing: float, clock: PlaybackClock) -> float:
        """Position of ``timing`` relative to where the clock is now."""
        return self.pos_by_timing_with_start(clock.timing, timing, drop_rate=clock.drop_rate, offset=clock.offset)

    def timing_by_pos(self, pos: float, clock: PlaybackClock, depth: int = 0) -> int:
        """Clock time at which the relative position ``pos`` is reached.

        Segments are walked forward from the one holding ``clock.timing``.
        Each segment brackets the positions from its starting accumulated
        position (included) to its ending one (excluded), in whichever
        direction it scrolls; a stop brackets only its starting position.
        ``depth`` selects the depth-th crossing (0 = first).
        """
        ts = self.timings
        base = self.base_bpm
        now = float(clock.timing)
        off = float(clock.offset)
        song_length = int(clock.song_length)
        drop = float(clock.drop_rate)

        end = len(ts) - 1
        start = self.segment_index(now, off)

        if start == end:
            if base == 0:
                # frozen track: only the current position is ever on it
                return self._clamp(now, song_length) if pos == 0 else song_length
            rate = (float(ts[end].bpm) or 1.0) / base * drop
            return self._clamp(pos / rate + now, song_length)

        acc = 0.0
        crossings = 0
        for i in range(start, end + 1):
            seg_start = now if i == start else ts[i].time + off
            seg_end = ts[i + 1].time + off if i < end else float(song_length)
            rate = self.rate(i, drop)
            delta = (seg_end - seg_start) * rate

            if _brackets(acc, delta, pos):
                if crossings == depth:
                    if rate == 0.0:
                        return self._clamp(seg_start, song_length)
                    return self._clamp(seg_start + (pos - acc) / rate, song_length)
                crossings += 1
            acc += delta

        return song_length

    @staticmethod
    def _clamp(t: float, song_length: int) -> int:
        if t >= song_length:
            return int(song_length)
        if t <= 0:
            return 0
        return int(math.floor(t))


def _brackets(acc: float, delta: float, pos: float) -> bool:
    if delta > 0:
        return acc <= pos < acc + delta
    if delta < 0:
        return acc + delta < pos <= acc
    return pos == acc
