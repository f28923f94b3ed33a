from __future__ import annotations

from typing import List

from .timing import TimingTrack

LEAD_IN_MS = -3000.0


def _step(bpm: float, beats_per_line: float) -> float:
    return 60000.0 / abs(bpm) * beats_per_line


def beatline_timings(track: TimingTrack, song_length: int) -> List[float]:
    """Chart times (ms) of the bar lines drawn across the track.

    Each segment draws a line every ``beats_per_line`` beats; a stop segment
    draws one line at its start. Lines before the first breakpoint are
    extrapolated back to ``LEAD_IN_MS``.
    """
    ts = track.timings
    out: List[float] = []
    if not ts:
        return out

    for i in range(len(ts) - 1):
        cur, nxt = ts[i], ts[i + 1]
        seg = (nxt.time - cur.time) if cur.bpm == 0 else _step(cur.bpm, cur.beats_per_line)
        if seg <= 0:
            continue
        n = 0
        while True:
            t = cur.time + n * seg
            if t >= nxt.time:
                break
            out.append(float(t))
            n += 1

    last = ts[-1]
    seg = (song_length - last.time) if last.bpm == 0 else _step(last.bpm, last.beats_per_line)
    if seg > 0:
        n = 0
        t = float(last.time)
        while t < song_length:
            t = last.time + n * seg
            out.append(float(t))
            n += 1

    first = ts[0]
    delta = _step(first.bpm, first.beats_per_line) if first.bpm != 0 else 0.0
    if delta > 0:
        lead: List[float] = []
        n = 1
        while True:
            t = first.time - n * delta
            lead.append(float(t))
            if t < LEAD_IN_MS:
                break
            n += 1
        out = lead[::-1] + out

    return out
