from __future__ import annotations

from typing import Tuple

import numpy as np

from ..types import Chart

MAX_SCORE = 10_000_000


def _instants(chart: Chart) -> Tuple[np.ndarray, np.ndarray]:
    # (strict, inclusive): taps/heads/arctaps count once passed, judge instants once reached
    strict = []
    inclusive = []
    strict.extend(t.time for t in chart.taps())
    for h in chart.holds():
        # the head is its own judgement on top of the ticks, even when the
        # first tick shares its instant
        strict.append(h.time)
        inclusive.extend(h.judge_timings)
    for a in chart.arcs():
        if a.is_void:
            strict.extend(t.time for t in a.arc_taps)
        else:
            inclusive.extend(a.judge_timings)
    return np.sort(np.asarray(strict, dtype=np.int64)), np.sort(np.asarray(inclusive, dtype=np.int64))


def count_total(chart: Chart) -> int:
    strict, inclusive = _instants(chart)
    return int(strict.size + inclusive.size)


def count_combo(chart: Chart, time: float) -> int:
    """Judge instants already elapsed at chart time ``time`` (clock minus offset)."""
    strict, inclusive = _instants(chart)
    passed = np.searchsorted(strict, time, side="left")
    reached = np.searchsorted(inclusive, time, side="right")
    return int(passed + reached)


def compute_score(combo: int, total: int) -> int:
    total = total or 1
    return int(MAX_SCORE * combo // total) + int(combo)


def score_at(chart: Chart, time: float) -> Tuple[int, int, int]:
    """(score, combo, total) at chart time ``time``."""
    total = count_total(chart)
    combo = count_combo(chart, time)
    return compute_score(combo, total), combo, total
