from __future__ import annotations

from typing import Tuple

import pytest

from aff_chart.engine.timing import PlaybackClock
from aff_chart.types import TimingEvent, TimingGroup


def make_group(*timings: Tuple[int, float, float], index: int = 0) -> TimingGroup:
    g = TimingGroup(index=index, is_primary=index == 0)
    for t, bpm, bpl in timings:
        g.events.append(TimingEvent(time=t, bpm=bpm, beats_per_line=bpl, group=index))
    g.refresh_timing()
    return g


@pytest.fixture
def freeze_group() -> TimingGroup:
    return make_group((0, 120, 4), (1000, 0, 4), (2000, 120, 4))


@pytest.fixture
def varying_group() -> TimingGroup:
    # rates at drop_rate 2: 2, 4, 1
    return make_group((0, 100, 4), (1000, 200, 4), (3000, 50, 4))


@pytest.fixture
def clock() -> PlaybackClock:
    return PlaybackClock(song_length=10000, timing=0, drop_rate=1.0)


SCENARIO = "AudioOffset:0\n-\ntiming(0,120,4);\n(1000,1);\n"

FULL_CHART = """AudioOffset:-120
-
timing(0,126.00,4.00);
(1000,1);
(1250,4);
hold(2000,3000,2);
arc(3000,3500,0.00,0.50,si,1.00,0.33,0,none,false);
arc(3500,4000,0.50,1.00,b,0.33,0.00,0,none,false);
arc(4000,4500,0.25,0.75,s,1.00,1.00,1,none,true)[arctap(4100),arctap(4400)];
camera(5000,100.5,0,-30,0,0,12,qi,500);
camera(6000,0,0,0,0,0,0,reset,1);
timinggroup(noinput){
    timing(0,126.00,4.00);
    timing(7000,252.00,4.00);
    (7500,3);
    hold(8000,9000,1);
};
(9500,2);
"""
