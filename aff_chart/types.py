from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .engine.timing import TimingTrack


class EventKind(enum.Enum):
    TAP = "tap"
    HOLD = "hold"
    ARC = "arc"
    ARCTAP = "arctap"
    TIMING = "timing"
    CAMERA = "camera"


class ArcLineType(enum.Enum):
    S = "s"
    SI = "si"
    SISI = "sisi"
    SISO = "siso"
    SO = "so"
    SOSI = "sosi"
    SOSO = "soso"
    B = "b"


class CameraType(enum.Enum):
    QI = "qi"
    QO = "qo"
    L = "l"
    S = "s"
    RESET = "reset"


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class TimingEvent:
    time: int
    bpm: float              # 0 = stop, span governed by the next breakpoint
    beats_per_line: float
    group: int = 0          # index into Chart.timing_groups
    kind: EventKind = field(default=EventKind.TIMING, init=False)


@dataclass
class TapNote:
    time: int
    lane: int               # 1..4
    group: int = 0
    kind: EventKind = field(default=EventKind.TAP, init=False)


@dataclass
class HoldNote:
    time: int
    end_time: int
    lane: int
    group: int = 0
    kind: EventKind = field(default=EventKind.HOLD, init=False)

    # derived, see engine.judge_timings
    judge_timings: List[int] = field(default_factory=list)


@dataclass
class ArctapNote:
    time: int
    group: int = 0
    kind: EventKind = field(default=EventKind.ARCTAP, init=False)


@dataclass
class Arc:
    time: int
    end_time: int
    start: Vec2
    end: Vec2
    line_type: ArcLineType
    color: int              # 0 blue, 1 red, 2 green
    is_void: bool
    arc_taps: List[ArctapNote] = field(default_factory=list)
    group: int = 0
    kind: EventKind = field(default=EventKind.ARC, init=False)

    # derived, see engine.arc_relations
    arc_group: List[int] = field(default_factory=list)  # event indices in the owning group
    render_head: bool = True
    judge_timings: List[int] = field(default_factory=list)


@dataclass
class CameraEvent:
    time: int
    translation: Vec3
    rotation: Vec3
    camera_type: CameraType
    duration: int
    group: int = 0
    kind: EventKind = field(default=EventKind.CAMERA, init=False)


Event = Union[TimingEvent, TapNote, HoldNote, Arc, ArctapNote, CameraEvent]


@dataclass
class TimingGroup:
    index: int
    is_primary: bool = False
    attributes: str = ""    # raw argument text of timinggroup(...)
    events: List[Event] = field(default_factory=list)

    # recomputed by refresh_timing() only
    timing_events: Tuple[TimingEvent, ...] = field(default=(), repr=False)
    track: Optional["TimingTrack"] = field(default=None, repr=False)

    def refresh_timing(self) -> "TimingTrack":
        from .engine.timing import TimingTrack

        evs = [e for e in self.events if e.kind is EventKind.TIMING]
        evs.sort(key=lambda e: e.time)
        self.timing_events = tuple(evs)
        self.track = TimingTrack(self.timing_events)
        return self.track

    def add_event(self, event: Event) -> None:
        event.group = self.index
        self.events.append(event)
        self.refresh_timing()

    def remove_event(self, event: Event) -> None:
        # identity, not equality: two identical taps are still two notes
        for i, e in enumerate(self.events):
            if e is event:
                del self.events[i]
                break
        else:
            raise ValueError("event does not belong to this timing group")
        self.refresh_timing()

    def of_kind(self, kind: EventKind) -> List[Event]:
        return [e for e in self.events if e.kind is kind]


@dataclass
class Chart:
    audio_offset: int = 0
    timing_groups: List[TimingGroup] = field(default_factory=list)

    @property
    def primary(self) -> TimingGroup:
        return self.timing_groups[0]

    def _collect(self, kind: EventKind) -> List[Event]:
        out: List[Event] = []
        for g in self.timing_groups:
            out.extend(g.of_kind(kind))
        return out

    def taps(self) -> List[TapNote]:
        return self._collect(EventKind.TAP)  # type: ignore[return-value]

    def holds(self) -> List[HoldNote]:
        return self._collect(EventKind.HOLD)  # type: ignore[return-value]

    def arcs(self) -> List[Arc]:
        return self._collect(EventKind.ARC)  # type: ignore[return-value]

    def cameras(self) -> List[CameraEvent]:
        return self._collect(EventKind.CAMERA)  # type: ignore[return-value]

    def timing_events(self) -> List[TimingEvent]:
        return self._collect(EventKind.TIMING)  # type: ignore[return-value]

    def new_group(self, attributes: str = "") -> TimingGroup:
        g = TimingGroup(index=len(self.timing_groups), is_primary=not self.timing_groups, attributes=attributes)
        self.timing_groups.append(g)
        return g

    def last_event_time(self) -> int:
        t = 0
        for g in self.timing_groups:
            for e in g.events:
                t = max(t, int(getattr(e, "end_time", e.time)))
                if e.kind is EventKind.CAMERA:
                    t = max(t, e.time + e.duration)
        return t

    def recompute_derived(self) -> None:
        """Re-run the arc resolver and judge-timing generator on every group.

        Call after any structural edit (insert/delete of notes or timings).
        """
        from .engine.arc_relations import calculate_arc_relationship

        for g in self.timing_groups:
            if g.track is None:
                g.refresh_timing()
            # also regenerates judge timings for holds and arcs
            calculate_arc_relationship(g)
