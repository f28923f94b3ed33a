from __future__ import annotations

from typing import Dict, List

from ..types import Arc, EventKind, TimingGroup
from .judge_timings import assign_judge_timings

X_TOLERANCE = 0.1
TIME_TOLERANCE_MS = 9


def arcs_connected(a: Arc, b: Arc) -> bool:
    """True when ``b`` starts where ``a`` ends (within authoring jitter)."""
    return (
        abs(a.end.x - b.start.x) < X_TOLERANCE
        and a.end.y == b.start.y
        and abs(a.end_time - b.time) <= TIME_TOLERANCE_MS
    )


class _DisjointSet:
    def __init__(self, keys: List[int]):
        self.parent: Dict[int, int] = {k: k for k in keys}

    def find(self, k: int) -> int:
        root = k
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[k] != root:
            self.parent[k], k = root, self.parent[k]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[rb] = ra


def calculate_arc_relationship(group: TimingGroup) -> None:
    """Merge touching arcs into chains and clear continued heads.

    Fills ``arc_group`` (event indices sorted by time) and ``render_head`` on
    every arc of the group, then regenerates judge timings.
    """
    idx = [i for i, e in enumerate(group.events) if e.kind is EventKind.ARC]
    arcs: Dict[int, Arc] = {i: group.events[i] for i in idx}  # type: ignore[misc]

    for a in arcs.values():
        a.render_head = True
        a.arc_group = []

    chains = _DisjointSet(idx)
    for ia in idx:
        a = arcs[ia]
        for ib in idx:
            if ia == ib:
                continue
            b = arcs[ib]
            if not arcs_connected(a, b):
                continue
            if a.is_void != b.is_void:
                continue
            if a.color == b.color:
                chains.union(ia, ib)
            # colour does not matter for the head
            b.render_head = False

    members: Dict[int, List[int]] = {}
    for i in idx:
        members.setdefault(chains.find(i), []).append(i)
    for group_idx in members.values():
        group_idx.sort(key=lambda i: (arcs[i].time, i))
        for i in group_idx:
            arcs[i].arc_group = list(group_idx)

    assign_judge_timings(group)
