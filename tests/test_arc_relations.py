from __future__ import annotations

from aff_chart.engine.arc_relations import arcs_connected, calculate_arc_relationship
from aff_chart.formats.aff_impl import load_aff_text
from aff_chart.types import Arc, ArcLineType, Vec2

from tests.conftest import FULL_CHART, make_group


def _arc(t0, t1, x0, y0, x1, y1, color=0, void=False):
    return Arc(t0, t1, Vec2(x0, y0), Vec2(x1, y1), ArcLineType.S, color, void)


def test_connection_tolerances():
    a = _arc(0, 1000, 0, 0, 0.5, 1.0)
    assert arcs_connected(a, _arc(1005, 2000, 0.55, 1.0, 1, 1))
    assert arcs_connected(a, _arc(991, 2000, 0.45, 1.0, 1, 1))
    # x drift beyond a tenth is too far
    assert not arcs_connected(a, _arc(1000, 2000, 0.65, 1.0, 1, 1))
    # y must match exactly
    assert not arcs_connected(a, _arc(1000, 2000, 0.5, 0.99, 1, 1))
    assert not arcs_connected(a, _arc(1010, 2000, 0.5, 1.0, 1, 1))


def test_chain_of_same_colour():
    g = make_group((0, 120, 4))
    a = _arc(0, 1000, 0, 0, 0.5, 1.0)
    b = _arc(1005, 2000, 0.55, 1.0, 1, 1)
    g.events.extend([b, a])  # file order does not matter
    calculate_arc_relationship(g)

    assert a.render_head is True
    assert b.render_head is False
    # sorted by time, as event indices of the group
    assert a.arc_group == [2, 1]
    assert b.arc_group == a.arc_group
    assert b.judge_timings == [1255, 1505, 1755]
    assert a.judge_timings == [0, 250, 500, 750]


def test_colour_change_hides_head_without_merging():
    g = make_group((0, 120, 4))
    a = _arc(0, 1000, 0, 0, 0.5, 1.0, color=0)
    c = _arc(1000, 2000, 0.5, 1.0, 1, 1, color=1)
    g.events.extend([a, c])
    calculate_arc_relationship(g)

    assert c.render_head is False
    assert a.arc_group == [1]
    assert c.arc_group == [2]


def test_void_and_solid_never_relate():
    g = make_group((0, 120, 4))
    a = _arc(0, 1000, 0, 0, 0.5, 1.0)
    v = _arc(1000, 2000, 0.5, 1.0, 1, 1, void=True)
    g.events.extend([a, v])
    calculate_arc_relationship(g)

    assert v.render_head is True
    assert a.arc_group == [1]
    assert v.arc_group == [2]


def test_resolver_is_idempotent():
    g = make_group((0, 120, 4))
    a = _arc(0, 1000, 0, 0, 0.5, 1.0)
    b = _arc(1000, 2000, 0.5, 1.0, 1, 1)
    g.events.extend([a, b])
    calculate_arc_relationship(g)
    first = (a.arc_group, b.arc_group, a.render_head, b.render_head, b.judge_timings)
    calculate_arc_relationship(g)
    assert (a.arc_group, b.arc_group, a.render_head, b.render_head, b.judge_timings) == first


def test_loaded_chart_is_resolved():
    chart = load_aff_text(FULL_CHART)
    first, second, void_arc = chart.arcs()
    assert second.render_head is False
    assert first.arc_group == second.arc_group
    assert len(first.arc_group) == 2
    assert void_arc.arc_group == [chart.primary.events.index(void_arc)]
    assert void_arc.judge_timings == []
