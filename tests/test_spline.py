import math

import pytest

from knotwork.core import Spline
from conftest import straight_records


def test_round_trip_export_import():
    records = [
        {"x": 10, "y": 20, "hp1": {"x": 0, "y": 0}},
        {"x": 110, "y": 40, "hp1": {"x": 90, "y": 30}, "hp2": {"x": 130, "y": 50}},
        {"x": 200, "y": 10, "hp1": {"x": 180, "y": 0}},
    ]
    spline = Spline.from_points(records)
    assert spline.to_points() == records
    assert Spline.from_points(spline.to_points()).to_points() == spline.to_points()


def test_import_rounds_coordinates():
    spline = Spline.from_points([{"x": 1.4, "y": 1.6, "hp1": {"x": 0.5, "y": -0.5}}])
    assert spline.to_points() == [{"x": 1, "y": 2, "hp1": {"x": 1, "y": 0}}]


@pytest.mark.parametrize("bad", [
    [{"y": 0, "hp1": {"x": 0, "y": 0}}],
    [{"x": 0, "y": 0}],
    [{"x": "a", "y": 0, "hp1": {"x": 0, "y": 0}}],
    [{"x": 0, "y": 0, "hp1": {"x": 0}}],
    [{"x": 0, "y": 0, "hp1": {"x": 0, "y": 0}, "hp2": [1, 2]}],
    [{"x": True, "y": 0, "hp1": {"x": 0, "y": 0}}],
    [{"x": math.nan, "y": 0, "hp1": {"x": 0, "y": 0}}],
    ["not a record"],
    "not a list",
])
def test_malformed_records_are_rejected_without_side_effects(straight_spline, bad):
    before = straight_spline.to_points()
    with pytest.raises(ValueError):
        straight_spline.load_points(bad)
    assert straight_spline.to_points() == before


def test_error_names_the_record():
    records = straight_records() + [{"x": 1, "y": 2}]
    with pytest.raises(ValueError, match=r"points\[2\]"):
        Spline.from_points(records)


def test_segments_use_outgoing_and_incoming_handles(straight_spline):
    (p0, p1, p2, p3), = straight_spline.segments()
    assert (p1.x, p2.x) == (100, 200)
    assert p0 is straight_spline[0] and p3 is straight_spline[1]


def test_owner_of_resolves_by_identifier(straight_spline):
    knot = straight_spline[1]
    assert straight_spline.owner_of(knot.handler1) is knot
    assert straight_spline.owner_of(knot) is knot
    orphan = straight_spline.new_point(0, 0)
    assert straight_spline.owner_of(orphan) is None


def test_find_knot_returns_first_match_not_nearest():
    # known discrepancy with project(): encounter order wins here
    spline = Spline.from_points([
        {"x": 0, "y": 0, "hp1": {"x": 0, "y": 0}},
        {"x": 3, "y": 0, "hp1": {"x": 3, "y": 0}},
    ])
    assert spline.find_knot(2, 0, 10) is spline[0]
    assert spline.find_knot(50, 50, 10) is None


def test_find_knot_threshold_is_strict(straight_spline):
    assert straight_spline.find_knot(10, 0, 10) is None
    assert straight_spline.find_knot(9, 0, 10) is straight_spline[0]


def test_project_finds_parameter_on_segment(straight_spline):
    hit = straight_spline.project(150, 4, 10)
    assert hit is not None
    assert hit.segment_index == 0 and hit.insert_index == 1
    assert hit.t == pytest.approx(0.5)
    assert hit.distance == pytest.approx(4.0)
    assert hit.point == pytest.approx((150.0, 0.0))
    assert hit.p0 is straight_spline[0] and hit.p3 is straight_spline[1]


def test_project_misses_outside_threshold(straight_spline):
    assert straight_spline.project(150, 40, 10) is None
    assert Spline().project(0, 0, 10) is None


def test_project_prefers_true_minimum_across_segments():
    # an L shape: the first segment is in range, the second one is closer
    spline = Spline.from_points([
        {"x": 0, "y": 0, "hp1": {"x": 100, "y": 0}},
        {"x": 300, "y": 0, "hp1": {"x": 200, "y": 0}, "hp2": {"x": 300, "y": 100}},
        {"x": 300, "y": 300, "hp1": {"x": 300, "y": 200}},
    ])
    hit = spline.project(295, 8, 10)
    assert hit.segment_index == 1
    assert hit.t == pytest.approx(0.03)
    assert hit.distance == pytest.approx(math.hypot(5, 1))


def test_pick_point_prefers_later_point_on_ties():
    spline = Spline.from_points([{"x": 0, "y": 0, "hp1": {"x": 0, "y": 0}}])
    assert spline.pick_point(0, 0, 10) is spline[0].handler1
    assert spline.pick_point(20, 0, 10) is None


def test_regularly_placed_points_needs_two_knots():
    assert Spline().regularly_placed_points(5) == []
    single = Spline.from_points([{"x": 0, "y": 0, "hp1": {"x": 0, "y": 0}}])
    assert single.regularly_placed_points(5) == []


def test_regularly_placed_points_on_two_knots():
    spline = Spline.from_points([
        {"x": 0, "y": 0, "hp1": {"x": 33, "y": 0}},
        {"x": 100, "y": 0, "hp1": {"x": 67, "y": 0}},
    ])
    points = spline.regularly_placed_points(3)
    assert len(points) == 3
    xs = [x for x, _ in points]
    assert xs == pytest.approx([0.0, 50.0, 100.0], abs=0.5)
    assert all(y == pytest.approx(0.0) for _, y in points)


def test_regularly_placed_points_are_evenly_spaced_across_segments():
    spline = Spline.from_points([
        {"x": 0, "y": 0, "hp1": {"x": 50, "y": 0}},
        {"x": 150, "y": 0, "hp1": {"x": 100, "y": 0}, "hp2": {"x": 200, "y": 0}},
        {"x": 300, "y": 0, "hp1": {"x": 250, "y": 0}},
    ])
    points = spline.regularly_placed_points(7)
    assert len(points) == 7
    assert [x for x, _ in points] == pytest.approx([0, 50, 100, 150, 200, 250, 300], abs=1e-6)


def test_regularly_placed_points_count_is_exact():
    spline = Spline.from_points([
        {"x": 0, "y": 0, "hp1": {"x": 0, "y": 80}},
        {"x": 120, "y": 0, "hp1": {"x": 100, "y": -60}, "hp2": {"x": 140, "y": 60}},
        {"x": 200, "y": 90, "hp1": {"x": 260, "y": 40}},
    ])
    for count in (1, 2, 5, 13, 50):
        assert len(spline.regularly_placed_points(count)) == count
    assert spline.regularly_placed_points(0) == []


def test_single_point_lands_on_the_end(straight_spline):
    assert straight_spline.regularly_placed_points(1) == [pytest.approx((300.0, 0.0))]
