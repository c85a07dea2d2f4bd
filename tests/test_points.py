from knotwork.core import IdAllocator, Knot, Point, PointKind


def test_coordinates_round_half_up():
    p = Point(0, 2.5, -2.5)
    assert (p.x, p.y) == (3, -2)
    p.move_to(10.49, 7.51)
    assert (p.x, p.y) == (10, 8)


def test_equality_is_identity_not_position():
    assert Point(1, 0, 0) == Point(1, 50, 50)
    assert Point(1, 0, 0) != Point(2, 0, 0)
    assert len({Point(3, 1, 1), Point(3, 9, 9)}) == 1


def test_id_allocator_never_reuses():
    ids = IdAllocator()
    assert [ids.next_id() for _ in range(4)] == [0, 1, 2, 3]
    other = IdAllocator()
    assert other.next_id() == 0


def test_handles_are_tagged_with_owner_and_slot():
    knot = Knot(10, 0, 0)
    h1, h2 = Point(11, -5, 0), Point(12, 5, 0)
    knot.handler1 = h1
    knot.handler2 = h2

    assert knot.kind is PointKind.KNOT and not knot.is_handle()
    assert h1.is_handler1() and not h1.is_handler2()
    assert h2.is_handler2()
    assert h1.owner_id == h2.owner_id == 10
    assert knot.opposite(h1) is h2
    assert knot.opposite(h2) is h1
    assert knot.outgoing is h2


def test_outgoing_falls_back_to_handler1():
    knot = Knot(0, 0, 0)
    knot.handler1 = Point(1, 4, 4)
    assert knot.outgoing is knot.handler1
    assert list(knot.handles()) == [knot.handler1]


def test_translate_keeps_handle_offsets():
    knot = Knot(0, 0, 0)
    knot.handler1 = Point(1, -10, 0)
    knot.handler2 = Point(2, 10, 5)
    knot.translate(50, 50)
    assert (knot.x, knot.y) == (50, 50)
    assert (knot.handler1.x, knot.handler1.y) == (40, 50)
    assert (knot.handler2.x, knot.handler2.y) == (60, 55)


def test_to_dict_includes_hp2_only_when_owned():
    knot = Knot(0, 1, 2)
    knot.handler1 = Point(1, 3, 4)
    assert knot.to_dict() == {"x": 1, "y": 2, "hp1": {"x": 3, "y": 4}}
    knot.handler2 = Point(2, 5, 6)
    assert knot.to_dict()["hp2"] == {"x": 5, "y": 6}
