import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterator, Sequence

from .math import Vec, as_vec, cubic_eval
from .points import IdAllocator, Knot, Point
from .sampler import ArcLengthSampler

logger = logging.getLogger(__name__)

Segment = tuple[Knot, Point, Point, Knot]


@dataclass(frozen=True)
class CurveHit:
    """Closest sampled point of the spline to a query position."""
    point: Vec
    distance: float
    segment_index: int
    t: float
    p0: Knot
    p1: Point
    p2: Point
    p3: Knot

    @property
    def insert_index(self) -> int:
        return self.segment_index + 1

    @property
    def controls(self) -> Segment:
        return self.p0, self.p1, self.p2, self.p3


def _coordinate(record: dict, key: str, where: str) -> float:
    value = record.get(key) if isinstance(record, dict) else None
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValueError(f"{where}: '{key}' must be a finite number, got {value!r}")
    return float(value)


def _parse_xy(record, where: str) -> Vec:
    if not isinstance(record, dict):
        raise ValueError(f"{where}: expected a mapping with 'x' and 'y', got {record!r}")
    return _coordinate(record, "x", where), _coordinate(record, "y", where)


def parse_point_records(records: Sequence[dict]) -> list[tuple[Vec, Vec, Vec | None]]:
    """
    Validate knot records of the form ``{x, y, hp1: {x, y}, hp2?: {x, y}}``.
    Raises ValueError on the first malformed record.
    """
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise ValueError(f"points must be a list of knot records, got {type(records).__name__}")
    parsed = []
    for i, record in enumerate(records):
        where = f"points[{i}]"
        knot = _parse_xy(record, where)
        if "hp1" not in record:
            raise ValueError(f"{where}: missing 'hp1'")
        hp1 = _parse_xy(record["hp1"], f"{where}.hp1")
        hp2 = _parse_xy(record["hp2"], f"{where}.hp2") if "hp2" in record else None
        parsed.append((knot, hp1, hp2))
    return parsed


@dataclass
class Spline:
    """
      - knots: ordered anchors; knot i and knot i+1 bound segment i
      - ids: identifier allocator shared by every point of this spline
    """
    knots: list[Knot] = field(default_factory=list)
    ids: IdAllocator = field(default_factory=IdAllocator)

    # ---- factories ----------------------------------------------------------
    def new_point(self, x: float, y: float) -> Point:
        return Point(self.ids.next_id(), x, y)

    def new_knot(self, x: float, y: float, from_subdivision: bool = False) -> Knot:
        return Knot(self.ids.next_id(), x, y, from_subdivision=from_subdivision)

    def clone_point(self, point: Point) -> Point:
        return self.new_point(point.x, point.y)

    # ---- container protocol -------------------------------------------------
    def __len__(self) -> int:
        return len(self.knots)

    def __iter__(self) -> Iterator[Knot]:
        return iter(self.knots)

    def __getitem__(self, index: int) -> Knot:
        return self.knots[index]

    def clear(self) -> None:
        self.knots = []

    def index_of(self, knot: Point) -> int | None:
        for i, k in enumerate(self.knots):
            if k.id == knot.id:
                return i
        return None

    def knot_by_id(self, knot_id: int | None) -> Knot | None:
        if knot_id is None:
            return None
        for k in self.knots:
            if k.id == knot_id:
                return k
        return None

    def owner_of(self, point: Point) -> Knot | None:
        """Knot a point belongs to: itself for a knot, the owning knot for a handle."""
        if not point.is_handle():
            return self.knot_by_id(point.id)
        owner = self.knot_by_id(point.owner_id)
        if owner is None or point not in list(owner.handles()):
            return None
        return owner

    def all_points(self) -> Iterator[Point]:
        for k in self.knots:
            yield k
            yield from k.handles()

    def reset_active(self) -> None:
        for p in self.all_points():
            p.active = False

    def segments(self) -> list[Segment]:
        return [
            (a, a.outgoing, b.handler1, b)
            for a, b in zip(self.knots, self.knots[1:])
        ]

    # ---- hit tests ----------------------------------------------------------
    def find_knot(self, x: float, y: float, max_distance: float) -> Knot | None:
        """
        First knot, in spline order, strictly closer than ``max_distance``.
        Not necessarily the nearest one.
        """
        for k in self.knots:
            if math.hypot(k.x - x, k.y - y) < max_distance:
                return k
        return None

    def pick_point(self, x: float, y: float, max_distance: float) -> Point | None:
        """
        Nearest knot or handle within ``max_distance``; on equal distances the
        point met last wins.
        """
        best: Point | None = None
        best_d = math.inf
        for p in self.all_points():
            d = math.hypot(p.x - x, p.y - y)
            if d <= max_distance and d <= best_d:
                best, best_d = p, d
        return best

    def project(self, x: float, y: float, max_distance: float, steps: int = 100) -> CurveHit | None:
        """
        Closest point of the drawn curve to (x, y), found by sampling each segment
        at ``steps + 1`` parameters. None when no sample is within ``max_distance``.
        """
        best: CurveHit | None = None
        for index, (p0, p1, p2, p3) in enumerate(self.segments()):
            controls = (as_vec(p0), as_vec(p1), as_vec(p2), as_vec(p3))
            for i in range(steps + 1):
                t = i / steps
                px, py = cubic_eval(*controls, t)
                d = math.hypot(px - x, py - y)
                if d <= max_distance and (best is None or d < best.distance):
                    best = CurveHit((px, py), d, index, t, p0, p1, p2, p3)
        return best

    # ---- sampling -----------------------------------------------------------
    def samplers(self, resolution: int = 200) -> list[ArcLengthSampler]:
        return [ArcLengthSampler(*seg, resolution=resolution) for seg in self.segments()]

    def regularly_placed_points(self, count: int) -> list[Vec]:
        """
        ``count`` positions spread along the whole spline at (approximately) equal
        arc-length spacing. The last position is the end of the spline.
        """
        if len(self.knots) < 2 or count <= 0:
            return []
        beziers = self.samplers()
        total = sum(bz.length for bz in beziers)

        out: list[Vec] = []
        drawn = 0
        current = 0.0
        last = len(beziers) - 1
        for index, bz in enumerate(beziers):
            current += bz.length
            if index == last:
                share = count - drawn
            elif total > 0:
                share = math.floor(current / total * count) - drawn
            else:
                share = 0
            if share <= 0:
                continue
            drawn += share
            for i in range(share):
                if index == last:
                    u = i / (share - 1) if share > 1 else 1.0
                else:
                    u = i / share
                out.append(bz.point_at(u))
        return out

    # ---- serialization ------------------------------------------------------
    def to_points(self) -> list[dict]:
        return [k.to_dict() for k in self.knots]

    def load_points(self, records: Sequence[dict]) -> None:
        """
        Replace every knot by the given records. Nothing is changed when a record
        is malformed.
        """
        parsed = parse_point_records(records)
        knots = []
        for (x, y), hp1, hp2 in parsed:
            knot = self.new_knot(x, y)
            knot.handler1 = self.new_point(*hp1)
            if hp2 is not None:
                knot.handler2 = self.new_point(*hp2)
            knots.append(knot)
        self.knots = knots
        logger.debug("Loaded %d knot(s)", len(knots))

    @classmethod
    def from_points(cls, records: Sequence[dict]) -> "Spline":
        spline = cls()
        spline.load_points(records)
        return spline
