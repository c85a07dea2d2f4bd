import logging
import math
from abc import ABC, abstractmethod

from .config import DrawMode
from .math import as_vec, dist, lerp
from .points import Knot, Point
from .registries import knot_editor_registry, register_knot_editor
from .spline import Spline
from .tangents import drag_point

logger = logging.getLogger(__name__)


class KnotEditorComponent(ABC):
    """
    Topology editing for one draw mode. Subdivision and removal are shared; what
    differs between modes is which handles a knot owns.
    """
    # reflect the opposite handle while the freshly created knot is still held
    pencil_mirror = False

    @abstractmethod
    def add_knot(self, spline: Spline, x: float, y: float, smooth_factor: float) -> Point:
        """
        Append a knot at (x, y) and return the point the user drags next.
        """

    @abstractmethod
    def enforce_cardinality(self, spline: Spline) -> None:
        """
        Restore the handle count rules of this mode after a structural edit.
        """

    def remove_knot(self, spline: Spline, knot: Point) -> bool:
        """
        Remove a knot. A knot created by subdivision between two neighbours is
        fused away: the neighbouring handles are recomputed so the two segments
        become the single cubic they were split from.
        """
        index = spline.index_of(knot)
        if index is None:
            return False
        knot = spline[index]
        if knot.from_subdivision and 0 < index < len(spline) - 1:
            self._fuse(spline[index - 1], knot, spline[index + 1])
        del spline.knots[index]
        self.enforce_cardinality(spline)
        logger.debug("Removed knot %d at index %d", knot.id, index)
        return True

    @staticmethod
    def _fuse(prev: Knot, knot: Knot, nxt: Knot) -> None:
        d1 = dist(knot.handler1, knot)
        d2 = dist(knot.handler2, knot) if knot.handler2 is not None else 0.0
        k = d2 / d1 if d1 else math.nan
        if not math.isfinite(k) or k == 0.0:
            logger.debug("Knot %d has degenerate handles, neighbours left untouched", knot.id)
            return
        p0, p1 = prev, prev.outgoing
        p2, p3 = nxt.handler1, nxt
        new_p1 = ((1 + k) * p1.x - k * p0.x, (1 + k) * p1.y - k * p0.y)
        new_p2 = (((1 + k) * p2.x - p3.x) / k, ((1 + k) * p2.y - p3.y) / k)
        p1.move_to(*new_p1)
        p2.move_to(*new_p2)

    def subdivide(self, spline: Spline, t: float,
                  p0: Knot, p1: Point, p2: Point, p3: Knot) -> Knot | None:
        """
        Split segment (p0, p1, p2, p3) at parameter t with De Casteljau's
        algorithm. The curve keeps its shape; p1 and p2 are moved in place and the
        new knot is inserted right after p0.
        """
        index = spline.index_of(p0)
        if index is None:
            return None

        a, b, c, d = as_vec(p0), as_vec(p1), as_vec(p2), as_vec(p3)
        p4 = lerp(a, b, t)
        p5 = lerp(b, c, t)
        p6 = lerp(c, d, t)
        p7 = lerp(p4, p5, t)
        p8 = lerp(p5, p6, t)
        p9 = lerp(p7, p8, t)

        knot = spline.new_knot(*p9, from_subdivision=True)
        knot.handler1 = spline.new_point(*p7)
        knot.handler2 = spline.new_point(*p8)
        p1.move_to(*p4)
        p2.move_to(*p6)
        spline.knots.insert(index + 1, knot)
        logger.debug("Inserted knot %d at index %d (t=%.3f)", knot.id, index + 1, t)
        return knot

    def edit_point(self, spline: Spline, point: Point, x: float, y: float,
                   constrain_tangents: bool, released: bool) -> bool:
        return drag_point(spline, point, x, y,
                          constrain_tangents=constrain_tangents,
                          pencil=self.pencil_mirror and not released)


@register_knot_editor(DrawMode.NATURAL.value)
class NaturalKnotEditor(KnotEditorComponent):
    """
    Pencil-like editing: every knot owns two handles from the start and the user
    drags the outgoing one right after clicking.
    """
    pencil_mirror = True

    def add_knot(self, spline: Spline, x: float, y: float, smooth_factor: float) -> Point:
        knot = spline.new_knot(x, y)
        knot.handler1 = spline.new_point(x, y)
        knot.handler2 = spline.new_point(x, y)
        spline.knots.append(knot)

        if len(spline) > 2:
            prev = spline[-2]
            prev.handler1.move_to(
                prev.x - smooth_factor * (prev.handler2.x - prev.x),
                prev.y - smooth_factor * (prev.handler2.y - prev.y),
            )
        logger.debug("Appended knot %d at (%d, %d)", knot.id, knot.x, knot.y)
        return knot.handler2

    def enforce_cardinality(self, spline: Spline) -> None:
        pass


@register_knot_editor(DrawMode.CLASSICAL.value)
class ClassicalKnotEditor(KnotEditorComponent):
    """
    Classic Bezier editing: end knots own a single handle, inner knots get their
    second handle when the next knot is appended.
    """

    def add_knot(self, spline: Spline, x: float, y: float, smooth_factor: float) -> Point:
        knot = spline.new_knot(x, y)
        knot.handler1 = spline.new_point(x, y)
        spline.knots.append(knot)

        if len(spline) > 2:
            prev = spline[-2]
            prev.handler2 = spline.new_point(
                prev.x - smooth_factor * (prev.handler1.x - prev.x),
                prev.y - smooth_factor * (prev.handler1.y - prev.y),
            )
        logger.debug("Appended knot %d at (%d, %d)", knot.id, knot.x, knot.y)
        return knot.handler1

    def enforce_cardinality(self, spline: Spline) -> None:
        if not len(spline):
            return
        first = spline[0]
        if first.handler2 is not None:
            first.handler1 = spline.clone_point(first.handler2)
            first.handler2 = None
        spline[-1].handler2 = None


def editor_for(mode: DrawMode | str) -> KnotEditorComponent:
    name = mode.value if isinstance(mode, DrawMode) else mode
    try:
        return knot_editor_registry[name]()
    except KeyError:
        raise ValueError(f"Unknown draw mode '{name}'") from None
