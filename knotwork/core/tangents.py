import logging
import math

from .math import dist, round_half_up
from .points import Knot, Point
from .spline import Spline

logger = logging.getLogger(__name__)


def mirror_opposite(knot: Knot, handle: Point, x: float, y: float, pencil: bool) -> bool:
    """
    Keep the handle opposite to ``handle`` collinear with the knot while
    ``handle`` is dragged to (x, y).

    In pencil mode the opposite handle is the exact reflection of the drag
    position. Otherwise it keeps its length and only turns. Returns False when
    the drag lands on the knot itself: the direction is undefined and the drag
    must not be applied.
    """
    opposite = knot.opposite(handle)
    if opposite is None:
        return True

    if pencil:
        opposite.move_to(knot.x - (x - knot.x), knot.y - (y - knot.y))
        return True

    d_new = math.hypot(x - knot.x, y - knot.y)
    if d_new == 0.0:
        logger.debug("Drag onto knot %d ignored: tangent direction undefined", knot.id)
        return False
    d_old = dist(opposite, knot)
    if d_old == 0.0:
        return True
    scale = d_old / d_new
    opposite.move_to(knot.x + scale * (knot.x - x), knot.y + scale * (knot.y - y))
    return True


def drag_point(spline: Spline, point: Point, x: float, y: float,
               constrain_tangents: bool = True, pencil: bool = False) -> bool:
    """
    Move a knot or a handle to (x, y).

    A knot carries its handles along. A handle drags its opposite handle with it
    when tangents are constrained; dragging it onto its own knot is then refused
    and nothing moves. Returns whether the point was moved.
    """
    x, y = round_half_up(x), round_half_up(y)
    if not point.is_handle():
        point.translate(x - point.x, y - point.y)
        return True

    if constrain_tangents:
        knot = spline.owner_of(point)
        if knot is not None and not mirror_opposite(knot, point, x, y, pencil):
            return False
    point.move_to(x, y)
    return True
