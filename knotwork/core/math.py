import math
from typing import Protocol

Vec = tuple[float, float]


class HasXY(Protocol):
    x: float
    y: float


def round_half_up(v: float) -> int:
    # pixel rounding: 2.5 -> 3, -2.5 -> -2
    return int(math.floor(v + 0.5))


def dist(a: HasXY, b: HasXY) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def dist2(a: Vec, b: Vec) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def lerp(a: Vec, b: Vec, t: float) -> Vec:
    """
    Move along the segment a -> b by weight t (0 gives a, 1 gives b).
    """
    return a[0] * (1.0 - t) + b[0] * t, a[1] * (1.0 - t) + b[1] * t


def cubic_eval(p0: Vec, c1: Vec, c2: Vec, p3: Vec, t: float) -> Vec:
    u = 1.0 - t
    uu = u * u
    tt = t * t
    uuu = uu * u
    ttt = tt * t
    x = uuu * p0[0] + 3.0 * uu * t * c1[0] + 3.0 * u * tt * c2[0] + ttt * p3[0]
    y = uuu * p0[1] + 3.0 * uu * t * c1[1] + 3.0 * u * tt * c2[1] + ttt * p3[1]
    return (x, y)


def as_vec(p: HasXY) -> Vec:
    return float(p.x), float(p.y)
