import bisect
import math

from .math import Vec, HasXY, as_vec, cubic_eval


class ArcLengthSampler:
    """
    Arc-length reparameterization of one cubic segment (p0, c1, c2, p3).

    The raw Bezier parameter does not move at constant speed along the curve.
    ``map(u)`` converts a fraction of the segment length into the parameter that
    reaches it, using a cumulative length table sampled at ``resolution + 1``
    evenly spaced parameters.
    """

    def __init__(self, p0: HasXY, c1: HasXY, c2: HasXY, p3: HasXY, resolution: int = 200):
        if resolution < 1:
            raise ValueError("resolution must be >= 1")
        self.controls: tuple[Vec, Vec, Vec, Vec] = (as_vec(p0), as_vec(c1), as_vec(c2), as_vec(p3))
        self.resolution = resolution
        self.arc_lengths: list[float] = [0.0]

        ox, oy = self.interpolate(0.0)
        clen = 0.0
        for i in range(1, resolution + 1):
            x, y = self.interpolate(i / resolution)
            clen += math.hypot(x - ox, y - oy)
            self.arc_lengths.append(clen)
            ox, oy = x, y
        self._length: float | None = None

    def interpolate(self, t: float) -> Vec:
        return cubic_eval(*self.controls, t)

    @property
    def table_length(self) -> float:
        return self.arc_lengths[-1]

    def map(self, u: float) -> float:
        """
        Parameter t whose arc length from the segment start is ``u`` times the
        segment length. ``u`` is clamped to [0, 1].
        """
        u = max(0.0, min(1.0, u))
        target = u * self.arc_lengths[-1]
        index = bisect.bisect_left(self.arc_lengths, target)
        if self.arc_lengths[index] > target:
            index -= 1

        before = self.arc_lengths[index]
        if before == target:
            return index / self.resolution
        return (index + (target - before) / (self.arc_lengths[index + 1] - before)) / self.resolution

    def point_at(self, u: float) -> Vec:
        return self.interpolate(self.map(u))

    def mx(self, u: float) -> float:
        return self.point_at(u)[0]

    def my(self, u: float) -> float:
        return self.point_at(u)[1]

    @property
    def length(self) -> float:
        """
        Coarse polyline length over 100 steps; only used to split a sampling
        budget between segments.
        """
        if self._length is None:
            steps = 100
            length = 0.0
            prev = self.interpolate(0.0)
            for i in range(1, steps + 1):
                pt = self.interpolate(i / steps)
                length += math.hypot(pt[0] - prev[0], pt[1] - prev[1])
                prev = pt
            self._length = length
        return self._length
