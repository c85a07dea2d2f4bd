from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

RGB = tuple[int, int, int]


class DrawMode(Enum):
    NATURAL = "natural"
    CLASSICAL = "classical"


class Shape(Enum):
    DISC = "disc"
    SQUARE = "square"


class LineCap(Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "draw_mode": DrawMode,
    "knot_shape": Shape,
    "handle_shape": Shape,
    "line_cap": LineCap,
}


@dataclass(frozen=True)
class EditorOptions:
    """
    Editor settings. Only the first block drives editing; the rest is read by the
    painter and has no effect on the spline itself.

      - points: initial spline, in the export format of ``Spline.to_points``
    """
    history_size: int = 50
    draw_mode: DrawMode = DrawMode.NATURAL
    max_distance: float = 10.0
    smooth_factor: float = 0.5
    constrain_tangents: bool = True
    move_throttle_ms: int = 30
    points: list[dict] = field(default_factory=list)

    # knots
    knot_size: int = 6
    knot_border_size: int = 1
    knot_border_color: RGB = (150, 150, 150)
    knot_fill_color: RGB = (230, 230, 230)
    knot_active_fill_color: RGB = (0, 255, 255)
    knot_active_border_color: RGB = (100, 120, 255)
    knot_shape: Shape = Shape.DISC

    # handles
    handle_size: int = 4
    handle_border_size: int = 1
    handle_border_color: RGB = (120, 120, 120)
    handle_fill_color: RGB = (180, 180, 180)
    handle_active_fill_color: RGB = (0, 255, 255)
    handle_active_border_color: RGB = (100, 120, 255)
    handle_shape: Shape = Shape.DISC

    # strokes
    tangent_color: RGB = (150, 150, 150)
    tangent_thickness: int = 2
    line_cap: LineCap = LineCap.ROUND
    spline_color: RGB = (0, 0, 200)
    spline_thickness: int = 5
    show_max_next_and_previous_tangents: int = 1  # -1 shows every tangent

    @property
    def natural(self) -> bool:
        return self.draw_mode is DrawMode.NATURAL

    def merged(self, **overrides: Any) -> "EditorOptions":
        """Shallow merge: each given key replaces the current value as a whole."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown editor option(s): {', '.join(unknown)}")
        coerced = {}
        for key, value in overrides.items():
            enum_type = _ENUM_FIELDS.get(key)
            if enum_type is not None and not isinstance(value, enum_type):
                try:
                    value = enum_type(value)
                except ValueError:
                    raise ValueError(f"Invalid value for '{key}': {value!r}") from None
            coerced[key] = value
        if "history_size" in coerced and int(coerced["history_size"]) < 1:
            raise ValueError("history_size must be >= 1")
        return replace(self, **coerced)

    @classmethod
    def from_dict(cls, data: dict | None = None) -> "EditorOptions":
        return cls().merged(**(data or {}))
