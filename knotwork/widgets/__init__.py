from .canvas import BezierCanvasWidget
from .painter import SplinePainter, make_qpath

__all__ = [
    "BezierCanvasWidget",
    "SplinePainter",
    "make_qpath",
]
