from .math import Vec, dist, dist2, lerp, cubic_eval
from .points import Point, Knot, PointKind, IdAllocator
from .config import EditorOptions, DrawMode, Shape, LineCap
from .sampler import ArcLengthSampler
from .spline import Spline, CurveHit
from .knot_editors import KnotEditorComponent, NaturalKnotEditor, ClassicalKnotEditor, editor_for
from .registries import knot_editor_registry
from .history import HistoryManager, StateSource, stable_hash
from .commands import PointerDown, PointerMove, PointerUp, PointerLeave, RemoveAt, Undo, Redo
from .editor import SplineEditor
