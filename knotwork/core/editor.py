import logging
from typing import Any, Callable

from .commands import (
    Command, PointerDown, PointerLeave, PointerMove, PointerUp, Redo, RemoveAt, Undo,
)
from .config import EditorOptions
from .history import HistoryManager, stable_hash
from .knot_editors import KnotEditorComponent, editor_for
from .math import Vec
from .points import Knot, Point
from .spline import Spline, parse_point_records

logger = logging.getLogger(__name__)

Renderer = Callable[[Callable[[Any], None] | None], None]


class SplineEditor:
    """
    Editing session for one spline.

    Turns pointer and keyboard commands into spline edits, tracks the point being
    dragged and records history snapshots when a drag ends. GUI-agnostic: a view
    forwards its events through ``apply_command`` and registers a renderer to be
    told when to repaint.
    """

    def __init__(self, options: EditorOptions | dict | None = None, renderer: Renderer | None = None):
        if isinstance(options, EditorOptions):
            self._options = options
        else:
            self._options = EditorOptions.from_dict(options)
        self._renderer = renderer
        self._editor: KnotEditorComponent = editor_for(self._options.draw_mode)
        self.spline = Spline()
        self.history = HistoryManager(self, size=self._options.history_size)

        self.moving_point: Point | None = None
        self.pointer_down = False
        self.released_after_creation = True
        self.spline_visible = True

        if self._options.points:
            self.set_points(self._options.points)
        else:
            self.history.push_if_changed()

    # ---- options ------------------------------------------------------------
    @property
    def options(self) -> EditorOptions:
        return self._options

    @property
    def knot_editor(self) -> KnotEditorComponent:
        return self._editor

    def set_options(self, **overrides) -> None:
        """
        Shallow-merge new options. Switching the draw mode brings the current
        spline in line with the handle rules of the new mode and records the
        result as an undoable step.
        """
        options = self._options.merged(**overrides)
        if options.history_size != self._options.history_size:
            self.history.resize(options.history_size)
        mode_changed = options.draw_mode is not self._options.draw_mode
        self._options = options
        if mode_changed:
            self._editor = editor_for(options.draw_mode)
            self._editor.enforce_cardinality(self.spline)
            self._drop_stale_moving_point()
            self.history.push_if_changed()

    def set_renderer(self, renderer: Renderer | None) -> None:
        self._renderer = renderer

    # ---- state source for the history ---------------------------------------
    def current_state(self) -> list[dict]:
        return self.spline.to_points()

    def state_hash(self) -> str:
        return stable_hash(self.current_state())

    def apply_state(self, state: list[dict]) -> None:
        self.spline.load_points(state)
        self.moving_point = None

    # ---- active point -------------------------------------------------------
    def _set_active(self, point: Point) -> None:
        self.spline.reset_active()
        point.active = True
        self.moving_point = point

    def _drop_stale_moving_point(self) -> None:
        # the moving point may have been removed or replaced by a structural edit
        p = self.moving_point
        if p is not None and self.spline.owner_of(p) is None:
            p.active = False
            self.moving_point = None

    # ---- pointer handling ---------------------------------------------------
    def pointer_press(self, x: float, y: float, select: bool = False) -> bool:
        """
        Left button press. With ``select`` the nearest knot or handle is picked
        for dragging. Otherwise a press on the curve inserts a knot there and a
        press elsewhere appends a new knot.
        """
        self.pointer_down = True
        opts = self._options

        if select:
            picked = self.spline.pick_point(x, y, opts.max_distance)
            if picked is None:
                self.moving_point = None
                return False
            self._set_active(picked)
            return True

        hit = self.spline.project(x, y, opts.max_distance)
        if hit is not None:
            knot = self._editor.subdivide(self.spline, hit.t, *hit.controls)
            if knot is not None:
                self._set_active(knot)
                return True

        self.released_after_creation = False
        dragged = self._editor.add_knot(self.spline, x, y, opts.smooth_factor)
        self._set_active(dragged)
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        if not self.pointer_down or self.moving_point is None:
            return False
        return self._editor.edit_point(
            self.spline, self.moving_point, x, y,
            constrain_tangents=self._options.constrain_tangents,
            released=self.released_after_creation,
        )

    def pointer_release(self) -> bool:
        """End of a drag (button released or pointer left the surface)."""
        self.pointer_down = False
        self.released_after_creation = True
        return self.history.push_if_changed()

    def remove_at(self, x: float, y: float) -> bool:
        """Right click: remove the knot under (x, y) as one undoable step."""
        knot = self.spline.find_knot(x, y, self._options.max_distance)
        if knot is None or not self._editor.remove_knot(self.spline, knot):
            return False
        self._drop_stale_moving_point()
        self.history.push_if_changed()
        return True

    def apply_command(self, command: Command) -> bool:
        """
        Dispatch one input command. Returns True when the spline or the view
        changed and a repaint is due.
        """
        match command:
            case PointerDown(x=x, y=y, select=select):
                return self.pointer_press(x, y, select)
            case PointerMove(x=x, y=y):
                return self.pointer_move(x, y)
            case PointerUp() | PointerLeave():
                self.pointer_release()
                return False
            case RemoveAt(x=x, y=y):
                return self.remove_at(x, y)
            case Undo():
                return self.undo()
            case Redo():
                return self.redo()
            case _:
                raise TypeError(f"Unsupported command: {command!r}")

    # ---- public API ---------------------------------------------------------
    def get_points(self) -> list[dict]:
        return self.spline.to_points()

    def set_points(self, points: list[dict]) -> None:
        """
        Replace the spline by the given knot records and start a new history from
        them. Raises ValueError, leaving everything untouched, on malformed records.
        """
        parse_point_records(points)
        self._clear()
        self.spline.load_points(points)
        self.history.push_if_changed()
        logger.debug("Imported %d knot(s)", len(self.spline))

    def _clear(self) -> None:
        self.spline.clear()
        self.history.reset()
        self.moving_point = None
        self.pointer_down = False
        self.released_after_creation = True

    def reset(self) -> None:
        self._clear()
        self.history.push_if_changed()
        self.paint()

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def paint(self, callback: Callable[[Any], None] | None = None) -> None:
        """Ask the renderer for a repaint; ``callback`` receives its drawing context."""
        if self._renderer is not None:
            self._renderer(callback)

    def show_spline(self) -> None:
        self.spline_visible = True
        self.paint()

    def hide_spline(self) -> None:
        self.spline_visible = False
        self.paint()

    def regularly_placed_points(self, count: int) -> list[Vec]:
        return self.spline.regularly_placed_points(count)

    def shows_tangents(self, knot: Knot) -> bool:
        """
        Whether the handles of ``knot`` are drawn: always with a limit of -1,
        otherwise only for knots at most that many positions away from the knot
        being edited.
        """
        limit = self._options.show_max_next_and_previous_tangents
        if limit == -1:
            return True
        if self.moving_point is None:
            return False
        owner = self.spline.owner_of(self.moving_point)
        if owner is None:
            return False
        if owner.id == knot.id:
            return True
        a = self.spline.index_of(owner)
        b = self.spline.index_of(knot)
        if a is None or b is None:
            return False
        return abs(a - b) <= limit
