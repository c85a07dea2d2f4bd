from typing import Any, Callable, override

from PySide6 import QtCore, QtGui, QtWidgets

from knotwork.core import (
    EditorOptions, PointerDown, PointerLeave, PointerMove, PointerUp, Redo, RemoveAt,
    SplineEditor, Undo, Vec,
)
from knotwork.widgets.painter import SplinePainter
from knotwork.widgets.utils import qpoint_to_vec


class BezierCanvasWidget(QtWidgets.QWidget):
    """
    Drawing surface for one spline. Translates Qt input into editor commands and
    paints the editor state; all editing logic lives in SplineEditor.

      - left click: append a knot, or insert one when clicking on the curve
      - Ctrl + left click: grab the nearest knot or handle
      - right click: remove the knot under the pointer
      - Ctrl+Z / Ctrl+Y: undo / redo
    """

    pointsChanged = QtCore.Signal()  # emitted whenever the spline changes

    def __init__(self, options: EditorOptions | dict | None = None, parent=None):
        super().__init__(parent)
        self._editor = SplineEditor(options, renderer=self._request_paint)
        self._painter = SplinePainter()
        self._paint_callbacks: list[Callable[[QtGui.QPainter], None]] = []
        self._move_clock = QtCore.QElapsedTimer()

        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(False)

    # ---- public API ---------------------------------------------------------
    @property
    def editor(self) -> SplineEditor:
        return self._editor

    def set_options(self, **overrides) -> None:
        self._editor.set_options(**overrides)
        self.update()

    def get_points(self) -> list[dict]:
        return self._editor.get_points()

    def set_points(self, points: list[dict]) -> None:
        self._editor.set_points(points)
        self._changed()

    def paint(self, callback: Callable[[QtGui.QPainter], None] | None = None) -> None:
        """Schedule a repaint; ``callback`` gets the QPainter after the spline is drawn."""
        self._editor.paint(callback)

    def reset(self) -> None:
        self._editor.reset()
        self._changed()

    def show_spline(self) -> None:
        self._editor.show_spline()

    def hide_spline(self) -> None:
        self._editor.hide_spline()

    def regularly_placed_points(self, count: int) -> list[Vec]:
        return self._editor.regularly_placed_points(count)

    def undo(self) -> None:
        self._dispatch(Undo())

    def redo(self) -> None:
        self._dispatch(Redo())

    # ---- helpers ------------------------------------------------------------
    def _request_paint(self, callback: Callable[[Any], None] | None) -> None:
        if callback is not None:
            self._paint_callbacks.append(callback)
        self.update()

    def _changed(self) -> None:
        self.pointsChanged.emit()
        self.update()

    def _dispatch(self, command) -> bool:
        changed = self._editor.apply_command(command)
        if changed:
            self._changed()
        return changed

    def _position(self, e: QtGui.QMouseEvent) -> Vec:
        px, py = qpoint_to_vec(e.position())
        x = min(max(px, 0.0), max(0.0, self.width() - 1.0))
        y = min(max(py, 0.0), max(0.0, self.height() - 1.0))
        return x, y

    def _throttled(self) -> bool:
        limit = self._editor.options.move_throttle_ms
        if self._move_clock.isValid() and self._move_clock.elapsed() < limit:
            return True
        self._move_clock.restart()
        return False

    # ---- Qt events ----------------------------------------------------------
    @override
    def mousePressEvent(self, e: QtGui.QMouseEvent):
        x, y = self._position(e)
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            select = bool(e.modifiers() & QtCore.Qt.KeyboardModifier.ControlModifier)
            self._dispatch(PointerDown(x, y, select=select))
        elif e.button() == QtCore.Qt.MouseButton.RightButton:
            self._dispatch(RemoveAt(x, y))

    @override
    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        if not self._editor.pointer_down or self._throttled():
            return
        self._dispatch(PointerMove(*self._position(e)))

    @override
    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self._dispatch(PointerUp())

    @override
    def leaveEvent(self, e: QtCore.QEvent):
        if self._editor.pointer_down:
            self._dispatch(PointerLeave())
        super().leaveEvent(e)

    @override
    def contextMenuEvent(self, e: QtGui.QContextMenuEvent):
        e.accept()

    @override
    def keyPressEvent(self, e: QtGui.QKeyEvent):
        if e.modifiers() & QtCore.Qt.KeyboardModifier.ControlModifier:
            if e.key() == QtCore.Qt.Key.Key_Z:
                self.undo()
                return
            if e.key() == QtCore.Qt.Key.Key_Y:
                self.redo()
                return
        super().keyPressEvent(e)

    @override
    def paintEvent(self, _):
        p = QtGui.QPainter(self)
        if self._editor.spline_visible:
            self._painter.paint(p, self._editor)
        callbacks, self._paint_callbacks = self._paint_callbacks, []
        for callback in callbacks:
            callback(p)
        p.end()
