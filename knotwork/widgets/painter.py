from PySide6 import QtCore, QtGui

from knotwork.core import EditorOptions, Knot, LineCap, Point, Shape, SplineEditor
from knotwork.widgets.utils import point_to_qpoint, rgb_to_qcolor

_CAPS = {
    LineCap.BUTT: QtCore.Qt.PenCapStyle.FlatCap,
    LineCap.ROUND: QtCore.Qt.PenCapStyle.RoundCap,
    LineCap.SQUARE: QtCore.Qt.PenCapStyle.SquareCap,
}


def make_qpath(editor: SplineEditor) -> QtGui.QPainterPath:
    path = QtGui.QPainterPath()
    knots = editor.spline.knots
    if len(knots) < 2:
        return path
    path.moveTo(point_to_qpoint(knots[0]))
    for _, c1, c2, p3 in editor.spline.segments():
        path.cubicTo(point_to_qpoint(c1), point_to_qpoint(c2), point_to_qpoint(p3))
    return path


class SplinePainter:
    """
    Draws a SplineEditor state with QPainter: the curve, then tangents and
    control points, the active point last so it stays on top.
    """

    def paint(self, p: QtGui.QPainter, editor: SplineEditor) -> None:
        opts = editor.options
        p.save()
        self._draw_spline(p, editor, opts)

        active: Point | None = None
        for knot in editor.spline:
            show_handles = editor.shows_tangents(knot)
            if show_handles:
                self._draw_tangents(p, knot, opts)
            if knot.active:
                active = knot
            else:
                self._draw_knot(p, knot, opts)
            if show_handles:
                for h in knot.handles():
                    if h.active:
                        active = h
                    else:
                        self._draw_handle(p, h, opts)

        if active is not None:
            if active.is_handle():
                self._draw_handle(p, active, opts)
            else:
                self._draw_knot(p, active, opts)
        p.restore()

    # ---- pieces -------------------------------------------------------------
    def _draw_spline(self, p, editor, opts: EditorOptions):
        if len(editor.spline) < 2:
            return
        pen = QtGui.QPen(rgb_to_qcolor(opts.spline_color), float(opts.spline_thickness))
        pen.setCapStyle(_CAPS[opts.line_cap])
        p.setPen(pen)
        p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        p.drawPath(make_qpath(editor))

    def _draw_tangents(self, p, knot: Knot, opts: EditorOptions):
        if not opts.tangent_thickness:
            return
        pen = QtGui.QPen(rgb_to_qcolor(opts.tangent_color), float(opts.tangent_thickness))
        pen.setCapStyle(_CAPS[opts.line_cap])
        p.setPen(pen)
        for h in knot.handles():
            p.drawLine(point_to_qpoint(knot), point_to_qpoint(h))

    def _draw_marker(self, p, point: Point, shape: Shape, size: float, border: float, fill, stroke):
        p.setBrush(rgb_to_qcolor(fill))
        if border > 0:
            p.setPen(QtGui.QPen(rgb_to_qcolor(stroke), float(border)))
        else:
            p.setPen(QtCore.Qt.PenStyle.NoPen)
        rect = QtCore.QRectF(point.x - size * 0.5, point.y - size * 0.5, size, size)
        match shape:
            case Shape.DISC:
                p.drawEllipse(rect)
            case Shape.SQUARE:
                p.drawRect(rect)

    def _draw_knot(self, p, knot: Point, opts: EditorOptions):
        if knot.active:
            fill, stroke = opts.knot_active_fill_color, opts.knot_active_border_color
        else:
            fill, stroke = opts.knot_fill_color, opts.knot_border_color
        self._draw_marker(p, knot, opts.knot_shape, opts.knot_size, opts.knot_border_size, fill, stroke)

    def _draw_handle(self, p, handle: Point, opts: EditorOptions):
        if handle.active:
            fill, stroke = opts.handle_active_fill_color, opts.handle_active_border_color
        else:
            fill, stroke = opts.handle_fill_color, opts.handle_border_color
        self._draw_marker(p, handle, opts.handle_shape, opts.handle_size, opts.handle_border_size, fill, stroke)
