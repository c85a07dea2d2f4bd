import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6 import QtCore, QtGui  # noqa: E402
from PySide6.QtTest import QTest  # noqa: E402

from knotwork.widgets import BezierCanvasWidget, make_qpath  # noqa: E402
from conftest import straight_records  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def canvas(app):
    w = BezierCanvasWidget()
    w.resize(400, 300)
    yield w
    w.deleteLater()


def test_points_round_trip_and_signal(canvas):
    emitted = []
    canvas.pointsChanged.connect(lambda: emitted.append(1))
    canvas.set_points(straight_records())
    assert canvas.get_points() == straight_records()
    assert emitted == [1]


def test_click_appends_a_knot(canvas):
    QTest.mouseClick(canvas, QtCore.Qt.MouseButton.LeftButton,
                     QtCore.Qt.KeyboardModifier.NoModifier, QtCore.QPoint(50, 60))
    points = canvas.get_points()
    assert len(points) == 1
    assert (points[0]["x"], points[0]["y"]) == (50, 60)


def test_right_click_removes_a_knot_undoably(canvas):
    canvas.set_points(straight_records())
    QTest.mouseClick(canvas, QtCore.Qt.MouseButton.RightButton,
                     QtCore.Qt.KeyboardModifier.NoModifier, QtCore.QPoint(3, 2))
    assert [p["x"] for p in canvas.get_points()] == [300]
    QTest.keyClick(canvas, QtCore.Qt.Key.Key_Z, QtCore.Qt.KeyboardModifier.ControlModifier)
    assert canvas.get_points() == straight_records()


def test_ctrl_z_undoes_the_last_edit(canvas):
    canvas.set_points(straight_records())
    QTest.mouseClick(canvas, QtCore.Qt.MouseButton.LeftButton,
                     QtCore.Qt.KeyboardModifier.NoModifier, QtCore.QPoint(150, 200))
    assert len(canvas.get_points()) == 3
    QTest.keyClick(canvas, QtCore.Qt.Key.Key_Z, QtCore.Qt.KeyboardModifier.ControlModifier)
    assert canvas.get_points() == straight_records()
    QTest.keyClick(canvas, QtCore.Qt.Key.Key_Y, QtCore.Qt.KeyboardModifier.ControlModifier)
    assert len(canvas.get_points()) == 3


def render(canvas):
    image = QtGui.QImage(400, 300, QtGui.QImage.Format.Format_ARGB32)
    image.fill(0)
    canvas.render(image, QtCore.QPoint(), QtGui.QRegion(),
                  QtWidgets.QWidget.RenderFlag.DrawChildren)
    return image


def test_render_runs_paint_callbacks_once(canvas):
    canvas.set_points(straight_records())
    seen = []
    canvas.paint(lambda p: seen.append(isinstance(p, QtGui.QPainter)))

    render(canvas)
    image = render(canvas)
    assert seen == [True]
    # the spline is stroked in its default blue
    color = QtGui.QColor(image.pixel(150, 0))
    assert (color.red(), color.green(), color.blue()) == (0, 0, 200)


def test_hidden_spline_is_not_drawn(canvas):
    canvas.set_points(straight_records())
    canvas.hide_spline()
    image = render(canvas)
    assert QtGui.QColor(image.pixel(150, 0)).alpha() == 0


def test_path_follows_the_segments(canvas):
    canvas.set_points(straight_records())
    path = make_qpath(canvas.editor)
    assert path.elementCount() == 4
    assert path.currentPosition() == QtCore.QPointF(300, 0)
