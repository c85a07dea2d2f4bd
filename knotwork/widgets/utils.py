from PySide6 import QtCore, QtGui

from knotwork.core import Point, Vec
from knotwork.core.config import RGB


def qpoint_to_vec(p: QtCore.QPointF) -> Vec:
    return float(p.x()), float(p.y())


def point_to_qpoint(p: Point) -> QtCore.QPointF:
    return QtCore.QPointF(p.x, p.y)


def vec_to_qpoint(v: Vec) -> QtCore.QPointF:
    return QtCore.QPointF(v[0], v[1])


def rgb_to_qcolor(rgb: RGB) -> QtGui.QColor:
    return QtGui.QColor(*rgb)
