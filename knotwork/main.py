import logging
import sys

from PySide6 import QtCore, QtGui, QtWidgets

from knotwork.core import DrawMode
from knotwork.widgets import BezierCanvasWidget
from knotwork.widgets.utils import vec_to_qpoint


class MainWindow(QtWidgets.QWidget):
    def __init__(self, options: dict | None = None):
        super().__init__()
        self.setWindowTitle("knotwork")

        self.layout = QtWidgets.QVBoxLayout(self)
        self.tool_bar = QtWidgets.QHBoxLayout()

        self.canvas = BezierCanvasWidget(options, parent=self)
        self.canvas.setMinimumSize(640, 480)

        self.mode_box = QtWidgets.QComboBox()
        self.mode_box.addItems([m.value for m in DrawMode])
        self.mode_box.setCurrentText(self.canvas.editor.options.draw_mode.value)
        self.mode_box.currentTextChanged.connect(self._on_mode_changed)

        self.samples_box = QtWidgets.QSpinBox()
        self.samples_box.setRange(0, 500)
        self.samples_box.setValue(20)

        buttons = [
            ("Undo", self.canvas.undo),
            ("Redo", self.canvas.redo),
            ("Reset", self.canvas.reset),
            ("Toggle curve", self._toggle_curve),
            ("Place points", self._place_points),
        ]
        self.tool_bar.addWidget(self.mode_box)
        for label, slot in buttons:
            button = QtWidgets.QPushButton(label)
            button.clicked.connect(slot)
            self.tool_bar.addWidget(button)
        self.tool_bar.addWidget(self.samples_box)
        self.tool_bar.addStretch(1)

        self.layout.addLayout(self.tool_bar)
        self.layout.addWidget(self.canvas, stretch=1)

    def _on_mode_changed(self, name: str):
        self.canvas.set_options(draw_mode=name)

    def _toggle_curve(self):
        if self.canvas.editor.spline_visible:
            self.canvas.hide_spline()
        else:
            self.canvas.show_spline()

    def _place_points(self):
        points = self.canvas.regularly_placed_points(self.samples_box.value())

        def draw(painter: QtGui.QPainter):
            painter.setPen(QtCore.Qt.PenStyle.NoPen)
            painter.setBrush(QtGui.QColor(200, 40, 40))
            for v in points:
                painter.drawEllipse(vec_to_qpoint(v), 3.0, 3.0)

        self.canvas.paint(draw)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    app = QtWidgets.QApplication(sys.argv)

    widget = MainWindow()
    widget.resize(800, 600)
    widget.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
