import pytest

from knotwork.core import Spline, SplineEditor


def straight_records():
    """Two knots on y=0, handles evenly spaced: the segment is x = 300 t."""
    return [
        {"x": 0, "y": 0, "hp1": {"x": 100, "y": 0}},
        {"x": 300, "y": 0, "hp1": {"x": 200, "y": 0}},
    ]


@pytest.fixture
def straight_spline():
    return Spline.from_points(straight_records())


@pytest.fixture
def natural_editor():
    return SplineEditor()


@pytest.fixture
def classical_editor():
    return SplineEditor({"draw_mode": "classical"})
