import pytest

from src.viz.scales import PointScale


def test_reversed_range_maps_first_value_to_bottom():
    scale = PointScale(["Male", "Female"], (300, 50))
    assert scale("Male") == 300
    assert scale("Female") == 50


def test_even_spacing():
    scale = PointScale(["a", "b", "c", "d", "e"], (50, 650))
    assert scale.step == 150
    assert [scale(v) for v in "abcde"] == [50, 200, 350, 500, 650]


def test_single_value_is_centred():
    scale = PointScale(["depression"], (50, 650))
    assert scale("depression") == pytest.approx(350)


def test_unknown_value():
    assert PointScale(["a"], (0, 10))("z") is None
