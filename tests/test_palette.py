import pytest

from chromashift.components.palette import Palette
from chromashift.errors import PreconditionViolation


def test_successor_wraps_around():
    palette = Palette.of(["red", "blue", "yellow"])
    assert palette.successor("red") == "blue"
    assert palette.successor("blue") == "yellow"
    assert palette.successor("yellow") == "red"


def test_unknown_color_fails_fast():
    palette = Palette.of(["red", "blue", "yellow"])
    with pytest.raises(PreconditionViolation):
        palette.successor("green")


def test_duplicate_colors_rejected():
    with pytest.raises(PreconditionViolation):
        Palette.of(["red", "blue", "red"])


def test_empty_palette_rejected():
    with pytest.raises(PreconditionViolation):
        Palette.of([])


def test_base_palette_prefix_and_bounds():
    assert Palette.base(3).colors == ("red", "blue", "yellow")
    assert len(Palette.base(6)) == 6
    with pytest.raises(PreconditionViolation):
        Palette.base(2)
    with pytest.raises(PreconditionViolation):
        Palette.base(7)


def test_index_lookup_and_membership():
    palette = Palette.base(4)
    assert palette.index_of("green") == 3
    assert "green" in palette and "orange" not in palette


def test_palettes_compare_by_colors():
    assert Palette.of(["red", "blue", "yellow"]) == Palette.base(3)
    assert hash(Palette.of(["red", "blue", "yellow"])) == hash(Palette.base(3))
