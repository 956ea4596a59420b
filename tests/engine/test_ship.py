"""Tests for Ship domain logic."""

import pytest

from seabattle.engine.errors import InvalidArgument
from seabattle.engine.ship import Coordinate, Orientation, Ship


def test_ship_hit_and_sink() -> None:
    ship = Ship(3)
    for hits in range(1, 4):
        ship.hit()
        assert ship.hit_count == hits
        assert ship.is_sunk() is (hits == 3)


def test_hits_past_sinking_saturate() -> None:
    ship = Ship(2)
    for _ in range(5):
        ship.hit()
    assert ship.hit_count == 2
    assert ship.is_sunk()


@pytest.mark.parametrize("length", [0, -1, 2.5, "3", True, None])
def test_ship_rejects_invalid_length(length) -> None:
    with pytest.raises(InvalidArgument):
        Ship(length)


def test_invalid_length_is_also_a_value_error() -> None:
    with pytest.raises(ValueError):
        Ship(0)


def test_orientation_steps_along_expected_axis() -> None:
    assert Orientation.HORIZONTAL.step == (1, 0)
    assert Orientation.VERTICAL.step == (0, 1)
    assert Coordinate(2, 3).offset(1, -1) == Coordinate(3, 2)
