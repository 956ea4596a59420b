"""Tests for Player attacks and random moves."""

import random

import pytest

from seabattle.engine.board import Board
from seabattle.engine.errors import InvalidArgument, OutOfBounds, SearchExhausted
from seabattle.engine.player import Player, PlayerKind
from seabattle.engine.ship import Coordinate, Orientation, Ship


def test_player_owns_a_board_of_requested_size() -> None:
    player = Player("CPU", PlayerKind.COMPUTER, board_size=8)
    assert player.board.size == 8
    assert player.board.owner == "computer"
    assert PlayerKind.HUMAN.opponent() is PlayerKind.COMPUTER
    assert PlayerKind.COMPUTER.opponent() is PlayerKind.HUMAN


def test_attack_forwards_and_records() -> None:
    human = Player("You")
    cpu = Player("CPU", PlayerKind.COMPUTER)
    cpu.board.place_ship(Ship(2), Coordinate(0, 0), Orientation.HORIZONTAL)

    result = human.attack(cpu.board, Coordinate(0, 0))
    assert result.hit
    assert human.attempted == {Coordinate(0, 0)}


def test_attack_requires_board() -> None:
    with pytest.raises(InvalidArgument):
        Player("You").attack(None, Coordinate(0, 0))


def test_out_of_bounds_attack_is_not_recorded() -> None:
    player = Player("You")
    with pytest.raises(OutOfBounds):
        player.attack(Board(), Coordinate(10, 3))
    assert player.attempted == set()


def test_random_move_never_repeats() -> None:
    human = Player("You")
    cpu = Player("CPU", PlayerKind.COMPUTER)
    rng = random.Random(9)

    results = [cpu.random_move(human.board, rng) for _ in range(30)]
    assert all(not result.already_tried for result in results)
    assert len({result.coordinate for result in results}) == 30
    assert len(cpu.attempted) == 30


def test_random_move_exhausts_on_fully_attacked_board() -> None:
    cpu = Player("CPU", PlayerKind.COMPUTER)
    target = Board(size=1)
    rng = random.Random(0)

    cpu.random_move(target, rng)
    with pytest.raises(SearchExhausted):
        cpu.random_move(target, rng, max_attempts=25)


def test_random_move_requires_board() -> None:
    with pytest.raises(InvalidArgument):
        Player("CPU", PlayerKind.COMPUTER).random_move(None)
