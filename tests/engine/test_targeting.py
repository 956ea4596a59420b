"""Tests for the computer's hunt/target search."""

import random

import pytest

from seabattle.engine.board import Board
from seabattle.engine.errors import SearchExhausted
from seabattle.engine.ship import Coordinate, Orientation, Ship
from seabattle.engine.targeting import (
    SearchMode,
    SearchState,
    orthogonal_neighbours,
    pick_untried,
    record_outcome,
    select_target,
)

NEIGHBOURS_OF_3_2 = {Coordinate(2, 2), Coordinate(4, 2), Coordinate(3, 1), Coordinate(3, 3)}


@pytest.fixture
def board() -> Board:
    board = Board()
    board.place_ship(Ship(3), Coordinate(2, 2), Orientation.HORIZONTAL)
    return board


def test_hit_queues_orthogonal_neighbours_in_order(board: Board) -> None:
    state = SearchState()
    record_outcome(state, board, board.receive_attack(Coordinate(3, 2)))

    assert state.mode is SearchMode.TARGET
    assert state.streak == [Coordinate(3, 2)]
    assert list(state.queue) == [
        Coordinate(3, 1),
        Coordinate(3, 3),
        Coordinate(2, 2),
        Coordinate(4, 2),
    ]


def test_next_target_after_hit_is_an_orthogonal_neighbour(board: Board) -> None:
    state = SearchState()
    record_outcome(state, board, board.receive_attack(Coordinate(3, 2)))

    rng = random.Random(0)
    for _ in range(4):
        choice = select_target(state, board, rng, max_attempts=100)
        assert choice in NEIGHBOURS_OF_3_2
        record_outcome(state, board, board.receive_attack(choice))
        if state.mode is SearchMode.HUNT:
            break
    assert board.get_ships()[0].ship.is_sunk()


def test_corner_hit_only_queues_in_bounds_cells() -> None:
    board = Board()
    board.place_ship(Ship(2), Coordinate(0, 0), Orientation.HORIZONTAL)
    state = SearchState()
    record_outcome(state, board, board.receive_attack(Coordinate(0, 0)))

    assert list(state.queue) == [Coordinate(0, 1), Coordinate(1, 0)]
    assert orthogonal_neighbours(board, Coordinate(9, 9)) == [Coordinate(9, 8), Coordinate(8, 9)]


def test_queue_skips_cells_already_shot(board: Board) -> None:
    state = SearchState()
    board.receive_attack(Coordinate(3, 1))
    record_outcome(state, board, board.receive_attack(Coordinate(3, 2)))
    assert Coordinate(3, 1) not in state.queue

    board.receive_attack(Coordinate(3, 3))
    assert select_target(state, board, random.Random(0), max_attempts=100) == Coordinate(2, 2)


def test_queue_never_holds_duplicates(board: Board) -> None:
    state = SearchState()
    record_outcome(state, board, board.receive_attack(Coordinate(2, 2)))
    record_outcome(state, board, board.receive_attack(Coordinate(3, 2)))

    assert len(state.queue) == len(set(state.queue))
    assert Coordinate(3, 3) in state.queue
    assert state.streak == [Coordinate(2, 2), Coordinate(3, 2)]


def test_miss_keeps_draining_queue(board: Board) -> None:
    state = SearchState()
    record_outcome(state, board, board.receive_attack(Coordinate(3, 2)))
    miss = board.receive_attack(select_target(state, board, random.Random(0), 100))
    assert not miss.hit

    record_outcome(state, board, miss)
    assert state.mode is SearchMode.TARGET
    assert len(state.queue) == 3


def test_sinking_returns_to_hunt(board: Board) -> None:
    state = SearchState()
    for x in (2, 3):
        record_outcome(state, board, board.receive_attack(Coordinate(x, 2)))
    record_outcome(state, board, board.receive_attack(Coordinate(4, 2)))

    assert state.mode is SearchMode.HUNT
    assert not state.queue
    assert not state.streak


def test_drained_queue_falls_back_to_hunt(board: Board) -> None:
    state = SearchState(mode=SearchMode.TARGET)
    state.streak.append(Coordinate(3, 2))
    state.queue.append(Coordinate(0, 0))
    board.receive_attack(Coordinate(0, 0))

    choice = select_target(state, board, random.Random(4), max_attempts=1000)
    assert not board.has_shot(choice)
    assert state.mode is SearchMode.HUNT
    assert not state.streak


def test_pick_untried_only_returns_fresh_cells() -> None:
    board = Board(size=3)
    for coord in [Coordinate(x, y) for x in range(3) for y in range(3)][:-1]:
        board.receive_attack(coord)
    assert pick_untried(board, random.Random(2), max_attempts=10_000) == Coordinate(2, 2)


def test_pick_untried_exhausts_on_full_board() -> None:
    board = Board(size=1)
    board.receive_attack(Coordinate(0, 0))
    with pytest.raises(SearchExhausted):
        pick_untried(board, random.Random(0), max_attempts=10)


def test_reset_clears_everything() -> None:
    state = SearchState(mode=SearchMode.TARGET)
    state.queue.append(Coordinate(1, 1))
    state.streak.append(Coordinate(1, 2))
    state.reset()
    assert state == SearchState()
