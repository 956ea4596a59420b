"""Hunt/target search used by the computer opponent.

In *hunt* mode the computer fires at uniformly random cells it has not shot
yet. The first hit switches it to *target* mode: the orthogonal neighbours of
every hit are queued and tried in discovery order until the wounded ship
sinks, at which point the search returns to hunting. Only one wounded ship is
tracked at a time; neighbours of a second ship hit while targeting simply join
the same queue and are discarded when the first ship sinks.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from .board import AttackResult, Board
from .errors import SearchExhausted
from .ship import Coordinate

logger = logging.getLogger(__name__)

# Up, down, left, right.
ORTHOGONAL_STEPS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class SearchMode(Enum):
    HUNT = "hunt"
    TARGET = "target"


@dataclass
class SearchState:
    """Mutable search state owned by a single game."""

    mode: SearchMode = SearchMode.HUNT
    queue: deque[Coordinate] = field(default_factory=deque)
    streak: list[Coordinate] = field(default_factory=list)

    def reset(self) -> None:
        self.mode = SearchMode.HUNT
        self.queue.clear()
        self.streak.clear()


def orthogonal_neighbours(board: Board, coord: Coordinate) -> list[Coordinate]:
    """Return the in-bounds cells directly above, below, left and right of ``coord``."""
    neighbours = (coord.offset(dx, dy) for dx, dy in ORTHOGONAL_STEPS)
    return [n for n in neighbours if board.is_valid_coordinate(n)]


def pick_untried(board: Board, rng: random.Random, max_attempts: int) -> Coordinate:
    """Rejection-sample a cell of ``board`` that has not been shot."""
    for _ in range(max_attempts):
        coord = Coordinate(rng.randrange(board.size), rng.randrange(board.size))
        if not board.has_shot(coord):
            return coord
    raise SearchExhausted(f"No untried coordinate found in {max_attempts} attempts.")


def select_target(
    state: SearchState, board: Board, rng: random.Random, max_attempts: int
) -> Coordinate:
    """Choose the next cell to fire at, draining the target queue before hunting."""
    if state.mode is SearchMode.TARGET:
        while state.queue:
            candidate = state.queue.popleft()
            if not board.has_shot(candidate):
                return candidate
        logger.debug("target_queue_drained", extra={"streak": len(state.streak)})
        state.mode = SearchMode.HUNT
        state.streak.clear()
    return pick_untried(board, rng, max_attempts)


def record_outcome(state: SearchState, board: Board, result: AttackResult) -> None:
    """Fold the result of the computer's shot back into the search state."""
    if not result.hit:
        return
    if result.sunk:
        state.reset()
        return

    state.mode = SearchMode.TARGET
    state.streak.append(result.coordinate)
    for neighbour in orthogonal_neighbours(board, result.coordinate):
        if not board.has_shot(neighbour) and neighbour not in state.queue:
            state.queue.append(neighbour)
