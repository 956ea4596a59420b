"""Players: a named side of the match bound to its own board."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from .board import AttackResult, Board
from .errors import InvalidArgument, SearchExhausted
from .ship import Coordinate

logger = logging.getLogger(__name__)


class PlayerKind(Enum):
    """The two sides of a human vs. computer match."""

    HUMAN = "human"
    COMPUTER = "computer"

    def opponent(self) -> PlayerKind:
        """Return the opposing side."""
        return PlayerKind.COMPUTER if self is PlayerKind.HUMAN else PlayerKind.HUMAN


@dataclass
class Player:
    """Binds a name and kind to exactly one board and a record of shots fired."""

    name: str
    kind: PlayerKind = PlayerKind.HUMAN
    board_size: int = 10
    board: Board = field(init=False)
    attempted: set[Coordinate] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        self.board = Board(size=self.board_size, owner=self.kind.value)

    def attack(self, opponent_board: Board | None, coord: Coordinate) -> AttackResult:
        """Fire at ``coord`` on the opponent's board and remember the attempt."""
        if opponent_board is None:
            raise InvalidArgument("An opponent board is required to attack.")
        result = opponent_board.receive_attack(coord)
        self.attempted.add(coord)
        return result

    def random_move(
        self,
        opponent_board: Board | None,
        rng: random.Random | None = None,
        max_attempts: int = 10_000,
    ) -> AttackResult:
        """Attack a uniformly random coordinate this player has not tried yet."""
        if opponent_board is None:
            raise InvalidArgument("An opponent board is required to attack.")
        rng = rng or random.Random()
        size = opponent_board.size
        for _ in range(max_attempts):
            coord = Coordinate(rng.randrange(size), rng.randrange(size))
            if coord not in self.attempted:
                return self.attack(opponent_board, coord)
        logger.error(
            "random_move_exhausted",
            extra={"player": self.name, "attempts": max_attempts, "tried": len(self.attempted)},
        )
        raise SearchExhausted(f"{self.name} found no untried coordinate in {max_attempts} attempts.")
