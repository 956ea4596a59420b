"""Game engine: ships, boards, players and the match controller."""

from .board import AttackResult, Board, CellState, PlacedShip
from .errors import (
    GameError,
    GameOver,
    InvalidArgument,
    InvalidPlacement,
    OutOfBounds,
    SearchExhausted,
    TurnViolation,
)
from .game import BattleshipGame, ComputerCellState, HumanCellState, MoveResult
from .player import Player, PlayerKind
from .ship import Coordinate, Orientation, Ship
from .targeting import SearchMode, SearchState

__all__ = [
    "AttackResult",
    "BattleshipGame",
    "Board",
    "CellState",
    "ComputerCellState",
    "Coordinate",
    "GameError",
    "GameOver",
    "HumanCellState",
    "InvalidArgument",
    "InvalidPlacement",
    "MoveResult",
    "Orientation",
    "OutOfBounds",
    "PlacedShip",
    "Player",
    "PlayerKind",
    "SearchExhausted",
    "SearchMode",
    "SearchState",
    "Ship",
    "TurnViolation",
]
