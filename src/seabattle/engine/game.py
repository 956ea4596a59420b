"""Human vs. computer Battleship game controller."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from seabattle.config import GameConfig, load_game_config
from seabattle.telemetry import get_meter, get_tracer, record_metric

from .board import AttackResult, Board
from .errors import GameOver, InvalidArgument, OutOfBounds, TurnViolation
from .player import Player, PlayerKind
from .ship import Coordinate, Orientation, Ship
from .targeting import SearchState, record_outcome, select_target

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.game")
meter = get_meter("seabattle.engine.game")

MOVE_COUNTER = meter.create_counter(
    "seabattle_engine_moves",
    unit="1",
    description="Number of resolved attacks in BattleshipGame",
)

GAME_COUNTER = meter.create_counter(
    "seabattle_engine_games_finished",
    unit="1",
    description="Number of finished games by winner",
)

PLAYER_NAMES = {PlayerKind.HUMAN: "You", PlayerKind.COMPUTER: "CPU"}


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one turn as seen by the presentation layer."""

    attacker: PlayerKind
    result: AttackResult
    winner: PlayerKind | None
    next_turn: PlayerKind

    @property
    def coordinate(self) -> Coordinate:
        return self.result.coordinate


@dataclass(frozen=True)
class HumanCellState:
    """What the human sees on their own board."""

    has_ship: bool
    hit: bool
    miss: bool


@dataclass(frozen=True)
class ComputerCellState:
    """What the human sees on the computer's board; ship positions stay hidden."""

    hit: bool
    miss: bool


class BattleshipGame:
    """Coordinates a match between the human and the computer opponent."""

    def __init__(
        self,
        config: GameConfig | None = None,
        rng_seed: int | None = None,
        auto_place: bool = True,
    ) -> None:
        self.config = config or load_game_config()
        self._rng = random.Random(rng_seed)
        self.players: dict[PlayerKind, Player] = self._new_players()
        self.turn: PlayerKind = PlayerKind.HUMAN
        self.is_over: bool = False
        self.winner: PlayerKind | None = None
        self.search = SearchState()
        if auto_place:
            self.auto_place_all()

    @property
    def human(self) -> Player:
        return self.players[PlayerKind.HUMAN]

    @property
    def computer(self) -> Player:
        return self.players[PlayerKind.COMPUTER]

    def _new_players(self) -> dict[PlayerKind, Player]:
        return {
            kind: Player(PLAYER_NAMES[kind], kind, self.config.board_size)
            for kind in PlayerKind
        }

    def _reset_match_state(self) -> None:
        self.turn = PlayerKind.HUMAN
        self.is_over = False
        self.winner = None
        self.search.reset()

    # Commands

    def place_ship(
        self,
        player: PlayerKind,
        length: int,
        x: int,
        y: int,
        orientation: Orientation | str = Orientation.HORIZONTAL,
    ) -> list[Coordinate]:
        """Place a ship of ``length`` on ``player``'s board starting at ``(x, y)``."""
        if self.is_over:
            raise GameOver("The game is over; restart to place ships again.")
        try:
            orientation = Orientation(orientation)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown orientation {orientation!r}.") from exc
        ship = Ship(length)
        return self.players[player].board.place_ship(ship, Coordinate(x, y), orientation)

    def clear_ships(self, player: PlayerKind) -> None:
        """Remove every ship and shot from ``player``'s board ahead of manual placement."""
        if self.is_over:
            raise GameOver("The game is over; restart to place ships again.")
        self.players[player].board.clear()
        logger.info("board_cleared", extra={"player": player.value})

    def auto_place_all(self) -> None:
        """Randomly place the configured fleet on two fresh boards and reset the match."""
        with tracer.start_as_current_span("game.auto_place_all") as span:
            span.set_attribute("board.size", self.config.board_size)
            span.set_attribute("fleet", list(self.config.fleet))
            self.players = self._new_players()
            for player in self.players.values():
                player.board.random_placement(
                    self.config.fleet, self._rng, self.config.placement_max_attempts
                )
            self._reset_match_state()
            logger.info(
                "game_auto_place_complete",
                extra={"fleet": list(self.config.fleet), "turn": self.turn.value},
            )

    def restart(self) -> None:
        """Start a brand-new match with fresh players and randomly placed fleets."""
        logger.info("game_restart")
        self.auto_place_all()

    def attack(self, x: int, y: int, player: PlayerKind = PlayerKind.HUMAN) -> MoveResult:
        """Fire at ``(x, y)`` on the opponent of ``player`` (the computer by default)."""
        with tracer.start_as_current_span("game.attack") as span:
            span.set_attribute("player", player.value)
            span.set_attribute("x", x)
            span.set_attribute("y", y)
            self._ensure_can_move(player)
            defender = self.players[player.opponent()]
            result = self.players[player].attack(defender.board, Coordinate(x, y))
            if result.already_tried:
                span.set_attribute("shot.outcome", "repeat")
                return MoveResult(attacker=player, result=result, winner=None, next_turn=self.turn)
            return self._conclude(player, result, span)

    def cpu_turn(self) -> MoveResult:
        """Let the computer take its shot using the hunt/target search."""
        with tracer.start_as_current_span("game.cpu_turn") as span:
            self._ensure_can_move(PlayerKind.COMPUTER)
            previous_mode = self.search.mode
            span.set_attribute("search.mode", previous_mode.value)
            target_board = self.human.board
            coord = select_target(
                self.search, target_board, self._rng, self.config.random_move_max_attempts
            )
            span.set_attribute("x", coord.x)
            span.set_attribute("y", coord.y)
            result = self.computer.attack(target_board, coord)
            record_outcome(self.search, target_board, result)
            if self.search.mode is not previous_mode:
                record_metric(
                    "seabattle_cpu_search_transitions_total",
                    1,
                    {"from": previous_mode.value, "to": self.search.mode.value},
                )
            logger.debug(
                "cpu_search_updated",
                extra={"mode": self.search.mode.value, "queued": len(self.search.queue)},
            )
            return self._conclude(PlayerKind.COMPUTER, result, span)

    def _ensure_can_move(self, player: PlayerKind) -> None:
        if self.is_over:
            logger.warning(
                "move_rejected_game_over",
                extra={"player": player.value, "winner": self.winner.value if self.winner else None},
            )
            raise GameOver("The game is over.")
        if player is not self.turn:
            logger.warning(
                "move_rejected_wrong_player",
                extra={"player": player.value, "current": self.turn.value},
            )
            raise TurnViolation(f"It is not the {player.value}'s turn.")

    def _conclude(self, attacker: PlayerKind, result: AttackResult, span) -> MoveResult:
        defender = attacker.opponent()
        outcome = "sunk" if result.sunk else result.state.value
        span.set_attribute("shot.outcome", outcome)
        MOVE_COUNTER.add(1, attributes={"result": outcome, "player": attacker.value})

        if self.players[defender].board.all_ships_sunk():
            self.is_over = True
            self.winner = attacker
            span.set_attribute("game.winner", attacker.value)
            GAME_COUNTER.add(1, attributes={"winner": attacker.value})
            logger.info("game_finished", extra={"winner": attacker.value})
        else:
            self.turn = defender
            span.set_attribute("next_player", defender.value)
        return MoveResult(attacker=attacker, result=result, winner=self.winner, next_turn=self.turn)

    # Queries

    def _checked(self, board: Board, x: int, y: int) -> Coordinate:
        coord = Coordinate(x, y)
        if not board.is_valid_coordinate(coord):
            raise OutOfBounds(f"({x}, {y}) is outside the board.")
        return coord

    def get_human_cell_state(self, x: int, y: int) -> HumanCellState:
        board = self.human.board
        coord = self._checked(board, x, y)
        return HumanCellState(
            has_ship=board.has_ship(coord), hit=board.is_hit(coord), miss=board.is_miss(coord)
        )

    def get_computer_cell_state(self, x: int, y: int) -> ComputerCellState:
        board = self.computer.board
        coord = self._checked(board, x, y)
        return ComputerCellState(hit=board.is_hit(coord), miss=board.is_miss(coord))

    def remaining_fleet(self, player: PlayerKind) -> list[int]:
        """Return the fleet lengths not yet placed on ``player``'s board."""
        remaining = list(self.config.fleet)
        for placed in self.players[player].board.get_ships():
            if placed.ship.length in remaining:
                remaining.remove(placed.ship.length)
        return remaining

    def valid_targets(self, player: PlayerKind = PlayerKind.HUMAN) -> list[Coordinate]:
        """Return all coordinates ``player`` can still fire at."""
        if self.is_over:
            return []
        target_board = self.players[player.opponent()].board
        return [
            Coordinate(x, y)
            for y in range(target_board.size)
            for x in range(target_board.size)
            if not target_board.has_shot(Coordinate(x, y))
        ]
