"""Single-player board management for the Battleship engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from seabattle.telemetry import get_meter, get_tracer

from .errors import InvalidArgument, InvalidPlacement, OutOfBounds, SearchExhausted
from .ship import Coordinate, Orientation, Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "seabattle_engine_shots",
    unit="1",
    description="Shots received by a board",
)


class CellState(Enum):
    """Outcome recorded for a cell that has been shot at."""

    MISS = "miss"
    HIT = "hit"


@dataclass(frozen=True)
class AttackResult:
    """Outcome of a single attack against a board."""

    coordinate: Coordinate
    hit: bool = False
    sunk: bool = False
    ship: Ship | None = None
    already_tried: bool = False

    @property
    def state(self) -> CellState:
        return CellState.HIT if self.hit else CellState.MISS


@dataclass(frozen=True)
class PlacedShip:
    """Read-only view of a ship and the cells it occupies."""

    ship: Ship
    coordinates: tuple[Coordinate, ...]


@dataclass
class _ShipEntry:
    ship: Ship
    coordinates: tuple[Coordinate, ...]
    hits: set[Coordinate] = field(default_factory=set)


@dataclass
class Board:
    """Represents one player's grid, fleet and shot history."""

    size: int = 10
    owner: str = "unknown"
    _entries: list[_ShipEntry] = field(default_factory=list, init=False, repr=False)
    _occupancy: dict[Coordinate, int] = field(default_factory=dict, init=False, repr=False)
    _missed: set[Coordinate] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise InvalidArgument(f"Board size must be a positive integer, got {self.size!r}.")

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.x < self.size and 0 <= coord.y < self.size

    @staticmethod
    def run_coordinates(
        start: Coordinate, length: int, orientation: Orientation
    ) -> list[Coordinate]:
        """Return the ``length`` cells a ship starting at ``start`` would cover."""
        dx, dy = orientation.step
        return [start.offset(dx * i, dy * i) for i in range(length)]

    def can_place(self, length: int, start: Coordinate, orientation: Orientation) -> bool:
        """Determine whether a ship fits inside the grid without overlapping another."""
        return all(
            self.is_valid_coordinate(coord) and coord not in self._occupancy
            for coord in self.run_coordinates(start, length, orientation)
        )

    def place_ship(
        self,
        ship: Ship,
        start: Coordinate,
        orientation: Orientation = Orientation.HORIZONTAL,
    ) -> list[Coordinate]:
        """Reserve every cell of ``ship`` or raise ``InvalidPlacement`` leaving the board untouched."""
        with tracer.start_as_current_span("board.place_ship") as span:
            span.set_attribute("ship.length", ship.length)
            span.set_attribute("ship.start.x", start.x)
            span.set_attribute("ship.start.y", start.y)
            span.set_attribute("ship.orientation", orientation.value)
            span.set_attribute("board.owner", self.owner)
            log_fields = {
                "owner": self.owner,
                "length": ship.length,
                "orientation": orientation.name,
                "x": start.x,
                "y": start.y,
            }
            if not self.can_place(ship.length, start, orientation):
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.warning("ship_placement_failed", extra=log_fields)
                raise InvalidPlacement(
                    f"Ship of length {ship.length} cannot be placed {orientation.value}ly "
                    f"at ({start.x}, {start.y})."
                )

            coords = self.run_coordinates(start, ship.length, orientation)
            index = len(self._entries)
            self._entries.append(_ShipEntry(ship=ship, coordinates=tuple(coords)))
            for coord in coords:
                self._occupancy[coord] = index
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info("ship_placed", extra=log_fields)
            return list(coords)

    def receive_attack(self, coord: Coordinate) -> AttackResult:
        """Register a shot at this board and return its outcome."""
        with tracer.start_as_current_span("board.receive_attack") as span:
            span.set_attribute("shot.x", coord.x)
            span.set_attribute("shot.y", coord.y)
            span.set_attribute("board.owner", self.owner)
            if not self.is_valid_coordinate(coord):
                logger.warning(
                    "shot_out_of_bounds",
                    extra={"x": coord.x, "y": coord.y, "owner": self.owner},
                )
                raise OutOfBounds(f"Attack at ({coord.x}, {coord.y}) is outside the board.")

            if self.has_shot(coord):
                span.set_attribute("shot.outcome", "repeat")
                logger.debug(
                    "shot_repeat", extra={"x": coord.x, "y": coord.y, "owner": self.owner}
                )
                return AttackResult(coordinate=coord, hit=self.is_hit(coord), already_tried=True)

            index = self._occupancy.get(coord)
            if index is None:
                self._missed.add(coord)
                span.set_attribute("shot.outcome", "miss")
                SHOT_COUNTER.add(1, attributes={"outcome": "miss", "owner": self.owner})
                logger.info("shot_miss", extra={"x": coord.x, "y": coord.y, "owner": self.owner})
                return AttackResult(coordinate=coord)

            entry = self._entries[index]
            entry.hits.add(coord)
            entry.ship.hit()
            sunk = entry.ship.is_sunk()
            span.set_attribute("shot.outcome", "sunk" if sunk else "hit")
            SHOT_COUNTER.add(1, attributes={"outcome": "hit", "owner": self.owner})
            logger.info(
                "shot_hit",
                extra={
                    "x": coord.x,
                    "y": coord.y,
                    "length": entry.ship.length,
                    "sunk": sunk,
                    "owner": self.owner,
                },
            )
            return AttackResult(coordinate=coord, hit=True, sunk=sunk, ship=entry.ship)

    def get_missed_attacks(self) -> list[Coordinate]:
        return list(self._missed)

    def all_ships_sunk(self) -> bool:
        """True once every ship is sunk; an empty board never counts as defeated."""
        return bool(self._entries) and all(entry.ship.is_sunk() for entry in self._entries)

    def get_ships(self) -> list[PlacedShip]:
        return [PlacedShip(ship=entry.ship, coordinates=entry.coordinates) for entry in self._entries]

    def has_ship(self, coord: Coordinate) -> bool:
        return coord in self._occupancy

    def is_hit(self, coord: Coordinate) -> bool:
        index = self._occupancy.get(coord)
        return index is not None and coord in self._entries[index].hits

    def is_miss(self, coord: Coordinate) -> bool:
        return coord in self._missed

    def has_shot(self, coord: Coordinate) -> bool:
        """Return True if the coordinate was attacked before, hit or miss."""
        return self.is_miss(coord) or self.is_hit(coord)

    def clear(self) -> None:
        self._entries.clear()
        self._occupancy.clear()
        self._missed.clear()

    def random_placement(
        self,
        fleet: Sequence[int],
        rng: random.Random,
        max_attempts: int = 1000,
    ) -> None:
        """Clear the board and place one ship per fleet length at random positions."""
        with tracer.start_as_current_span("board.random_placement") as span:
            span.set_attribute("board.owner", self.owner)
            span.set_attribute("fleet.size", len(fleet))
            self.clear()
            orientations = list(Orientation)
            for length in fleet:
                for attempt in range(1, max_attempts + 1):
                    orientation = rng.choice(orientations)
                    start = Coordinate(rng.randrange(self.size), rng.randrange(self.size))
                    if self.can_place(length, start, orientation):
                        self.place_ship(Ship(length), start, orientation)
                        logger.debug(
                            "random_ship_placed",
                            extra={"length": length, "attempts": attempt, "owner": self.owner},
                        )
                        break
                else:
                    logger.error(
                        "random_placement_exhausted",
                        extra={"length": length, "attempts": max_attempts, "owner": self.owner},
                    )
                    raise SearchExhausted(
                        f"Could not place a ship of length {length} in {max_attempts} attempts."
                    )
