"""Ship domain model for the Battleship engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import InvalidArgument


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate; ``x`` is the column and ``y`` the row."""

    x: int
    y: int

    def __post_init__(self) -> None:
        for axis in (self.x, self.y):
            if isinstance(axis, bool) or not isinstance(axis, int):
                raise InvalidArgument(
                    f"Coordinates must be whole numbers, got ({self.x!r}, {self.y!r})."
                )

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> tuple[int, int]:
        """Return the (dx, dy) increment between consecutive cells of a run."""
        return (1, 0) if self is Orientation.HORIZONTAL else (0, 1)


@dataclass
class Ship:
    """A single vessel; tracks how many of its cells have been hit."""

    length: int
    hit_count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length <= 0:
            raise InvalidArgument(f"Ship length must be a positive integer, got {self.length!r}.")

    def hit(self) -> None:
        """Register one hit; hits past sinking are ignored."""
        if self.hit_count < self.length:
            self.hit_count += 1

    def is_sunk(self) -> bool:
        return self.hit_count >= self.length
