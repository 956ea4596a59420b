"""Human vs. computer Battleship engine."""

__version__ = "0.1.0"
