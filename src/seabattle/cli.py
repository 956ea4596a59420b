"""Command-line driver for playing Battleship against the computer."""

from __future__ import annotations

import argparse
import string
import time
from typing import Callable

from seabattle.config import GameConfig, load_game_config
from seabattle.engine.game import BattleshipGame, MoveResult
from seabattle.engine.player import PlayerKind
from seabattle.engine.ship import Coordinate, Orientation
from seabattle.telemetry import init_telemetry

ROW_LABELS = string.ascii_uppercase
SHIP_NAMES = {5: "carrier", 4: "battleship", 3: "cruiser", 2: "destroyer"}

Prompt = Callable[[str], str]


def _coordinate_from_input(text: str, size: int) -> Coordinate:
    """Parse ``A5`` (row letter, 1-based column) or ``x y`` (0-based)."""
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        row = ROW_LABELS.find(cleaned[0])
        if row < 0 or row >= size:
            raise ValueError(f"Row must be between A and {ROW_LABELS[size - 1]}.")
        try:
            col = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError(f"Column must be a number between 1 and {size}.") from exc
        return Coordinate(col, row)
    parts = cleaned.split()
    if len(parts) != 2:
        raise ValueError("Use formats like A5 or '3 7'.")
    try:
        x, y = map(int, parts)
    except ValueError as exc:
        raise ValueError("Coordinates must be whole numbers.") from exc
    return Coordinate(x, y)


def _label(coord: Coordinate) -> str:
    return f"{ROW_LABELS[coord.y]}{coord.x + 1}"


def _ship_name(length: int) -> str:
    return SHIP_NAMES.get(length, f"{length}-cell ship")


def format_human_board(game: BattleshipGame) -> str:
    size = game.config.board_size
    rows = ["    " + " ".join(f"{col + 1:>2}" for col in range(size))]
    for y in range(size):
        symbols = []
        for x in range(size):
            cell = game.get_human_cell_state(x, y)
            if cell.hit:
                symbol = "X"
            elif cell.miss:
                symbol = "o"
            else:
                symbol = "S" if cell.has_ship else "."
            symbols.append(f"{symbol:>2}")
        rows.append(f"{ROW_LABELS[y]} |" + " ".join(symbols))
    return "\n".join(rows)


def format_computer_board(game: BattleshipGame) -> str:
    size = game.config.board_size
    rows = ["    " + " ".join(f"{col + 1:>2}" for col in range(size))]
    for y in range(size):
        symbols = []
        for x in range(size):
            cell = game.get_computer_cell_state(x, y)
            symbol = "X" if cell.hit else "o" if cell.miss else "."
            symbols.append(f"{symbol:>2}")
        rows.append(f"{ROW_LABELS[y]} |" + " ".join(symbols))
    return "\n".join(rows)


def describe_move(move: MoveResult) -> str:
    who = "You" if move.attacker is PlayerKind.HUMAN else "The computer"
    result = move.result
    if result.sunk and result.ship is not None:
        outcome = f"sank a {_ship_name(result.ship.length)}!"
    elif result.hit:
        outcome = "hit"
    else:
        outcome = "miss"
    return f"{who} fired at {_label(move.coordinate)}: {outcome}"


def _prompt_orientation(length: int, prompt: Prompt) -> Orientation:
    while True:
        raw = (
            prompt(f"Place your {_ship_name(length)} (length {length}). Orientation [H/V]: ")
            .strip()
            .upper()
        )
        if raw in {"H", "HOR", "HORIZONTAL"}:
            return Orientation.HORIZONTAL
        if raw in {"V", "VER", "VERTICAL"}:
            return Orientation.VERTICAL
        print("Please enter H for horizontal or V for vertical.")


def manual_ship_placement(game: BattleshipGame, prompt: Prompt = input) -> None:
    """Let the human place their fleet; the computer's fleet is left as placed."""
    game.clear_ships(PlayerKind.HUMAN)
    for length in game.remaining_fleet(PlayerKind.HUMAN):
        while True:
            print("\nCurrent layout:")
            print(format_human_board(game))
            orientation = _prompt_orientation(length, prompt)
            try:
                start = _coordinate_from_input(
                    prompt("Enter starting coordinate (e.g., A1): "), game.config.board_size
                )
                game.place_ship(PlayerKind.HUMAN, length, start.x, start.y, orientation)
            except ValueError as exc:
                print(f"Invalid placement: {exc}")
                continue
            break


def _prompt_yes_no(question: str, prompt: Prompt, default: bool = True) -> bool:
    while True:
        raw = prompt(question).strip().lower()
        if not raw:
            return default
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Please answer with 'y' or 'n'.")


def _human_turn(game: BattleshipGame, prompt: Prompt) -> MoveResult:
    while True:
        raw = prompt("Enter target coordinate (e.g., A5) or 'q' to quit: ").strip()
        if raw.lower() == "q":
            raise SystemExit("Goodbye!")
        try:
            coord = _coordinate_from_input(raw, game.config.board_size)
            move = game.attack(coord.x, coord.y)
        except ValueError as exc:
            print(f"Invalid input: {exc}")
            continue
        if move.result.already_tried:
            print("That cell has already been targeted. Choose another.")
            continue
        return move


def play_game(
    config: GameConfig,
    seed: int | None = None,
    manual: bool = False,
    prompt: Prompt = input,
    sleep: Callable[[float], None] = time.sleep,
) -> PlayerKind | None:
    """Play matches until the human declines a rematch; return the last winner."""
    print("Welcome to Battleship!\n")
    game = BattleshipGame(config=config, rng_seed=seed)
    while True:
        if manual:
            manual_ship_placement(game, prompt)
        else:
            print("Your ships have been positioned automatically.")

        while not game.is_over:
            print("\nYour Board:")
            print(format_human_board(game))
            print("\nEnemy Waters:")
            print(format_computer_board(game))
            print(describe_move(_human_turn(game, prompt)))
            if game.is_over:
                break
            print("The computer is thinking...")
            sleep(config.cpu_delay_seconds)
            print(describe_move(game.cpu_turn()))

        if game.winner is PlayerKind.HUMAN:
            print("\nCongratulations, you won!")
        else:
            print("\nThe computer won this time. Better luck next battle!")

        if not _prompt_yes_no("Play again? [Y/n]: ", prompt):
            return game.winner
        game.restart()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play Battleship against the computer.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--delay", type=float, default=None, help="Seconds to pause before the computer fires."
    )
    parser.add_argument(
        "--manual", action="store_true", help="Place your own ships instead of random placement."
    )
    args = parser.parse_args(argv)

    init_telemetry()
    config = load_game_config()
    if args.delay is not None:
        config = config.model_copy(update={"cpu_delay_seconds": max(args.delay, 0.0)})
    play_game(config, seed=args.seed, manual=args.manual)


if __name__ == "__main__":
    main()
