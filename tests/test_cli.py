"""Tests for the text presentation layer."""

import pytest

from seabattle import cli
from seabattle.config import GameConfig
from seabattle.engine.game import BattleshipGame
from seabattle.engine.player import PlayerKind
from seabattle.engine.ship import Coordinate


@pytest.mark.parametrize(
    ("text", "expected"),
    [("A5", Coordinate(4, 0)), ("j10", Coordinate(9, 9)), ("3 7", Coordinate(3, 7))],
)
def test_coordinate_parsing(text: str, expected: Coordinate) -> None:
    assert cli._coordinate_from_input(text, 10) == expected


@pytest.mark.parametrize("text", ["", "K1", "Ax", "1 2 3", "a b"])
def test_coordinate_parsing_rejects_garbage(text: str) -> None:
    with pytest.raises(ValueError):
        cli._coordinate_from_input(text, 10)


def test_boards_render_from_cell_queries() -> None:
    game = BattleshipGame(config=GameConfig(), rng_seed=5)
    human = cli.format_human_board(game)
    enemy = cli.format_computer_board(game)

    assert human.count("S") == sum(game.config.fleet)
    assert "S" not in enemy
    assert len(enemy.splitlines()) == game.config.board_size + 1


def test_describe_move_mentions_target() -> None:
    game = BattleshipGame(config=GameConfig(), rng_seed=5)
    text = cli.describe_move(game.attack(4, 0))
    assert text.startswith("You fired at A5: ")


def _scripted_prompt(answers: list[str]):
    remaining = iter(answers)

    def prompt(question: str) -> str:
        if question.startswith("Play again"):
            return "n"
        return next(remaining)

    return prompt


def test_play_game_runs_to_completion(capsys: pytest.CaptureFixture[str]) -> None:
    config = GameConfig(board_size=2, fleet=(1,), cpu_delay_seconds=0.25)
    pauses: list[float] = []

    winner = cli.play_game(
        config,
        seed=1,
        prompt=_scripted_prompt(["A1", "A2", "B1", "B2"]),
        sleep=pauses.append,
    )

    assert winner in {PlayerKind.HUMAN, PlayerKind.COMPUTER}
    assert all(pause == 0.25 for pause in pauses)
    assert "won" in capsys.readouterr().out


def test_manual_placement_reprompts_on_invalid_cells() -> None:
    game = BattleshipGame(config=GameConfig(board_size=4, fleet=(3, 2)), rng_seed=2)
    answers = ["H", "A3", "H", "A1", "V", "A1", "V", "B1"]

    cli.manual_ship_placement(game, _scripted_prompt(answers))

    ships = game.human.board.get_ships()
    assert [placed.ship.length for placed in ships] == [3, 2]
    assert ships[0].coordinates == (Coordinate(0, 0), Coordinate(1, 0), Coordinate(2, 0))
    assert ships[1].coordinates == (Coordinate(0, 1), Coordinate(0, 2))
