import pytest

from racesim.games import MagicalAthletes
from tests.test_utils import RaceScenario


@pytest.mark.parametrize(
    ("rolls", "expected"),
    [
        ([5], 5),  # high roll is kept
        ([2, 4], 4),  # low roll gets one redo
        ([4], 4),
        ([3, 1, 1, 6], 6),  # redo lands on 1, keep rolling until it is not
        ([2, 1, 5], 5),
        ([1, 1, 2], 2),
    ],
)
def test_conjurer_rerolls(scenario: type[RaceScenario], rolls: list[int], expected: int):
    game = scenario(MagicalAthletes(), dice_rolls=rolls)

    game.engine.rules.handle(game.engine, "Conjurer")

    assert game.position("Conjurer") == expected
    assert game.rolls_used == len(rolls)


def test_priest_blesses_the_trailing_racer_then_moves(scenario: type[RaceScenario]):
    game = scenario(
        MagicalAthletes(),
        dice_rolls=[4],
        start_positions={"Conjurer": 5, "Priest": 3, "Martial": 1, "Dan": 2},
    )

    game.engine.rules.handle(game.engine, "Priest")

    assert game.position("Martial") == 3
    assert game.position("Priest") == 8, "3 + 4 + 1"


def test_priest_blesses_itself_when_last(scenario: type[RaceScenario]):
    game = scenario(
        MagicalAthletes(),
        dice_rolls=[1],
        start_positions={"Conjurer": 2, "Martial": 1, "Dan": 4},
    )

    game.engine.rules.handle(game.engine, "Priest")

    assert game.position("Priest") == 4, "0 + 2 blessing + 1 + 1"


def test_priest_blessing_tie_goes_to_first_declared(scenario: type[RaceScenario]):
    game = scenario(MagicalAthletes(), dice_rolls=[3])

    game.engine.rules.handle(game.engine, "Priest")

    assert game.position("Conjurer") == 2
    assert game.position("Martial") == 0
    assert game.position("Dan") == 0


def test_martial_steps_through_occupied_spaces_for_free(scenario: type[RaceScenario]):
    """
    Scenario: Martial at 2 rolls 3; Conjurer on 3, Priest on 4, Dan on 6.
    Steps onto 3, 4 and 6 do not count, so Martial ends on 8.
    """
    game = scenario(
        MagicalAthletes(),
        dice_rolls=[3],
        start_positions={"Conjurer": 3, "Priest": 4, "Martial": 2, "Dan": 6},
    )

    game.engine.rules.handle(game.engine, "Martial")

    assert game.position("Martial") == 8


def test_full_turn(scenario: type[RaceScenario]):
    # Conjurer 6; Priest is the first racer at the back, blesses itself then rolls 2
    game = scenario(MagicalAthletes(), dice_rolls=[6, 2, 1])

    game.run_turn()

    assert game.positions() == {"Conjurer": 6, "Priest": 5, "Martial": 1, "Dan": 4}
