import pytest

from racesim.core.errors import RaceInvariantError
from racesim.core.state import BoardState

NAMES = ("Hare", "Tortoise", "Porcupine", "Dan")


def test_fresh_board_starts_everyone_at_zero_in_their_own_lane():
    board = BoardState.fresh(NAMES)

    assert [r.position for r in board.racers] == [0, 0, 0, 0]
    assert [board.lane(name) for name in NAMES] == [0, 1, 2, 3]
    assert [r.repr for r in board.racers] == [
        "0:Hare",
        "1:Tortoise",
        "2:Porcupine",
        "3:Dan",
    ]


def test_move_returns_new_position_and_floors_at_zero():
    board = BoardState.fresh(NAMES)

    assert board.move("Hare", 7) == 7
    assert board.move("Hare", -3) == 4
    assert board.move("Hare", -100) == 0
    assert board.position("Hare") == 0


def test_move_has_no_upper_bound():
    board = BoardState.fresh(NAMES)
    assert board.move("Dan", 1_000) == 1_000


@pytest.mark.parametrize(
    "deltas",
    [
        [-1, -1, -1],
        [5, -2, -9, 3, -1],
        [0, 0, -4, 8, -8, -8],
    ],
)
def test_position_never_goes_negative(deltas: list[int]):
    board = BoardState.fresh(NAMES)
    for delta in deltas:
        assert board.move("Tortoise", delta) >= 0


def test_move_lane_is_clamped_to_the_track_width():
    board = BoardState.fresh(NAMES)

    assert board.move_lane("Hare", -1) == 0
    assert board.move_lane("Hare", 2) == 2
    assert board.move_lane("Hare", 10) == 3
    assert board.move_lane("Dan", 1) == 3
    assert board.move_lane("Dan", -7) == 0


def test_trailing_racer_breaks_ties_towards_first_declared():
    board = BoardState.fresh(NAMES)
    assert board.trailing_racer() == "Hare"

    board.move("Hare", 3)
    board.move("Porcupine", 2)
    board.move("Dan", 2)
    # Tortoise is alone at the back
    assert board.trailing_racer() == "Tortoise"

    board.move("Tortoise", 2)
    # Tortoise, Porcupine and Dan share position 2; Tortoise is declared first
    assert board.trailing_racer() == "Tortoise"


def test_trailing_racer_on_empty_board_is_an_invariant_error():
    board = BoardState.fresh(())

    with pytest.raises(RaceInvariantError) as exc_info:
        board.trailing_racer()

    assert exc_info.value.error_code == "EMPTY_BOARD"


def test_unknown_racer_is_an_invariant_error():
    board = BoardState.fresh(NAMES)

    with pytest.raises(RaceInvariantError) as exc_info:
        board.move("Conjurer", 1)

    assert exc_info.value.error_code == "UNKNOWN_RACER"


def test_standings_order_by_position_then_lane():
    board = BoardState.fresh(NAMES)
    board.move("Hare", 10)
    board.move("Tortoise", 6)
    board.move("Porcupine", 6)
    board.move("Dan", 12)

    # Porcupine (lane 2) beats Tortoise (lane 1) on the tie at 6
    assert board.standings() == ["Dan", "Hare", "Porcupine", "Tortoise"]


def test_standings_keep_declared_order_on_exact_ties():
    board = BoardState.fresh(NAMES)
    board.get_racer("Porcupine").lane = 1
    board.move("Tortoise", 4)
    board.move("Porcupine", 4)

    assert board.standings() == ["Tortoise", "Porcupine", "Dan", "Hare"]
