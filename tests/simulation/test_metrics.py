from racesim.simulation.aggregator import RaceStats
from racesim.simulation.metrics import best_bets, stats_frame


def _results() -> list[RaceStats]:
    return [
        RaceStats(
            variant="HareAndTortoise",
            runs=4,
            wins={"Hare": 2, "Tortoise": 1, "Porcupine": 1, "Dan": 0},
            expected_payout={"Hare": 1.5, "Tortoise": 3.0, "Porcupine": 3.0, "Dan": -1.0},
        ),
        RaceStats(
            variant="FormulaD",
            runs=4,
            wins={"Yellow": 0, "Red": 0, "Black": 4, "Dan": 0},
            expected_payout={"Yellow": -1.0, "Red": 0.5, "Black": 2.0, "Dan": -1.5},
        ),
    ]


def test_stats_frame_has_one_row_per_racer_in_declared_order():
    df = stats_frame(_results())

    assert df.height == 8
    assert df["racer"].to_list()[:4] == ["Hare", "Tortoise", "Porcupine", "Dan"]
    assert df["order"].to_list() == [0, 1, 2, 3, 0, 1, 2, 3]
    assert df["win_rate"].to_list()[:4] == [0.5, 0.25, 0.25, 0.0]


def test_best_bets_keeps_variant_order_and_first_declared_on_ties():
    bets = best_bets(stats_frame(_results()))

    assert bets.columns == ["variant", "racer", "expected_payout", "win_rate"]
    assert bets.rows() == [
        ("HareAndTortoise", "Tortoise", 3.0, 0.25),
        ("FormulaD", "Black", 2.0, 1.0),
    ]
