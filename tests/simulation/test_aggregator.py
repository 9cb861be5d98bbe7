import pytest

from racesim.simulation.aggregator import PayoutAggregator
from racesim.simulation.config import RaceConfig

RACERS = ("Hare", "Tortoise", "Porcupine", "Dan")


def test_payouts_per_place():
    agg = PayoutAggregator("HareAndTortoise", RACERS, RaceConfig(runs=1, bonus=2, bet=3))

    agg.record(["Porcupine", "Hare", "Dan", "Tortoise"])
    stats = agg.finalize()

    assert stats.wins == {"Hare": 0, "Tortoise": 0, "Porcupine": 1, "Dan": 0}
    assert stats.expected_payout == {
        "Hare": 10.0,
        "Tortoise": -3.0,
        "Porcupine": 16.0,
        "Dan": 7.0,
    }


def test_payouts_are_averaged_over_races():
    agg = PayoutAggregator("HareAndTortoise", RACERS, RaceConfig(runs=2, bonus=0, bet=1))

    agg.record(["Hare", "Tortoise", "Porcupine", "Dan"])
    agg.record(["Tortoise", "Hare", "Porcupine", "Dan"])
    stats = agg.finalize()

    assert stats.wins == {"Hare": 1, "Tortoise": 1, "Porcupine": 0, "Dan": 0}
    assert stats.expected_payout == {
        "Hare": 1.0,
        "Tortoise": 1.0,
        "Porcupine": -1.0,
        "Dan": -1.0,
    }
    assert stats.win_rate == {"Hare": 0.5, "Tortoise": 0.5, "Porcupine": 0.0, "Dan": 0.0}


def test_last_declared_rival_only_pays_racers_ahead_of_dan():
    config = RaceConfig(runs=1, bonus=1, bet=0, bonus_rival="last_declared")
    agg = PayoutAggregator("HareAndTortoise", RACERS, config)

    agg.record(["Hare", "Dan", "Tortoise", "Porcupine"])
    stats = agg.finalize()

    assert stats.expected_payout == {
        "Hare": 5.0,
        "Tortoise": 0.0,
        "Porcupine": 0.0,
        "Dan": 0.0,
    }


def test_payouts_need_exactly_four_racers():
    with pytest.raises(ValueError, match="only defined for 4"):
        PayoutAggregator("HareAndTortoise", RACERS[:3], RaceConfig())


def test_finalize_without_races_is_an_error():
    agg = PayoutAggregator("HareAndTortoise", RACERS, RaceConfig())

    with pytest.raises(ValueError, match="No races recorded"):
        agg.finalize()
