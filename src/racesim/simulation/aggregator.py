from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from racesim.core.types import RacerName, VariantName
    from racesim.simulation.config import RaceConfig

# Payouts are defined for exactly this many racers: 1st collects, 3rd and 4th pay.
PAYOUT_FIELD_SIZE = 4
WIN_MULTIPLIER = 2
BONUS_MULTIPLIER = 5


@dataclass(frozen=True, slots=True)
class RaceStats:
    """Final tallies for one variant, keyed in declared racer order."""

    variant: VariantName
    runs: int
    wins: dict[RacerName, int]
    expected_payout: dict[RacerName, float]

    @property
    def win_rate(self) -> dict[RacerName, float]:
        return {name: count / self.runs for name, count in self.wins.items()}


@dataclass(slots=True)
class PayoutAggregator:
    """Collects race results and turns them into wins and expected payouts.

    Each result is a ranking from first to last place. The winner is paid
    twice the bet, 3rd and 4th place lose the bet, and every racer ranked
    ahead of the bonus rival collects five times the bonus. The rival is the
    4th-place finisher, or the last declared racer with `bonus_rival`
    set to "last_declared".
    """

    variant: VariantName
    racers: tuple[RacerName, ...]
    config: RaceConfig
    races_recorded: int = 0
    wins: dict[RacerName, int] = field(init=False)
    payouts: dict[RacerName, float] = field(init=False)

    def __post_init__(self) -> None:
        if len(self.racers) != PAYOUT_FIELD_SIZE:
            msg = (
                f"{self.variant} has {len(self.racers)} racers; "
                f"payouts are only defined for {PAYOUT_FIELD_SIZE}"
            )
            raise ValueError(msg)
        self.wins = dict.fromkeys(self.racers, 0)
        self.payouts = dict.fromkeys(self.racers, 0.0)

    def record(self, standings: list[RacerName]) -> None:
        bet = self.config.bet
        winner = standings[0]

        self.wins[winner] += 1
        self.payouts[winner] += WIN_MULTIPLIER * bet
        self.payouts[standings[2]] -= bet
        self.payouts[standings[3]] -= bet

        rival = (
            standings[3]
            if self.config.bonus_rival == "fourth_place"
            else self.racers[-1]
        )
        for racer in standings[: standings.index(rival)]:
            self.payouts[racer] += BONUS_MULTIPLIER * self.config.bonus

        self.races_recorded += 1

    def finalize(self) -> RaceStats:
        """Normalise payouts to an expected value per race."""
        if self.races_recorded == 0:
            msg = f"No races recorded for {self.variant}"
            raise ValueError(msg)

        return RaceStats(
            variant=self.variant,
            runs=self.races_recorded,
            wins=dict(self.wins),
            expected_payout={
                name: total / self.races_recorded
                for name, total in self.payouts.items()
            },
        )
