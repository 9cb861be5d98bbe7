"""
Tabular summaries of simulation results.
Uses Polars so results can be sorted, printed or written out in one step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    from collections.abc import Iterable

    from racesim.simulation.aggregator import RaceStats

SUMMARY_SCHEMA = {
    "variant": pl.String,
    "order": pl.Int64,
    "racer": pl.String,
    "wins": pl.Int64,
    "win_rate": pl.Float64,
    "expected_payout": pl.Float64,
}


def stats_frame(results: Iterable[RaceStats]) -> pl.DataFrame:
    """
    One row per (variant, racer), in declared racer order.

    Returns:
        DataFrame [variant, order, racer, wins, win_rate, expected_payout]
    """
    rows = [
        {
            "variant": stats.variant,
            "order": order,
            "racer": racer,
            "wins": wins,
            "win_rate": wins / stats.runs,
            "expected_payout": stats.expected_payout[racer],
        }
        for stats in results
        for order, (racer, wins) in enumerate(stats.wins.items())
    ]
    return pl.DataFrame(rows, schema=SUMMARY_SCHEMA)


def best_bets(df: pl.DataFrame) -> pl.DataFrame:
    """Highest expected payout per variant (first declared racer wins ties)."""
    return (
        df.filter(
            pl.col("expected_payout") == pl.col("expected_payout").max().over("variant"),
        )
        .group_by("variant", maintain_order=True)
        .first()
        .select(["variant", "racer", "expected_payout", "win_rate"])
    )
