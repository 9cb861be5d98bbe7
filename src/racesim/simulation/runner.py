"""Core simulation execution logic."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from tqdm import tqdm

from racesim.engine.race import DEFAULT_MAX_TURNS, RaceEngine
from racesim.games import build_game
from racesim.simulation.aggregator import PayoutAggregator

if TYPE_CHECKING:
    from racesim.core.rules import RuleSet
    from racesim.core.types import VariantName
    from racesim.simulation.aggregator import RaceStats
    from racesim.simulation.config import RaceConfig, SimulationConfig

logger = logging.getLogger(__name__)


def simulate_variant(
    rules: RuleSet,
    config: RaceConfig,
    rng: random.Random,
    *,
    max_turns: int = DEFAULT_MAX_TURNS,
    verbose: bool = False,
    progress: bool = False,
) -> RaceStats:
    """
    Run `config.runs` independent races of one variant and aggregate them.

    `config` is used as given; scaling the bonus for the variant is the
    caller's job (see `RaceConfig.scaled`).
    """
    engine = RaceEngine(
        rules=rules,
        rng=rng,
        winning_line=config.winning_line,
        max_turns=max_turns,
        verbose=verbose,
    )
    aggregator = PayoutAggregator(rules.name, rules.racers, config)

    for _ in tqdm(
        range(config.runs),
        desc=rules.name,
        unit="race",
        disable=not progress,
        dynamic_ncols=True,
    ):
        aggregator.record(engine.run_race())

    stats = aggregator.finalize()
    logger.debug(f"{rules.name}: {stats.runs} races, wins {stats.wins}")
    return stats


def simulate_all(
    sim_config: SimulationConfig,
    rng: random.Random | None = None,
    *,
    verbose: bool = False,
    progress: bool = False,
) -> list[RaceStats]:
    """
    Simulate every configured variant in order with one shared generator.
    """
    if rng is None:
        rng = random.Random(sim_config.seed)

    base = sim_config.race_config()
    results: list[RaceStats] = []
    for name in _unique(sim_config.variants):
        rules = build_game(
            name,
            twonky_lasers=sim_config.twonky_lasers,
            red_gearbox=sim_config.red_gearbox,
        )
        results.append(
            simulate_variant(
                rules,
                base.scaled(rules.bonus_scale),
                rng,
                max_turns=sim_config.max_turns_per_race,
                verbose=verbose,
                progress=progress,
            ),
        )
    return results


def _unique(variants: list[VariantName]) -> list[VariantName]:
    return list(dict.fromkeys(variants))
