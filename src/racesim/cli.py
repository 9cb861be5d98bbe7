"""Command-line interface for the race odds simulator."""

from __future__ import annotations

import difflib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import TYPE_CHECKING, Annotated, get_args

import cappa
import msgspec
from tqdm import tqdm

from racesim.core.types import RedGearbox, VariantName
from racesim.engine.logging import configure_logging
from racesim.simulation.config import SimulationConfig
from racesim.simulation.metrics import best_bets, stats_frame
from racesim.simulation.runner import simulate_all

if TYPE_CHECKING:
    from collections.abc import Mapping

    from racesim.simulation.aggregator import RaceStats

# Positional numbers fill these fields in order; missing ones keep their default.
POSITIONAL_FIELDS = ("runs", "winning_line", "bonus", "bet")
USAGE_ERROR = 2


def _normalize(s: str) -> str:
    """Normalize string: remove whitespace, dots, underscores and convert to lowercase."""
    return s.strip().replace(" ", "").replace(".", "").replace("_", "").lower()


def parse_positional_numbers(values: list[str]) -> list[int]:
    """
    Parse up to four integers: runs, winning line, bonus, bet.
    Anything else aborts before a single race is run.
    """
    if len(values) > len(POSITIONAL_FIELDS):
        msg = (
            f"Expected at most {len(POSITIONAL_FIELDS)} numbers "
            f"({', '.join(POSITIONAL_FIELDS)}), got {len(values)}: {' '.join(values)}"
        )
        raise cappa.Exit(msg, code=USAGE_ERROR)

    numbers: list[int] = []
    for field_name, raw in zip(POSITIONAL_FIELDS, values, strict=False):
        try:
            numbers.append(int(raw))
        except ValueError:
            msg = f"Invalid {field_name} '{raw}': expected an integer."
            raise cappa.Exit(msg, code=USAGE_ERROR) from None
    return numbers


def validate_variant_names(variant_args: list[str]) -> list[VariantName]:
    """
    Resolve variant names, case and punctuation insensitive.
    Input "formula_d" matches "FormulaD".
    """
    lookup_map: dict[str, VariantName] = {
        _normalize(k): k for k in get_args(VariantName)
    }
    variants: list[VariantName] = []
    for variant_arg in variant_args:
        normalized_input = _normalize(variant_arg)
        if normalized_input in lookup_map:
            variants.append(lookup_map[normalized_input])
            continue

        matches = difflib.get_close_matches(
            variant_arg,
            get_args(VariantName),
            n=3,
            cutoff=0.5,
        )
        msg = f"Variant '{variant_arg}' not found."
        if matches:
            msg += f" Did you mean: {', '.join(matches)}?"
        raise cappa.Exit(msg, code=USAGE_ERROR)
    return variants


def format_mapping(mapping: Mapping[str, int | float], precision: int = 4) -> str:
    parts = [
        f"{key}={value:.{precision}f}" if isinstance(value, float) else f"{key}={value}"
        for key, value in mapping.items()
    ]
    return "{" + ", ".join(parts) + "}"


def format_stats(stats: RaceStats) -> str:
    return "\n".join(
        [
            f"{stats.variant}:",
            format_mapping(stats.wins),
            format_mapping(stats.expected_payout),
        ],
    )


@cappa.command(
    name="racesim",
    help="Estimate win odds and expected bet payouts for four board-game races.",
)
@dataclass
class RacesCommand:
    numbers: Annotated[
        list[int] | None,
        cappa.Arg(
            parse=parse_positional_numbers,
            num_args=-1,
            value_name="RUNS WINNING_LINE BONUS BET",
            help="Up to four integers (defaults: 10000 50 5 1).",
        ),
    ] = None
    seed: Annotated[
        int | None,
        cappa.Arg(short="-s", long="--seed", help="RNG seed."),
    ] = None
    config_file: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML config file."),
    ] = None
    variants: Annotated[
        list[str] | None,
        cappa.Arg(
            short="-g",
            long="--variant",
            action=cappa.ArgAction.append,
            help="Only simulate this variant (repeat for more).",
        ),
    ] = None
    no_lasers: Annotated[
        bool,
        cappa.Arg(long="--no-lasers", help="Twonky does not fire lasers in RoboRally."),
    ] = False
    gearbox: Annotated[
        RedGearbox | None,
        cappa.Arg(
            long="--gearbox",
            help="How Red shifts gear in FormulaD: snap (default) or stepped.",
        ),
    ] = None
    table: Annotated[
        bool,
        cappa.Arg(long="--table", help="Also print a summary table per variant."),
    ] = False
    progress: Annotated[
        bool,
        cappa.Arg(long="--progress", help="Show a progress bar per variant."),
    ] = False
    verbose: Annotated[
        bool,
        cappa.Arg(long="--verbose", help="Log every dice roll and move."),
    ] = False

    def load_config(self) -> SimulationConfig:
        """File defaults first, then CLI values on top."""
        config = SimulationConfig()
        if self.config_file:
            if not self.config_file.exists():
                msg = f"Config file not found: {self.config_file}"
                raise cappa.Exit(msg, code=1)
            try:
                config = SimulationConfig.from_toml(self.config_file)
            except msgspec.DecodeError as e:
                msg = f"Invalid TOML config: {e}"
                raise cappa.Exit(msg, code=1) from None

        overrides: dict[str, object] = dict(
            zip(POSITIONAL_FIELDS, self.numbers or [], strict=False),
        )
        if self.seed is not None:
            overrides["seed"] = self.seed
        if self.variants:
            overrides["variants"] = validate_variant_names(self.variants)
        if self.no_lasers:
            overrides["twonky_lasers"] = False
        if self.gearbox is not None:
            overrides["red_gearbox"] = self.gearbox
        config = msgspec.structs.replace(config, **overrides)

        if config.runs < 1:
            msg = f"Run count must be positive, got {config.runs}."
            raise cappa.Exit(msg, code=USAGE_ERROR)
        if config.winning_line < 1:
            msg = f"Winning line must be positive, got {config.winning_line}."
            raise cappa.Exit(msg, code=USAGE_ERROR)
        return config

    def __call__(self) -> int:
        config = self.load_config()
        configure_logging(logging.DEBUG if self.verbose else logging.INFO)

        results = simulate_all(config, verbose=self.verbose, progress=self.progress)

        for i, stats in enumerate(results):
            if i:
                tqdm.write("")
            tqdm.write(format_stats(stats))
            if self.table:
                tqdm.write(str(stats_frame([stats]).drop("variant", "order")))

        if self.table and len(results) > 1:
            tqdm.write("")
            tqdm.write("Best bets:")
            tqdm.write(str(best_bets(stats_frame(results))))
        return 0


def main():
    """Entry point for CLI."""
    cappa.invoke(RacesCommand)


if __name__ == "__main__":
    sys.exit(main())
