"""Configuration schema for race simulations using msgspec."""

from __future__ import annotations

from pathlib import Path
from typing import get_args

import msgspec

from racesim.core.types import BonusRival, RedGearbox, VariantName
from racesim.engine.race import DEFAULT_MAX_TURNS

DEFAULT_RUNS = 10_000
DEFAULT_WINNING_LINE = 50
DEFAULT_BONUS = 5
DEFAULT_BET = 1


class RaceConfig(msgspec.Struct, frozen=True):
    """
    Immutable settings for simulating one variant.
    Variants that pay a bigger place bonus get a scaled copy via `scaled`.
    """

    runs: int = DEFAULT_RUNS
    winning_line: int = DEFAULT_WINNING_LINE
    bonus: int = DEFAULT_BONUS
    bet: int = DEFAULT_BET
    bonus_rival: BonusRival = "fourth_place"

    def scaled(self, bonus_scale: int) -> RaceConfig:
        """Copy of this config with the bonus multiplied; the original is untouched."""
        return msgspec.structs.replace(self, bonus=self.bonus * bonus_scale)


class SimulationConfig(msgspec.Struct):
    """
    TOML-backed configuration for a full program run.
    Positional CLI numbers override the first four fields.
    """

    runs: int = DEFAULT_RUNS
    winning_line: int = DEFAULT_WINNING_LINE
    bonus: int = DEFAULT_BONUS
    bet: int = DEFAULT_BET
    seed: int | None = None

    variants: list[VariantName] = msgspec.field(
        default_factory=lambda: list(get_args(VariantName)),
    )
    bonus_rival: BonusRival = "fourth_place"
    twonky_lasers: bool = True
    red_gearbox: RedGearbox = "snap"
    max_turns_per_race: int = DEFAULT_MAX_TURNS

    @classmethod
    def from_toml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)

    def race_config(self) -> RaceConfig:
        """Base (unscaled) per-variant config."""
        return RaceConfig(
            runs=self.runs,
            winning_line=self.winning_line,
            bonus=self.bonus,
            bet=self.bet,
            bonus_rival=self.bonus_rival,
        )
