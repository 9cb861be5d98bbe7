from __future__ import annotations

from typing import TYPE_CHECKING

from racesim.games.formula_d import FormulaD
from racesim.games.hare_and_tortoise import HareAndTortoise
from racesim.games.magical_athletes import MagicalAthletes
from racesim.games.robo_rally import RoboRally

if TYPE_CHECKING:
    from racesim.core.rules import RuleSet
    from racesim.core.types import RedGearbox, VariantName

# Declaration order is the order variants are simulated and printed in.
GAME_DEFINITIONS: dict[VariantName, type[RuleSet]] = {
    "HareAndTortoise": HareAndTortoise,
    "MagicalAthletes": MagicalAthletes,
    "FormulaD": FormulaD,
    "RoboRally": RoboRally,
}


def build_game(
    name: VariantName,
    *,
    twonky_lasers: bool = True,
    red_gearbox: RedGearbox = "snap",
) -> RuleSet:
    """Fresh rule-set for a variant.

    `twonky_lasers` only affects RoboRally, `red_gearbox` only FormulaD.
    """
    if name == "RoboRally":
        return RoboRally(twonky_lasers=twonky_lasers)
    if name == "FormulaD":
        return FormulaD(red_gearbox=red_gearbox)
    return GAME_DEFINITIONS[name]()


__all__ = [
    "GAME_DEFINITIONS",
    "FormulaD",
    "HareAndTortoise",
    "MagicalAthletes",
    "RoboRally",
    "build_game",
]
