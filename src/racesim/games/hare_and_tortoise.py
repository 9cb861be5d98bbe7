from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, get_args

from racesim.core.rules import STEADY_PACE
from racesim.core.types import HareAndTortoiseRacer

if TYPE_CHECKING:
    from racesim.core.types import RacerName, VariantName
    from racesim.engine.race import RaceEngine

HARE_SPRINT = 10
# Spines knock the other racers back when the Porcupine rolls its top face.
SPINE_KNOCKBACK: dict[HareAndTortoiseRacer, int] = {
    "Hare": -3,
    "Tortoise": -2,
    "Dan": -2,
}


@dataclass
class HareAndTortoise:
    name: VariantName = "HareAndTortoise"
    racers: tuple[RacerName, ...] = get_args(HareAndTortoiseRacer)
    bonus_scale: int = 1

    def handle(self, engine: RaceEngine, racer: RacerName) -> None:
        match racer:
            case "Hare":
                if engine.roll(2) == 1:
                    engine.move(racer, HARE_SPRINT)
            case "Tortoise":
                engine.move(racer, engine.roll(4) * 2)
            case "Porcupine":
                spines = engine.roll(8)
                engine.move(racer, spines)
                if spines == 8:
                    engine.log_info("Porcupine raises its spines!")
                    for victim, delta in SPINE_KNOCKBACK.items():
                        engine.move(victim, delta)
            case "Dan":
                engine.move(racer, STEADY_PACE)
            case _:
                pass
