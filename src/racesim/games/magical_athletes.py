from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, get_args

from racesim.core.rules import STEADY_PACE
from racesim.core.types import MagicalAthletesRacer

if TYPE_CHECKING:
    from racesim.core.types import RacerName, VariantName
    from racesim.engine.race import RaceEngine

PRIEST_BLESSING = 2
# Spaces the Martial artist may not count as a step.
MARTIAL_BLOCKERS: tuple[MagicalAthletesRacer, ...] = ("Conjurer", "Priest", "Dan")


@dataclass
class MagicalAthletes:
    name: VariantName = "MagicalAthletes"
    racers: tuple[RacerName, ...] = get_args(MagicalAthletesRacer)
    bonus_scale: int = 2

    def handle(self, engine: RaceEngine, racer: RacerName) -> None:
        match racer:
            case "Conjurer":
                engine.move(racer, self._conjure(engine))
            case "Priest":
                engine.move(engine.trailing_racer(), PRIEST_BLESSING)
                engine.move(racer, engine.roll(6) + 1)
            case "Martial":
                self._flurry(engine, racer)
            case "Dan":
                engine.move(racer, STEADY_PACE)
            case _:
                pass

    @staticmethod
    def _conjure(engine: RaceEngine) -> int:
        """Low rolls get one redo; a 1 is never accepted."""
        value = engine.roll(6)
        if value <= 3:
            value = engine.roll(6)
        while value == 1:
            value = engine.roll(6)
        return value

    @staticmethod
    def _flurry(engine: RaceEngine, racer: RacerName) -> None:
        steps = engine.roll(6)
        while steps > 0:
            landed = engine.move(racer, 1)
            if all(engine.position(other) != landed for other in MARTIAL_BLOCKERS):
                steps -= 1
