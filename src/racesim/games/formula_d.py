from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, get_args

from racesim.core.rules import STEADY_PACE
from racesim.core.types import FormulaDRacer

if TYPE_CHECKING:
    from racesim.core.types import RacerName, RedGearbox, VariantName
    from racesim.engine.race import RaceEngine

YELLOW_SPEEDS: dict[int, int] = {1: -1, 2: 3, 3: 6, 4: 10}
# d8 face -> gear change for Red
RED_SHIFTS: dict[int, int] = {1: -1, 7: 1, 8: 2}
MIN_GEAR = 1
MAX_GEAR = 10
BLACK_FLAT_OUT = 8


@dataclass(slots=True)
class FormulaDState:
    """Values carried from turn to turn within a single race."""

    yellow_speed: int = 0
    red_gear: int = 4


@dataclass
class FormulaD:
    """Yellow, Red and Black race Dan around a Formula D track.

    `red_gearbox` picks how a shift roll changes Red's gear:

    - "snap": a downshift drops to gear 1 (or one below the current gear
      once already at 1 or lower), an upshift jumps to gear 10 (or one or
      two above it once already at 10 or higher).
    - "stepped": the gear moves by the shift and stays within 1..10.
    """

    name: VariantName = "FormulaD"
    racers: tuple[RacerName, ...] = get_args(FormulaDRacer)
    bonus_scale: int = 3
    red_gearbox: RedGearbox = "snap"

    def new_race_state(self) -> FormulaDState:
        return FormulaDState()

    def handle(self, engine: RaceEngine, racer: RacerName) -> None:
        state: FormulaDState = engine.race_state
        match racer:
            case "Yellow":
                state.yellow_speed = YELLOW_SPEEDS[engine.roll(4)]
                engine.move(racer, state.yellow_speed)
            case "Red":
                shift = RED_SHIFTS.get(engine.roll(8), 0)
                if shift:
                    state.red_gear = self.shift_gear(state.red_gear, shift)
                engine.move(racer, state.red_gear)
            case "Black":
                match engine.roll(6):
                    case 4:
                        engine.move(racer, state.yellow_speed * 2)
                    case 5:
                        engine.move(racer, state.red_gear * 2)
                    case 6:
                        engine.move(racer, BLACK_FLAT_OUT)
                    case _:
                        pass
            case "Dan":
                engine.move(racer, STEADY_PACE)
            case _:
                pass

    def shift_gear(self, gear: int, shift: int) -> int:
        target = gear + shift
        if self.red_gearbox == "stepped":
            return min(max(MIN_GEAR, target), MAX_GEAR)
        if shift < 0:
            return min(MIN_GEAR, target)
        return max(MAX_GEAR, target)
