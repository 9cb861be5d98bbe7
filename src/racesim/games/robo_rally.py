from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, get_args

from racesim.core.rules import STEADY_PACE, STEADY_RACER
from racesim.core.types import RoboRallyRacer

if TYPE_CHECKING:
    from racesim.core.types import RacerName, VariantName
    from racesim.engine.race import RaceEngine

HAMMERBOT_MOVES: dict[int, int] = {1: 1, 4: 13}
LASER_KNOCKBACK = 2
SQUASH_ADVANCE = 3
SQUASH_KNOCKBACK = 8


@dataclass
class RoboRally:
    """Twonky weaves between lanes; anyone caught in its lane gets shoved.

    `twonky_lasers` toggles the laser volley Twonky fires down its new lane
    during its own move. The end-of-turn bump applies either way.
    """

    name: VariantName = "RoboRally"
    racers: tuple[RacerName, ...] = get_args(RoboRallyRacer)
    bonus_scale: int = 4
    twonky_lasers: bool = True

    def handle(self, engine: RaceEngine, racer: RacerName) -> None:
        match racer:
            case "Hammerbot":
                engine.move(racer, HAMMERBOT_MOVES.get(engine.roll(4), 0))
            case "Twonky":
                value = engine.roll(6)
                engine.move(racer, value)
                engine.move_lane(racer, -1 if value % 2 == 0 else 1)
                if self.twonky_lasers:
                    self._fire_lasers(engine, racer)
            case "Squashbot":
                value = engine.roll(8)
                if value < 8:
                    engine.move(racer, value)
                else:
                    engine.move(racer, SQUASH_ADVANCE)
                    engine.move(STEADY_RACER, -SQUASH_KNOCKBACK)
            case "Dan":
                engine.move(racer, STEADY_PACE)
            case _:
                pass

    def _fire_lasers(self, engine: RaceEngine, shooter: RacerName) -> None:
        for target in self.racers:
            if target == shooter or engine.lane(target) != engine.lane(shooter):
                continue
            engine.log_info(f"Pushing {target} back with lasers")
            if engine.move(target, -LASER_KNOCKBACK) == engine.position(shooter):
                engine.move(target, -1)

    def post_turn(self, engine: RaceEngine) -> None:
        """Whoever ends the turn on Twonky's exact space and lane is bumped back one."""
        for racer in self.racers:
            if (
                racer != "Twonky"
                and engine.lane(racer) == engine.lane("Twonky")
                and engine.position(racer) == engine.position("Twonky")
            ):
                engine.move(racer, -1)
