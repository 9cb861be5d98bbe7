from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racesim.core.types import RacerName, VariantName
    from racesim.engine.race import RaceEngine

# Every variant fields "Dan", the benchmark racer who always moves the same amount.
STEADY_RACER: RacerName = "Dan"
STEADY_PACE = 4


@runtime_checkable
class RuleSet(Protocol):
    """Movement rules of one race variant.

    `handle` is called once per racer per turn, in `racers` order. It may only
    touch the board and the dice through the engine, plus whatever per-race
    state the engine hands out as `engine.race_state`.
    """

    name: VariantName
    racers: tuple[RacerName, ...]
    bonus_scale: int

    def handle(self, engine: RaceEngine, racer: RacerName) -> None: ...


@runtime_checkable
class EndOfTurnRule(Protocol):
    """Rule-sets with an effect applied once after every racer has acted."""

    def post_turn(self, engine: RaceEngine) -> None: ...


@runtime_checkable
class RaceScopedState(Protocol):
    """Rule-sets that carry mutable values through a race.

    The engine calls `new_race_state` at the start of every race so nothing
    leaks from one race into the next.
    """

    def new_race_state(self) -> Any: ...
