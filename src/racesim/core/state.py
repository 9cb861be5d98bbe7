from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from racesim import LOGGER_NAME
from racesim.core.errors import RaceInvariantError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(LOGGER_NAME)


@dataclass(slots=True)
class RacerState:
    idx: int
    name: str
    position: int = 0
    lane: int = 0

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.name}"


@dataclass(slots=True)
class BoardState:
    """Position and lane counters for every racer of one race.

    Racers keep their declared order; that order is the turn order, the initial
    lane assignment and the fallback tie-break.
    """

    racers: list[RacerState]
    _by_name: dict[str, RacerState] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_name = {r.name: r for r in self.racers}

    @classmethod
    def fresh(cls, names: Iterable[str]) -> BoardState:
        """Everyone at the start, each racer in the lane matching its ordinal."""
        return cls([RacerState(idx, name, lane=idx) for idx, name in enumerate(names)])

    @property
    def lane_count(self) -> int:
        return len(self.racers)

    def get_racer(self, name: str) -> RacerState:
        try:
            return self._by_name[name]
        except KeyError:
            msg = f"Racer '{name}' is not on this board ({', '.join(self._by_name)})"
            logger.error(msg)
            raise RaceInvariantError(msg, "UNKNOWN_RACER") from None

    def position(self, name: str) -> int:
        return self.get_racer(name).position

    def lane(self, name: str) -> int:
        return self.get_racer(name).lane

    def move(self, name: str, delta: int) -> int:
        """Shift a racer by `delta` spaces. Positions floor at 0 and have no ceiling."""
        racer = self.get_racer(name)
        racer.position = max(0, racer.position + delta)
        return racer.position

    def move_lane(self, name: str, delta: int) -> int:
        racer = self.get_racer(name)
        racer.lane = min(max(0, racer.lane + delta), self.lane_count - 1)
        return racer.lane

    def trailing_racer(self) -> str:
        """The racer furthest behind. Ties go to the earliest declared racer."""
        trailing: RacerState | None = None
        for racer in self.racers:
            if trailing is None or racer.position < trailing.position:
                trailing = racer

        if trailing is None:
            msg = "No trailing racer on an empty board"
            logger.error(msg)
            raise RaceInvariantError(msg, "EMPTY_BOARD")
        return trailing.name

    def leader_position(self) -> int:
        return max((r.position for r in self.racers), default=0)

    def standings(self) -> list[str]:
        """Racers from first to last: furthest ahead, then highest lane.

        Python's sort is stable, so exact ties keep declared order.
        """
        ranked = sorted(self.racers, key=lambda r: (r.position, r.lane), reverse=True)
        return [r.name for r in ranked]

    def snapshot(self) -> dict[str, tuple[int, int]]:
        return {r.name: (r.position, r.lane) for r in self.racers}


@dataclass(slots=True)
class LogContext:
    """Per-engine logging state."""

    engine_id: int = 0
    race_number: int = 0
    total_turn: int = 0
    turn_log_count: int = 0
    current_racer_repr: str = "_"

    def new_race(self) -> None:
        self.race_number += 1
        self.total_turn = 0
        self.current_racer_repr = "_"

    def new_round(self) -> None:
        self.total_turn += 1

    def start_turn_log(self, racer_repr: str) -> None:
        self.turn_log_count = 0
        self.current_racer_repr = racer_repr

    def inc_log_count(self) -> None:
        self.turn_log_count += 1
