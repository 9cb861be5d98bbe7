from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from racesim import LOGGER_NAME
from racesim.core.errors import RaceStalledError
from racesim.core.rules import EndOfTurnRule, RaceScopedState
from racesim.core.state import BoardState, LogContext
from racesim.engine.logging import ContextFilter

if TYPE_CHECKING:
    import random

    from racesim.core.rules import RuleSet
    from racesim.core.types import RacerName

DEFAULT_MAX_TURNS = 10_000

ENGINE_ID_COUNTER = itertools.count()


@dataclass
class RaceEngine:
    """Drives races of one variant: setup, full turns, finish check, standings.

    One engine is reused for every race of a simulation run; `start_race`
    wipes the board and the variant's per-race state.
    """

    rules: RuleSet
    rng: random.Random
    winning_line: int
    max_turns: int = DEFAULT_MAX_TURNS
    verbose: bool = False

    board: BoardState = field(init=False)
    race_state: Any = field(init=False, default=None)
    turns_taken: int = field(init=False, default=0)
    log_context: LogContext = field(init=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.log_context = LogContext(engine_id=next(ENGINE_ID_COUNTER))
        self._logger = logging.getLogger(LOGGER_NAME).getChild(
            f"engine.{self.log_context.engine_id}",
        )
        if self.verbose:
            self._logger.addFilter(ContextFilter(self))
        self.reset_board()

    @property
    def racers(self) -> tuple[RacerName, ...]:
        return self.rules.racers

    @property
    def race_over(self) -> bool:
        return self.board.leader_position() >= self.winning_line

    # --- Main Loop ---
    def reset_board(self) -> None:
        """Fresh board, per-race state and turn count, without counting a new race."""
        self.board = BoardState.fresh(self.rules.racers)
        self.race_state = (
            self.rules.new_race_state()
            if isinstance(self.rules, RaceScopedState)
            else None
        )
        self.turns_taken = 0

    def start_race(self) -> None:
        self.reset_board()
        self.log_context.new_race()
        self.log_debug(f"=== START RACE: {self.rules.name} ===")

    def run_turn(self) -> None:
        """Every racer acts once in declared order, then the end-of-turn rule."""
        self.log_context.new_round()
        for racer in self.rules.racers:
            self.log_context.start_turn_log(self.board.get_racer(racer).repr)
            self.rules.handle(self, racer)

        self.log_context.start_turn_log("_")
        if isinstance(self.rules, EndOfTurnRule):
            self.rules.post_turn(self)

        self.turns_taken += 1
        if self.verbose:
            self.log_debug(f"End of turn {self.turns_taken}: {self.board.snapshot()}")

    def run_race(self) -> list[RacerName]:
        """Run one race from a fresh board and return racers from first to last."""
        self.start_race()
        while not self.race_over:
            if self.turns_taken >= self.max_turns:
                msg = (
                    f"{self.rules.name} race exceeded {self.max_turns} turns "
                    f"without a finisher: {self.board.snapshot()}"
                )
                self._logger.error(msg)
                raise RaceStalledError(msg, "MAX_TURNS_REACHED")
            self.run_turn()

        standings = self.standings()
        self.log_debug(
            f"=== FINISHED {self.rules.name} after {self.turns_taken} turns: "
            f"{', '.join(standings)} ===",
        )
        return standings

    def standings(self) -> list[RacerName]:
        return self.board.standings()  # pyright: ignore[reportReturnType]

    # --- Dice & Board ---
    def roll(self, faces: int) -> int:
        """Uniform integer in [1, faces]."""
        value = self.rng.randint(1, faces)
        if self.verbose:
            self.log_debug(f"Dice Roll: d{faces} -> {value}")
        return value

    def move(self, racer: RacerName, delta: int) -> int:
        position = self.board.move(racer, delta)
        if self.verbose and delta:
            self.log_debug(
                f"Move {self.board.get_racer(racer).repr} {delta:+d} -> {position}",
            )
        return position

    def move_lane(self, racer: RacerName, delta: int) -> int:
        lane = self.board.move_lane(racer, delta)
        if self.verbose:
            self.log_debug(
                f"Lane {self.board.get_racer(racer).repr} {delta:+d} -> {lane}",
            )
        return lane

    def position(self, racer: RacerName) -> int:
        return self.board.position(racer)

    def lane(self, racer: RacerName) -> int:
        return self.board.lane(racer)

    def trailing_racer(self) -> RacerName:
        return self.board.trailing_racer()  # pyright: ignore[reportReturnType]

    # -- Logging --
    def _log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        """Core logging helper; respects engine verbosity."""
        if not self.verbose:
            return
        self._logger.log(level, msg, *args, **kwargs)

    def log_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def log_info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)
