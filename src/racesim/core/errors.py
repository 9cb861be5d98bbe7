from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from racesim.core.types import ErrorCode


class RaceError(RuntimeError):
    """Unrecoverable logic error inside a race. Never a user-facing failure."""

    error_code: ErrorCode

    def __init__(self, msg: str, error_code: ErrorCode) -> None:
        super().__init__(msg)
        self.error_code = error_code


class RaceInvariantError(RaceError):
    """Board state broke one of its invariants (e.g. no racers, unknown racer)."""


class RaceStalledError(RaceError):
    """A race ran past its turn limit without anyone crossing the winning line."""
