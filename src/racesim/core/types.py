from __future__ import annotations

from typing import Literal

VariantName = Literal[
    "HareAndTortoise",
    "MagicalAthletes",
    "FormulaD",
    "RoboRally",
]

HareAndTortoiseRacer = Literal["Hare", "Tortoise", "Porcupine", "Dan"]
MagicalAthletesRacer = Literal["Conjurer", "Priest", "Martial", "Dan"]
FormulaDRacer = Literal["Yellow", "Red", "Black", "Dan"]
RoboRallyRacer = Literal["Hammerbot", "Twonky", "Squashbot", "Dan"]

RacerName = (
    HareAndTortoiseRacer | MagicalAthletesRacer | FormulaDRacer | RoboRallyRacer
)

# Who a racer has to beat to collect the place bonus.
BonusRival = Literal["fourth_place", "last_declared"]

# How Red's gear reacts to a shift roll in FormulaD.
RedGearbox = Literal["snap", "stepped"]

ErrorCode = Literal[
    "EMPTY_BOARD",
    "UNKNOWN_RACER",
    "MAX_TURNS_REACHED",
]
