from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from racesim.core.types import RacerName

RACER_COLORS: dict[RacerName, str] = {
    # Hare and Tortoise
    "Hare": "#C8A27A",
    "Tortoise": "#4E8F3A",
    "Porcupine": "#8B5A2B",
    # Magical Athletes
    "Conjurer": "#9B59B6",
    "Priest": "#F4D03F",
    "Martial": "#E74C3C",
    # Formula D
    "Yellow": "#FFD700",
    "Red": "#D32F2F",
    "Black": "#9E9E9E",
    # RoboRally
    "Hammerbot": "#FF8C00",
    "Twonky": "#00BCD4",
    "Squashbot": "#8BC34A",
    # Shared benchmark racer
    "Dan": "#FFFFFF",
}

DEFAULT_COLOR = "#AAAAAA"


def get_racer_color(name: str) -> str:
    return RACER_COLORS.get(name, DEFAULT_COLOR)  # pyright: ignore[reportArgumentType]
