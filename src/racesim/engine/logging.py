from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, get_args, override

from rich.highlighter import Highlighter
from rich.logging import RichHandler

from racesim import LOGGER_NAME
from racesim.core.palettes import get_racer_color
from racesim.core.types import (
    FormulaDRacer,
    HareAndTortoiseRacer,
    MagicalAthletesRacer,
    RoboRallyRacer,
    VariantName,
)

if TYPE_CHECKING:
    from rich.text import Text

    from racesim.engine.race import RaceEngine

RACER_NAMES = {
    name
    for racers in (
        HareAndTortoiseRacer,
        MagicalAthletesRacer,
        FormulaDRacer,
        RoboRallyRacer,
    )
    for name in get_args(racers)
}
VARIANT_NAMES = set(get_args(VariantName))

VARIANT_PATTERN = re.compile(rf"\b({'|'.join(map(re.escape, VARIANT_NAMES))})\b")

# Captures the racer index prefix and the name, e.g. "2:Porcupine"
RACER_COMPOSITE_PATTERN = re.compile(
    rf"(?P<prefix>\d+:)(?P<name>{'|'.join(map(re.escape, sorted(RACER_NAMES)))})\b",
)

COLOR = {
    "move": "bold #23d18b",  # light green
    "push": "bold #87d700",  # yellow-ish green
    "lane": "bold #29b8db",  # cyan
    "warning": "bold bright_red",
    "prefix": "grey50",
    "variant": "bold #d670d6",  # magenta
    "dice_roll": "bold #f5f543",  # yellow
}


class ContextFilter(logging.Filter):
    """Inject per-engine runtime context into every log record."""

    def __init__(self, engine: RaceEngine, name: str = "") -> None:
        super().__init__(name)
        self.engine: RaceEngine = engine

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        logctx = self.engine.log_context
        record.engine_id = logctx.engine_id
        record.race_number = logctx.race_number
        record.total_turn = logctx.total_turn
        record.turn_log_count = logctx.turn_log_count
        record.racer_repr = logctx.current_racer_repr
        logctx.inc_log_count()
        return True


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        race_number = getattr(record, "race_number", 0)
        total_turn = getattr(record, "total_turn", 0)
        turn_log_count = getattr(record, "turn_log_count", 0)
        racer_repr = getattr(record, "racer_repr", "_")

        prefix = f"R{race_number} {total_turn}.{racer_repr}.{turn_log_count}"
        message = record.getMessage()

        # The highlighter paints stronger colours on top of the grey prefix.
        return f"[{COLOR['prefix']}]{prefix:<22}[/{COLOR['prefix']}]  {message}"


class RaceLogHighlighter(Highlighter):
    @override
    def highlight(self, text: Text) -> None:
        text.highlight_regex(r"\bMove\b", COLOR["move"])
        text.highlight_regex(r"\bPushing\b", COLOR["push"])
        text.highlight_regex(r"\bLane\b", COLOR["lane"])
        text.highlight_regex(r"\bDice Roll\b", COLOR["dice_roll"])
        text.highlight_regex(VARIANT_PATTERN, COLOR["variant"])
        text.highlight_regex(r"!!!", COLOR["warning"])

        for match in RACER_COMPOSITE_PATTERN.finditer(text.plain):
            prefix_span = match.span("prefix")
            name_span = match.span("name")
            text.stylize(
                get_racer_color(match.group("name")),
                start=prefix_span[0],
                end=prefix_span[1],
            )
            text.stylize("bold white", start=name_span[0], end=name_span[1])


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    handler = RichHandler(
        markup=True,
        show_path=False,
        show_time=False,
        highlighter=RaceLogHighlighter(),
    )
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
