"""Enumerations used across the journal."""

from enum import Enum


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"

    @property
    def multiplier(self) -> int:
        """+1 for Long, -1 for Short."""
        return 1 if self is Direction.LONG else -1


class TradeResult(str, Enum):
    """Win / loss / break-even classification."""

    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "BE"


class Weekday(str, Enum):
    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"


# Indexed by ``isoweekday() % 7`` (0 = Sunday).
DAY_NAMES = [d.value for d in Weekday]

# Display order for weekday breakdowns.
WEEK_ORDER = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
