"""Trade records — the core data model.

A ``TradeRecord`` is one manually logged trade exactly as the journal
stores it: prices, same-day entry/exit times, quantity and free-text
labels.  It is validated once, at construction, and is immutable from
then on.

A ``DerivedTrade`` is a ``TradeRecord`` augmented with the computed
analytics (risk, reward, P&L, R-multiple, duration).  Derived trades are
ephemeral: they are rebuilt from the records on every analytics pass
and never persisted.
"""

from __future__ import annotations

import math
import re
from datetime import date as date_type
from typing import Any

from pydantic import BaseModel, field_validator

from ..core.enums import Direction, TradeResult

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")


class TradeRecord(BaseModel):
    """One logged trade.

    Parameters
    ----------
    trade_id : str
        Caller-assigned identifier.  Uniqueness is not enforced here.
    date : str
        Naive local calendar date, ``YYYY-MM-DD``.
    entry_time, exit_time : str
        Zero-padded ``HH:mm`` on ``date``.
    direction : Direction
        ``"Long"`` or ``"Short"``.  Anything else fails validation.
    """

    trade_id: str
    date: str
    instrument: str
    market: str
    entry_time: str
    exit_time: str
    strategy: str
    direction: Direction
    size_qty: float
    entry_price: float
    exit_price: float
    stop_loss: float
    target_price: float
    exit_reason: str
    platform: str

    # Pass-through metadata
    lots: float | None = None
    lot_size: float | None = None
    chart_url: str | None = None
    remarks: str | None = None
    emotion_tag: str | None = None
    emotional_state: str | None = None
    mindset_notes: str | None = None

    model_config = {"frozen": True}

    @field_validator("date")
    @classmethod
    def date_must_be_iso(cls, v: str) -> str:
        if not _DATE_RE.match(v):
            raise ValueError(f"Date must be YYYY-MM-DD, got {v!r}")
        date_type.fromisoformat(v)  # Rejects 2024-02-30 etc.
        return v

    @field_validator("entry_time", "exit_time")
    @classmethod
    def time_must_be_hhmm(cls, v: str) -> str:
        m = _TIME_RE.match(v)
        if m is None or int(m.group(1)) > 23 or int(m.group(2)) > 59:
            raise ValueError(f"Time must be zero-padded HH:mm, got {v!r}")
        return v

    @field_validator(
        "size_qty",
        "entry_price",
        "exit_price",
        "stop_loss",
        "target_price",
        "lots",
        "lot_size",
    )
    @classmethod
    def must_be_finite(cls, v: float | None) -> float | None:
        if v is not None and not math.isfinite(v):
            raise ValueError(f"Numeric fields must be finite, got {v}")
        return v


class DerivedTrade(TradeRecord):
    """A trade record plus its computed analytics.

    ``risk_reward`` and ``r_multiple`` are ``None`` when the stop equals
    the entry price: the ratio is undefined, not zero.
    """

    day: str
    risk: float
    reward: float
    risk_reward: float | None
    pl: float
    win_loss: TradeResult
    trade_duration: int  # minutes
    total_investment: float
    r_multiple: float | None

    @property
    def rr(self) -> float | None:
        """Planned reward-to-risk ratio (alias of ``risk_reward``)."""
        return self.risk_reward

    @property
    def gross_pl(self) -> float:
        return self.pl

    @property
    def net_pl(self) -> float:
        # No fees are modelled
        return self.pl

    def to_dict(self) -> dict[str, Any]:
        """Export to a flat JSON-safe dictionary."""
        data = self.model_dump(mode="json")
        data["rr"] = self.rr
        return data
