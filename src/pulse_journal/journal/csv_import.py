"""Trade import — CSV journal to validated trade records.

Header matching is forgiving (case-insensitive, punctuation and spaces
ignored, so ``"size qty"`` matches ``"Size (Qty.)"``), but the whole
import is refused up front when a required header is missing.  After
that, bad rows are skipped and counted; one bad row never aborts the
batch.

Usage::

    importer = TradeImporter()
    result = importer.parse(path.read_text())
    print(f"{len(result.trades)} imported, {result.skipped} skipped")
"""

from __future__ import annotations

import csv
import io
import logging
import math
import re
import time
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import ValidationError

from ..core.config import CsvConfig
from ..core.enums import Direction
from ..core.errors import CsvImportError, MissingHeadersError
from .record import TradeRecord

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = [
    "Trade ID",
    "Date",
    "Instrument",
    "Market",
    "Entry Time",
    "Exit Time",
    "Strategy",
    "Direction",
    "Size (Qty.)",
    "Entry Price",
    "Exit Price",
    "Stop Loss",
    "Target Price",
    "Exit Reason",
    "Platform",
]

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Non-ISO date layouts accepted on import (US month-first for slashes).
_DATE_FORMATS = (
    "%Y-%m-%d",  # unpadded ISO, e.g. 2024-1-2
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d-%b-%Y",
    "%d %b %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)


def normalize_header(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())


def normalize_date(value: str) -> str:
    """ISO ``YYYY-MM-DD`` for a date cell, or ``""`` if unparseable."""
    trimmed = value.strip()
    if not trimmed:
        return ""
    if _ISO_DATE_RE.match(trimmed):
        return trimmed
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(trimmed, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    return ""


def normalize_time(value: str) -> str:
    """Zero-padded ``HH:mm`` (``"9:5"`` -> ``"09:05"``); seconds are dropped."""
    trimmed = value.strip()
    if not trimmed:
        return ""
    parts = trimmed.split(":")
    if len(parts) < 2:
        return ""
    return f"{parts[0].strip().zfill(2)}:{parts[1].strip().zfill(2)}"


def parse_number(value: str) -> float | None:
    """Parse a numeric cell, ignoring thousands separators."""
    cleaned = value.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        num = float(cleaned)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def parse_direction(value: str) -> Direction | None:
    raw = value.strip().lower()
    if "short" in raw:
        return Direction.SHORT
    if "long" in raw:
        return Direction.LONG
    return None


@dataclass
class ImportResult:
    """Outcome of one CSV import."""

    trades: list[TradeRecord] = field(default_factory=list)
    skipped: int = 0

    @property
    def imported(self) -> int:
        return len(self.trades)


class TradeImporter:
    """Parse CSV text into ``TradeRecord`` objects.

    Parameters
    ----------
    config : CsvConfig | None
        Fallback values for blank optional cells.
    """

    def __init__(self, config: CsvConfig | None = None) -> None:
        self._cfg = config or CsvConfig()

    def parse(self, text: str, *, id_stamp: int | None = None) -> ImportResult:
        """Import every valid row of ``text``.

        Parameters
        ----------
        text : str
            Full CSV document, header row first.
        id_stamp : int | None
            Stamp used to build ids for rows with a blank Trade ID
            (``CSV-{stamp}-{row}``).  Defaults to the current epoch
            milliseconds.

        Raises
        ------
        CsvImportError
            The document contains no rows at all.
        MissingHeadersError
            A required header is absent.
        """
        rows = [
            row for row in csv.reader(io.StringIO(text))
            if any(cell.strip() for cell in row)
        ]
        if not rows:
            raise CsvImportError("No rows found in CSV.")

        header_map: dict[str, int] = {}
        for index, cell in enumerate(rows[0]):
            header_map[normalize_header(cell)] = index

        missing = [
            h for h in REQUIRED_HEADERS if normalize_header(h) not in header_map
        ]
        if missing:
            raise MissingHeadersError(missing)

        stamp = id_stamp if id_stamp is not None else int(time.time() * 1000)
        result = ImportResult()

        for row_no, row in enumerate(rows[1:], start=1):
            def cell(header: str) -> str:
                idx = header_map[normalize_header(header)]
                return row[idx] if idx < len(row) else ""

            trade = self._build_trade(cell, default_id=f"CSV-{stamp}-{row_no}")
            if trade is None:
                result.skipped += 1
                logger.debug("Skipped CSV row %d: missing or invalid values", row_no)
                continue
            result.trades.append(trade)

        logger.info(
            "CSV import: %d trades imported, %d rows skipped",
            result.imported,
            result.skipped,
        )
        return result

    def _build_trade(self, cell, *, default_id: str) -> TradeRecord | None:
        cfg = self._cfg
        date = normalize_date(cell("Date"))
        instrument = cell("Instrument").strip()
        entry_time = normalize_time(cell("Entry Time"))
        exit_time = normalize_time(cell("Exit Time"))
        direction = parse_direction(cell("Direction"))
        numbers = {
            "size_qty": parse_number(cell("Size (Qty.)")),
            "entry_price": parse_number(cell("Entry Price")),
            "exit_price": parse_number(cell("Exit Price")),
            "stop_loss": parse_number(cell("Stop Loss")),
            "target_price": parse_number(cell("Target Price")),
        }

        if (
            not date
            or not instrument
            or not entry_time
            or not exit_time
            or direction is None
            or any(v is None for v in numbers.values())
        ):
            return None

        try:
            return TradeRecord(
                trade_id=cell("Trade ID").strip() or default_id,
                date=date,
                instrument=instrument,
                market=cell("Market").strip() or cfg.default_market,
                entry_time=entry_time,
                exit_time=exit_time,
                strategy=cell("Strategy").strip() or cfg.default_strategy,
                direction=direction,
                exit_reason=cell("Exit Reason").strip() or cfg.default_exit_reason,
                platform=cell("Platform").strip() or cfg.default_platform,
                **numbers,
            )
        except ValidationError:
            # e.g. "25:00" or 2024-02-30 survive normalisation
            return None
