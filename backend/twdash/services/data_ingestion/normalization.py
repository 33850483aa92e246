"""
Quote Normalization

Turns raw historical quote rows (Yahoo-style dicts with a `date` field)
into the ascending, de-duplicated OHLC bars the indicator engine expects.
No fetching happens here.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from twdash.schemas.market import OHLCBar

logger = logging.getLogger(__name__)

PRICE_FIELDS = ("open", "high", "low", "close")


def to_epoch_seconds(value: Any) -> Optional[int]:
    """Parse an ISO string, datetime or numeric timestamp into epoch seconds."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return int(dt.timestamp())
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        # Millisecond timestamps are 13 digits
        return int(value / 1000) if value > 1e11 else int(value)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return to_epoch_seconds(parsed)
    return None


def bars_from_quotes(quotes: Iterable[dict]) -> list[OHLCBar]:
    """
    Normalize quote rows into OHLC bars.

    - Rows missing any price (or with a zero price) are dropped
    - Prices are rounded to 2 decimals
    - Output is sorted by time; for duplicate timestamps the last row wins
    """
    by_time: dict[int, OHLCBar] = {}

    for row in quotes:
        if not row or not all(row.get(field) for field in PRICE_FIELDS):
            continue

        raw_time = row.get("date")
        if raw_time is None:
            raw_time = row.get("time")

        timestamp = to_epoch_seconds(raw_time)
        if timestamp is None:
            continue

        try:
            bar = OHLCBar(
                time=timestamp,
                **{field: round(float(row[field]), 2) for field in PRICE_FIELDS},
            )
        except (PydanticValidationError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed quote at {timestamp}: {e}")
            continue

        by_time[timestamp] = bar

    return [by_time[t] for t in sorted(by_time)]
