"""
Market Hours Utility

Handles Asia/Taipei time, TWSE sessions and fixed-date holidays.
"""

from datetime import datetime, date, timedelta
from enum import Enum
from typing import Optional
import pytz

from twdash.core.config import settings

TPE = pytz.timezone(settings.market_timezone)

# Market timing (Asia/Taipei)
MARKET_OPEN = settings.market_open
MARKET_CLOSE = settings.market_close


class MarketSession(str, Enum):
    PRE_MARKET = "pre-market"
    OPEN = "open"
    AFTER_MARKET = "after-market"
    CLOSED = "closed"


SESSION_LABELS = {
    MarketSession.PRE_MARKET: "Pre-Market",
    MarketSession.OPEN: "Trading",
    MarketSession.AFTER_MARKET: "After-Hours",
    MarketSession.CLOSED: "Closed",
}

# Holidays that fall on the same date every year (month, day).
# Lunar-calendar closures move yearly and are not listed.
FIXED_HOLIDAYS = {
    (1, 1),    # Founding Day
    (2, 28),   # Peace Memorial Day
    (10, 10),  # National Day
}


def get_tpe_now() -> datetime:
    """Get current time in Asia/Taipei."""
    return datetime.now(TPE)


def is_weekend(dt: date) -> bool:
    """Check if date is a weekend."""
    return dt.weekday() >= 5  # Saturday = 5, Sunday = 6


def is_holiday(dt: date) -> bool:
    """Check if date is a fixed-date TWSE holiday."""
    return (dt.month, dt.day) in FIXED_HOLIDAYS


def is_trading_day(dt: date) -> bool:
    """Check if date is a trading day."""
    return not is_weekend(dt) and not is_holiday(dt)


def get_market_session(dt: Optional[datetime] = None) -> MarketSession:
    """Get the market session for `dt` (default: now)."""
    if dt is None:
        dt = get_tpe_now()
    elif dt.tzinfo is not None:
        dt = dt.astimezone(TPE)

    if not is_trading_day(dt.date()):
        return MarketSession.CLOSED

    time_str = dt.strftime("%H:%M")

    if time_str < MARKET_OPEN:
        return MarketSession.PRE_MARKET
    elif time_str < MARKET_CLOSE:
        return MarketSession.OPEN
    else:
        return MarketSession.AFTER_MARKET


def is_market_open(dt: Optional[datetime] = None) -> bool:
    """Check if market is currently open for trading."""
    return get_market_session(dt) == MarketSession.OPEN


def get_next_trading_day(dt: Optional[date] = None) -> date:
    """Get the next trading day."""
    if dt is None:
        dt = get_tpe_now().date()

    next_day = dt + timedelta(days=1)
    while not is_trading_day(next_day):
        next_day += timedelta(days=1)

    return next_day


def get_market_status(now: Optional[datetime] = None) -> dict:
    """Get comprehensive market status."""
    if now is None:
        now = get_tpe_now()
    elif now.tzinfo is not None:
        now = now.astimezone(TPE)

    session = get_market_session(now)

    status = {
        "status": session.value,
        "label": SESSION_LABELS[session],
        "is_open": session == MarketSession.OPEN,
        "is_holiday": is_holiday(now.date()),
        "is_weekend": is_weekend(now.date()),
        "current_time": now.strftime("%H:%M:%S"),
        "current_date": now.date().isoformat(),
    }

    if session == MarketSession.PRE_MARKET:
        status["next_open"] = f"{now.date().isoformat()}T{MARKET_OPEN}:00+08:00"
    elif session != MarketSession.OPEN:
        next_trading = get_next_trading_day(now.date())
        status["next_open"] = f"{next_trading.isoformat()}T{MARKET_OPEN}:00+08:00"

    return status
