"""Tests for TWSE trading-session helpers."""

from datetime import date, datetime

import pytz

from twdash.core.market_hours import (
    TPE,
    MarketSession,
    get_market_session,
    get_market_status,
    get_next_trading_day,
    is_holiday,
    is_market_open,
    is_trading_day,
    is_weekend,
)


def tpe(year, month, day, hour=0, minute=0):
    return TPE.localize(datetime(year, month, day, hour, minute))


def test_weekend():
    assert is_weekend(date(2026, 10, 17))  # Saturday
    assert is_weekend(date(2026, 10, 18))  # Sunday
    assert not is_weekend(date(2026, 10, 19))


def test_fixed_holidays():
    assert is_holiday(date(2026, 1, 1))
    assert is_holiday(date(2027, 2, 28))
    assert is_holiday(date(2026, 10, 10))
    assert not is_holiday(date(2026, 10, 19))
    assert not is_trading_day(date(2026, 1, 1))
    assert is_trading_day(date(2026, 10, 19))


def test_sessions_on_a_trading_day():
    assert get_market_session(tpe(2026, 10, 19, 8, 59)) == MarketSession.PRE_MARKET
    assert get_market_session(tpe(2026, 10, 19, 9, 0)) == MarketSession.OPEN
    assert get_market_session(tpe(2026, 10, 19, 13, 29)) == MarketSession.OPEN
    assert get_market_session(tpe(2026, 10, 19, 13, 30)) == MarketSession.AFTER_MARKET


def test_closed_on_weekend_and_holiday():
    assert get_market_session(tpe(2026, 10, 17, 10, 0)) == MarketSession.CLOSED
    assert get_market_session(tpe(2026, 1, 1, 10, 0)) == MarketSession.CLOSED


def test_converts_other_timezones():
    # 02:00 UTC is 10:00 in Taipei
    utc_morning = pytz.utc.localize(datetime(2026, 10, 19, 2, 0))
    assert is_market_open(utc_morning)


def test_next_trading_day_skips_weekend_and_holiday():
    assert get_next_trading_day(date(2026, 10, 23)) == date(2026, 10, 26)
    assert get_next_trading_day(date(2025, 12, 31)) == date(2026, 1, 2)


def test_status_while_open():
    status = get_market_status(tpe(2026, 10, 19, 10, 15))

    assert status["status"] == "open"
    assert status["label"] == "Trading"
    assert status["is_open"] is True
    assert status["current_time"] == "10:15:00"
    assert status["current_date"] == "2026-10-19"
    assert "next_open" not in status


def test_status_pre_market_opens_same_day():
    status = get_market_status(tpe(2026, 10, 19, 7, 30))

    assert status["status"] == "pre-market"
    assert status["next_open"] == "2026-10-19T09:00:00+08:00"


def test_status_after_friday_close():
    status = get_market_status(tpe(2026, 10, 23, 14, 0))

    assert status["status"] == "after-market"
    assert status["next_open"] == "2026-10-26T09:00:00+08:00"


def test_status_on_holiday():
    status = get_market_status(tpe(2026, 1, 1, 10, 0))

    assert status["status"] == "closed"
    assert status["is_holiday"] is True
    assert status["is_weekend"] is False
    assert status["next_open"] == "2026-01-02T09:00:00+08:00"
