from __future__ import annotations

from datetime import date

import pytest

from src.mom_portal.mom_portal.common.datetime_utils import start_of_week, to_date, to_time
from src.mom_portal.mom_portal.common.pagination import Page, parse_page_request
from src.mom_portal.mom_portal.common.ratelimit import SlidingWindowRateLimiter
from src.mom_portal.mom_portal.common.validators import optional_sequence
from src.mom_portal.mom_portal.core.exceptions import ValidationError


class ManualClock:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


def test_rate_limiter_window_slides():
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=10, clock=clock)

    assert limiter.allow("1.2.3.4")
    assert limiter.allow("1.2.3.4")
    assert not limiter.allow("1.2.3.4")
    assert limiter.allow("5.6.7.8")

    clock.t += 10.5
    assert limiter.allow("1.2.3.4")


def test_rate_limiter_reset():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=ManualClock())
    assert limiter.allow("k")
    assert not limiter.allow("k")
    limiter.reset()
    assert limiter.allow("k")


def test_rate_limiter_drops_idle_clients_once_per_window():
    clock = ManualClock()
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=10, clock=clock)
    for i in range(3):
        assert limiter.allow(f"10.0.0.{i}")

    clock.t += 5
    assert limiter.allow("10.0.0.9")
    assert limiter.tracked_keys == 4

    clock.t += 6
    assert limiter.allow("10.0.0.9")
    assert limiter.tracked_keys == 1

    clock.t += 1
    assert limiter.allow("10.0.0.1")
    assert limiter.tracked_keys == 2


def test_page_request_defaults_and_bounds():
    req = parse_page_request({})
    assert (req.page, req.limit, req.offset) == (1, 10, 0)
    assert parse_page_request({"page": "3", "limit": "20"}).offset == 40

    for bad in ({"page": "0"}, {"limit": "101"}, {"page": "x"}):
        with pytest.raises(ValidationError):
            parse_page_request(bad)


def test_page_total_pages():
    assert Page(items=[], total=0, page=1, limit=10).total_pages == 0
    assert Page(items=[], total=21, page=1, limit=10).total_pages == 3


def test_date_and_time_parsing():
    assert to_date("2026-03-20", "d") == date(2026, 3, 20)
    assert to_time("09:05:30", "t").second == 30
    with pytest.raises(ValidationError):
        to_date("20/03/2026", "d")
    with pytest.raises(ValidationError):
        to_time("9am", "t")


def test_week_starts_on_sunday():
    assert start_of_week(date(2026, 3, 10)) == date(2026, 3, 8)
    assert start_of_week(date(2026, 3, 8)) == date(2026, 3, 8)


def test_optional_sequence():
    assert optional_sequence("") is None
    assert str(optional_sequence(2.5)) == "2.5"
    assert str(optional_sequence("99999999.99")) == "99999999.99"
    assert str(optional_sequence("2.50")) == "2.50"
    for bad in ("abc", -1, True, "NaN", 1e12, "100000000", "1.005"):
        with pytest.raises(ValidationError):
            optional_sequence(bad)
