"""Tests for bakery.expiry — cookie date formatting and relative offsets."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from bakery.cookies import Cookie
from bakery.errors import ArgumentError
from bakery.expiry import DATE_FORMAT, compute_expiry, format_http_date, parse_offset
from bakery.http.request import Request

# 2009-02-13 23:31:30 UTC
NOW = 1234567890


class TestFormatHttpDate:
    def test_canonical(self) -> None:
        moment = datetime(1999, 4, 25, 0, 40, 33, tzinfo=UTC)
        assert format_http_date(moment) == "Sun, 25-Apr-1999 00:40:33 GMT"

    def test_converts_to_utc(self) -> None:
        moment = datetime(2009, 2, 13, 18, 31, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_http_date(moment) == "Fri, 13-Feb-2009 23:31:30 GMT"

    def test_zero_padding(self) -> None:
        moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert format_http_date(moment) == "Tue, 02-Jan-2024 03:04:05 GMT"

    def test_matches_date_format_constant(self) -> None:
        moment = datetime(1999, 4, 25, 0, 40, 33, tzinfo=UTC)
        assert format_http_date(moment) == moment.strftime(DATE_FORMAT)


class TestParseOffset:
    @pytest.mark.parametrize(
        ("raw", "seconds"),
        [
            ("+30s", 30),
            ("+30", 30),
            ("+10m", 600),
            ("+1h", 3600),
            ("-1d", -86400),
            ("+3M", 3 * 30 * 86400),
            ("+10y", 10 * 365 * 86400),
            ("now", 0),
            ("NOW", 0),
            (" +1h ", 3600),
        ],
    )
    def test_offsets(self, raw: str, seconds: int) -> None:
        assert parse_offset(raw) == seconds

    @pytest.mark.parametrize(
        "raw",
        ["", "30s", "+", "+1w", "+1.5h", "tomorrow", "Sun, 25-Apr-1999 00:40:33 GMT"],
    )
    def test_not_relative(self, raw: str) -> None:
        assert parse_offset(raw) is None


class TestComputeExpiry:
    def test_seconds(self) -> None:
        assert compute_expiry("+30s", now=NOW) == "Fri, 13-Feb-2009 23:32:00 GMT"

    def test_minutes(self) -> None:
        assert compute_expiry("+10m", now=NOW) == "Fri, 13-Feb-2009 23:41:30 GMT"

    def test_hours(self) -> None:
        assert compute_expiry("+1h", now=NOW) == "Sat, 14-Feb-2009 00:31:30 GMT"

    def test_days_negative(self) -> None:
        assert compute_expiry("-1d", now=NOW) == "Thu, 12-Feb-2009 23:31:30 GMT"

    def test_now(self) -> None:
        assert compute_expiry("now", now=NOW) == "Fri, 13-Feb-2009 23:31:30 GMT"

    def test_months_are_thirty_days(self) -> None:
        assert compute_expiry("+3M", now=NOW) == "Thu, 14-May-2009 23:31:30 GMT"

    def test_years_are_365_days(self) -> None:
        # Two leap days (2012, 2016) fall inside, so ten fixed years land two days early
        assert compute_expiry("+10y", now=NOW) == "Mon, 11-Feb-2019 23:31:30 GMT"

    def test_absolute_string_verbatim(self) -> None:
        raw = "Thursday, 25-Apr-1999 00:40:33 GMT"
        assert compute_expiry(raw, now=NOW) == raw

    def test_defaults_to_current_time(self) -> None:
        before = datetime.now(UTC).replace(microsecond=0)
        result = compute_expiry("now")
        after = datetime.now(UTC)
        parsed = datetime.strptime(result, DATE_FORMAT).replace(tzinfo=UTC)
        assert before <= parsed <= after

    @pytest.mark.parametrize("raw", ["+10000y", "-10000y", "+99999999999999999999s"])
    def test_out_of_range(self, raw: str) -> None:
        with pytest.raises(ArgumentError, match="out of range"):
            compute_expiry(raw, now=NOW)

    def test_out_of_range_through_cookie(self) -> None:
        cookie = Cookie(Request("GET", "/"))
        with pytest.raises(ArgumentError, match="'\\+10000y'"):
            cookie.expires = "+10000y"
        assert cookie.expires is None
