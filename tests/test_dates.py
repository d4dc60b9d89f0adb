from datetime import date, datetime, timedelta

import pytest

from payment import days_remaining, parse_date


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2025-03-01") == date(2025, 3, 1)

    def test_iso_datetime_string_is_truncated(self):
        assert parse_date("2025-03-01T23:59:00") == date(2025, 3, 1)

    def test_datetime_is_truncated(self):
        assert parse_date(datetime(2025, 3, 1, 18, 30)) == date(2025, 3, 1)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2025-13-40", 42, []])
    def test_unusable_values_are_absent(self, value):
        assert parse_date(value) is None


class TestDaysRemaining:
    def test_absent_date(self, today):
        assert days_remaining(None, today) is None
        assert days_remaining(None, date(1999, 1, 1)) is None

    def test_malformed_date_is_absent(self, today):
        assert days_remaining("31/12/2025", today) is None

    def test_due_today(self, today):
        assert days_remaining(today, today) == 0

    def test_future_and_past(self, today):
        assert days_remaining(today + timedelta(days=2), today) == 2
        assert days_remaining(today - timedelta(days=31), today) == -31

    def test_time_of_day_ignored(self, today):
        late_evening = datetime.combine(today, datetime.max.time())
        assert days_remaining(today + timedelta(days=1), late_evening) == 1
        assert days_remaining(today.isoformat(), late_evening) == 0

    def test_string_dates(self):
        assert days_remaining("2025-01-10", date(2025, 1, 1)) == 9
