from datetime import date, datetime, timedelta, timezone

import pytest

from eventra.constants import APP_TZ
from eventra.exceptions import MalformedRecordError
from eventra.records import to_date, to_datetime, to_float, to_optional_date, to_optional_datetime


class TestToDatetime:
    def test_naive_datetime_is_localized(self):
        result = to_datetime(datetime(2025, 3, 1, 9, 30))
        assert result.tzinfo is not None
        assert result.replace(tzinfo=None) == datetime(2025, 3, 1, 9, 30)

    def test_aware_datetime_is_converted(self):
        source = datetime(2025, 3, 1, 9, 30, tzinfo=timezone(timedelta(hours=-3)))
        result = to_datetime(source)
        assert result == source
        assert result.tzinfo == APP_TZ

    def test_date_becomes_midnight(self):
        result = to_datetime(date(2025, 3, 1))
        assert (result.hour, result.minute) == (0, 0)

    def test_iso_string_with_z(self):
        result = to_datetime("2025-03-01T12:00:00Z")
        assert result == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)

    def test_sqlite_style_string(self):
        result = to_datetime("2025-03-01 12:00:00.123456+00:00")
        assert result.microsecond == 123456

    def test_epoch_seconds(self):
        assert to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "not a date", [], True])
    def test_malformed(self, value):
        with pytest.raises(MalformedRecordError):
            to_datetime(value, "created_at")

    def test_error_names_field(self):
        with pytest.raises(MalformedRecordError, match="created_at"):
            to_datetime("garbage", "created_at")

    def test_optional(self):
        assert to_optional_datetime(None) is None
        assert to_optional_datetime("") is None
        assert to_optional_datetime("2025-01-01") is not None


class TestToDate:
    def test_date_passthrough(self):
        assert to_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_iso_date_string(self):
        assert to_date("2025-03-01") == date(2025, 3, 1)

    def test_datetime_string(self):
        assert to_date("2025-03-01T23:00:00") == date(2025, 3, 1)

    def test_bad_date_string(self):
        with pytest.raises(MalformedRecordError):
            to_date("2025-13-01")

    def test_optional(self):
        assert to_optional_date(None) is None
        assert to_optional_date("2025-03-01") == date(2025, 3, 1)


class TestToFloat:
    def test_numbers_and_strings(self):
        assert to_float(3) == 3.0
        assert to_float("12.5") == 12.5

    def test_empty_uses_default(self):
        assert to_float(None) == 0.0
        assert to_float("  ") == 0.0
        assert to_float(None, "rate", default=None) is None

    @pytest.mark.parametrize("value", ["twelve", True, object()])
    def test_malformed(self, value):
        with pytest.raises(MalformedRecordError):
            to_float(value, "budget")

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            to_float("x")
