"""Tests for day keys, time labels and minute-of-day arithmetic."""
from datetime import date, datetime

import pytest

from plantomeet.core.errors import ValidationError
from plantomeet.services.scheduling import TimeSlot
from plantomeet.services.scheduling.time_math import (
    day_key,
    days_in_range,
    format_day,
    format_minute_range,
    format_slot_time,
    format_time,
    format_time_short,
    parse_day_key,
    parse_time_label,
    slot_instants,
    split_minute_of_day,
    time_label,
    to_minute_of_day,
)


# =============================================================================
# DAY KEYS
# =============================================================================

class TestDayKeys:
    def test_day_key_from_date_and_datetime(self):
        assert day_key(date(2025, 6, 10)) == "2025-06-10"
        assert day_key(datetime(2025, 6, 10, 23, 59)) == "2025-06-10"

    def test_parse_day_key(self):
        assert parse_day_key("2025-06-10") == date(2025, 6, 10)

    @pytest.mark.parametrize("bad", ["", "2025-13-01", "June 10", "2025/06/10"])
    def test_parse_day_key_rejects_malformed(self, bad):
        with pytest.raises(ValidationError):
            parse_day_key(bad)

    def test_days_in_range_is_inclusive(self):
        assert days_in_range("2025-06-29", "2025-07-01") == ["2025-06-29", "2025-06-30", "2025-07-01"]

    def test_days_in_range_single_day(self):
        assert days_in_range("2025-06-10", "2025-06-10") == ["2025-06-10"]

    def test_inverted_range_is_rejected(self):
        with pytest.raises(ValidationError):
            days_in_range("2025-06-11", "2025-06-10")

    def test_format_day(self):
        assert format_day("2025-06-10") == "Tuesday, Jun 10"


# =============================================================================
# MINUTE OF DAY AND LABELS
# =============================================================================

class TestTimeLabels:
    def test_minute_of_day_round_trip(self):
        assert to_minute_of_day(9, 30) == 570
        assert split_minute_of_day(570) == (9, 30)

    def test_time_label_is_zero_padded(self):
        assert time_label(540) == "09:00"
        assert time_label(0) == "00:00"
        assert time_label(1440) == "24:00"

    def test_time_label_out_of_range(self):
        with pytest.raises(ValidationError):
            time_label(1441)

    def test_parse_time_label(self):
        assert parse_time_label("09:30") == 570
        assert parse_time_label("9:30") == 570
        assert parse_time_label("24:00") == 1440

    def test_parse_time_label_accepts_seconds_suffix(self):
        """Postgres TIME columns come back as HH:MM:SS."""
        assert parse_time_label("10:15:00") == 615

    @pytest.mark.parametrize("bad", ["", "9", "09:60", "25:00", "24:30", "ab:cd"])
    def test_parse_time_label_rejects_bad_input(self, bad):
        with pytest.raises(ValidationError):
            parse_time_label(bad)


class TestDisplayFormatting:
    def test_format_time(self):
        assert format_time(0, 0) == "12:00 AM"
        assert format_time(9, 5) == "9:05 AM"
        assert format_time(12, 30) == "12:30 PM"
        assert format_time(23, 0) == "11:00 PM"

    def test_format_time_short_drops_zero_minutes(self):
        assert format_time_short(9, 0) == "9 AM"
        assert format_time_short(13, 30) == "1:30 PM"

    def test_format_minute_range(self):
        assert format_minute_range(540, 600) == "9 AM - 10 AM"


class TestSlotInstants:
    def test_slot_instants_are_wall_clock(self):
        start, end = slot_instants("2025-06-10", 540, 600)
        assert start == datetime(2025, 6, 10, 9, 0)
        assert end == datetime(2025, 6, 10, 10, 0)

    def test_end_of_day_rolls_to_midnight(self):
        _, end = slot_instants("2025-06-10", 1380, 1440)
        assert end == datetime(2025, 6, 11, 0, 0)


class TestFormatSlotTime:
    def test_slot_label(self):
        assert format_slot_time(TimeSlot("s", "2025-06-10", 540, 600)) == "9 AM - 10 AM"
        assert format_slot_time(TimeSlot("s", "2025-06-10", 750, 810)) == "12:30 PM - 1:30 PM"
