"""
Day keys, HH:MM labels and minute-of-day arithmetic.

- DayKey = "YYYY-MM-DD", no time component. Partition key for availability and slots.
- Minute of day = hour * 60 + minute, 0..1440. 1440 ("24:00") is only valid as an end.
- All instants built here are naive wall-clock times on the stored day (no timezone conversion).
"""
import re
from datetime import date, datetime, time, timedelta

from plantomeet.core.constants import MINUTES_PER_DAY
from plantomeet.core.errors import ValidationError

_TIME_LABEL_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def day_key(value: date | datetime) -> str:
    """2025-06-10 for a date or datetime (time part dropped)."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_day_key(key: str) -> date:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid day key: {key!r}") from e


def to_minute_of_day(hour: int, minute: int) -> int:
    return hour * 60 + minute


def split_minute_of_day(minutes: int) -> tuple[int, int]:
    """(hour, minute). 1440 -> (24, 0)."""
    return divmod(minutes, 60)


def time_label(minutes: int) -> str:
    """Zero-padded 24h label, e.g. 540 -> '09:00'."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValidationError(f"Minute of day out of range: {minutes}")
    hour, minute = split_minute_of_day(minutes)
    return f"{hour:02d}:{minute:02d}"


def parse_time_label(label: str) -> int:
    """'09:30' -> 570. Accepts '24:00' as end of day; also tolerates a trailing ':SS' from Postgres TIME."""
    if isinstance(label, str) and label.count(":") == 2:
        label = label.rsplit(":", 1)[0]
    m = _TIME_LABEL_RE.match(label or "") if isinstance(label, str) else None
    if not m:
        raise ValidationError(f"Invalid time label: {label!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if minute >= 60 or to_minute_of_day(hour, minute) > MINUTES_PER_DAY:
        raise ValidationError(f"Time label out of range: {label!r}")
    return to_minute_of_day(hour, minute)


def format_time(hour: int, minute: int) -> str:
    """12-hour label with minutes: 9:00 AM, 12:30 PM."""
    period = "PM" if hour % 24 >= 12 else "AM"
    h = hour % 12 or 12
    return f"{h}:{minute:02d} {period}"


def format_time_short(hour: int, minute: int) -> str:
    """Like format_time but drops ':00' (9 AM, 9:30 AM)."""
    period = "PM" if hour % 24 >= 12 else "AM"
    h = hour % 12 or 12
    if minute == 0:
        return f"{h} {period}"
    return f"{h}:{minute:02d} {period}"


def format_minute_range(start_minute: int, end_minute: int) -> str:
    """'9 AM - 10:30 AM'."""
    return f"{format_time_short(*split_minute_of_day(start_minute))} - {format_time_short(*split_minute_of_day(end_minute))}"


def format_slot_time(slot) -> str:
    """Range label for anything with start_minute/end_minute (a TimeSlot or AvailabilityBlock)."""
    return format_minute_range(slot.start_minute, slot.end_minute)


def format_day(key: str) -> str:
    """'Tuesday, Jun 10'."""
    d = parse_day_key(key)
    return f"{d:%A}, {d:%b} {d.day}"


def days_in_range(start: str, end: str) -> list[str]:
    """Every day key from start to end inclusive."""
    start_date, end_date = parse_day_key(start), parse_day_key(end)
    if start_date > end_date:
        raise ValidationError(f"Date range is inverted: {start} > {end}")
    return [day_key(start_date + timedelta(days=i)) for i in range((end_date - start_date).days + 1)]


def slot_instants(day: str, start_minute: int, end_minute: int) -> tuple[datetime, datetime]:
    """Naive wall-clock datetimes for [start_minute, end_minute) on day. end may roll to the next midnight."""
    midnight = datetime.combine(parse_day_key(day), time.min)
    return midnight + timedelta(minutes=start_minute), midnight + timedelta(minutes=end_minute)
