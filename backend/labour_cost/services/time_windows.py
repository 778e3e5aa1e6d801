"""
Time-of-day arithmetic for shifts that may cross midnight.
All times are minutes since midnight; a shift end earlier than its start
means the shift finishes the next day.
"""
from labour_cost.services.award_rules import EVENING_WINDOW, NIGHT_WINDOWS, ORDINARY_WINDOW

MINUTES_PER_DAY = 24 * 60


def parse_time(hhmm: str) -> int:
    """Parse HH:MM 24h to minutes since midnight."""
    parts = hhmm.strip().split(":")
    h = int(parts[0]) if parts else 0
    m = int(parts[1]) if len(parts) > 1 else 0
    if not (0 <= h < 24 and 0 <= m < 60):
        raise ValueError(f"invalid time of day: {hhmm!r}")
    return h * 60 + m


def crosses_midnight(start_time: str, end_time: str) -> bool:
    return parse_time(end_time) < parse_time(start_time)


def _unwrap(start_min: int, end_min: int) -> tuple[int, int]:
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def span_minutes(start_time: str, end_time: str) -> int:
    """Gross minutes between two times, wrapping past midnight if needed."""
    start, end = _unwrap(parse_time(start_time), parse_time(end_time))
    return end - start


def hours_in_window(start_min: int, end_min: int, window_start: int, window_end: int) -> float:
    """
    Hours of the shift [start_min, end_min) that fall inside the window.
    The shift may wrap past midnight; the window never does.
    """
    start, end = _unwrap(start_min, end_min)
    overlap_start = max(start, window_start)
    overlap_end = min(end, window_end)
    if overlap_start >= overlap_end:
        return 0.0
    return (overlap_end - overlap_start) / 60


def _hours_in_daily_window(start_min: int, end_min: int, window: tuple[int, int]) -> float:
    # A wrapping shift runs into the next day, so test the window on both days.
    window_start, window_end = window
    return sum(
        hours_in_window(start_min, end_min, window_start + offset, window_end + offset)
        for offset in (0, MINUTES_PER_DAY)
    )


def split_weekday_hours(start_time: str, end_time: str) -> tuple[float, float, float]:
    """
    Split a shift's gross hours into (ordinary, evening, night) periods.
    The three periods cover the whole day, so they always add up to the span.
    """
    start = parse_time(start_time)
    end = parse_time(end_time)
    ordinary = _hours_in_daily_window(start, end, ORDINARY_WINDOW)
    evening = _hours_in_daily_window(start, end, EVENING_WINDOW)
    night = sum(_hours_in_daily_window(start, end, w) for w in NIGHT_WINDOWS)
    return ordinary, evening, night
