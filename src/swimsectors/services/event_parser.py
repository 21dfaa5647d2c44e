"""Utilities for parsing event names and swim durations."""

import re
from datetime import time, timedelta

from swimsectors.models.event import Stroke

# Stroke name aliases as they appear on NQT sheets and in results
STROKE_ALIASES: dict[str, Stroke] = {
    # Freestyle
    "free": Stroke.FREESTYLE,
    "freestyle": Stroke.FREESTYLE,
    "fr": Stroke.FREESTYLE,
    # Backstroke
    "back": Stroke.BACKSTROKE,
    "backstroke": Stroke.BACKSTROKE,
    "bk": Stroke.BACKSTROKE,
    # Breaststroke
    "breast": Stroke.BREASTSTROKE,
    "breaststroke": Stroke.BREASTSTROKE,
    "br": Stroke.BREASTSTROKE,
    # Butterfly
    "fly": Stroke.BUTTERFLY,
    "butterfly": Stroke.BUTTERFLY,
    "fl": Stroke.BUTTERFLY,
    # Individual Medley
    "im": Stroke.IM,
    "i.m.": Stroke.IM,
    "medley": Stroke.IM,
    "individual medley": Stroke.IM,
}

# Unit words that may sit between the distance and the stroke ("50 Y Free")
_UNIT_WORDS = {"y", "yd", "yds", "yard", "yards", "m", "meter", "meters", "metre", "metres"}


def parse_distance_and_stroke(event_str: str) -> tuple[int, Stroke]:
    """Parse an NQT sheet event name into (distance, stroke).

    Supports formats:
    - "200 FREE"
    - "100 Breaststroke"
    - "50 Y Fly"
    - "400 I.M."

    Raises:
        ValueError: If the event name cannot be parsed
    """
    parts = event_str.lower().strip().split()

    if len(parts) < 2:
        raise ValueError(
            f"Invalid event format: '{event_str}'. Expected: '<distance> <stroke>'"
        )

    try:
        distance = int(parts[0])
    except ValueError as e:
        raise ValueError(f"Invalid distance: '{parts[0]}'") from e

    stroke_parts = [p for p in parts[1:] if p not in _UNIT_WORDS]
    stroke_str = " ".join(stroke_parts)
    if stroke_str in STROKE_ALIASES:
        return distance, STROKE_ALIASES[stroke_str]
    if stroke_parts and stroke_parts[0] in STROKE_ALIASES:
        return distance, STROKE_ALIASES[stroke_parts[0]]

    valid_strokes = sorted(STROKE_ALIASES.keys())
    raise ValueError(f"Invalid stroke: '{stroke_str}'. Valid strokes: {valid_strokes}")


# H:MM:SS.cc, M:SS.cc, SS.cc, SS
TIME_PATTERN_HOURS = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})(?:\.(\d{1,2}))?$")
TIME_PATTERN_MINUTES = re.compile(r"^(\d+):(\d{1,2})(?:\.(\d{1,2}))?$")
TIME_PATTERN_SECONDS = re.compile(r"^(\d+)(?:\.(\d{1,2}))?$")


def _fraction_to_hundredths(fraction: str | None) -> int:
    if not fraction:
        return 0
    # A single digit is tenths
    if len(fraction) == 1:
        return int(fraction) * 10
    return int(fraction[:2])


def parse_duration(time_str: str) -> int:
    """Parse a swim time into hundredths of a second.

    Supports formats:
    - "29.5"       -> 2950
    - "59.45"      -> 5945
    - "1:05.79"    -> 6579
    - "1:02:03.45" -> 372345

    Raises:
        ValueError: If the time cannot be parsed
    """
    text = time_str.strip()

    match = TIME_PATTERN_HOURS.match(text)
    if match:
        hours, minutes, seconds = int(match.group(1)), int(match.group(2)), int(match.group(3))
        if minutes >= 60 or seconds >= 60:
            raise ValueError(f"Invalid time: '{time_str}' (minutes and seconds must be < 60)")
        total_seconds = hours * 3600 + minutes * 60 + seconds
        return total_seconds * 100 + _fraction_to_hundredths(match.group(4))

    match = TIME_PATTERN_MINUTES.match(text)
    if match:
        minutes, seconds = int(match.group(1)), int(match.group(2))
        if seconds >= 60:
            raise ValueError(f"Invalid seconds value: {seconds} (must be < 60)")
        return (minutes * 60 + seconds) * 100 + _fraction_to_hundredths(match.group(3))

    match = TIME_PATTERN_SECONDS.match(text)
    if match:
        return int(match.group(1)) * 100 + _fraction_to_hundredths(match.group(2))

    raise ValueError(
        f"Invalid time format: '{time_str}'. Expected 'SS.cc', 'M:SS.cc' or 'H:MM:SS.cc'"
    )


def duration_from_cell(value: object) -> int:
    """Convert a spreadsheet cell holding a swim time into hundredths.

    Workbooks store times either as text, as a number of seconds, or (when
    the cell has a time format) as a ``datetime.time`` / ``timedelta``.

    Raises:
        ValueError: If the value cannot be interpreted as a time
    """
    if isinstance(value, timedelta):
        return round(value.total_seconds() * 100)
    if isinstance(value, time):
        total_seconds = value.hour * 3600 + value.minute * 60 + value.second
        return total_seconds * 100 + round(value.microsecond / 10_000)
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, (int, float)):
        return round(value * 100)
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError(f"Invalid time value: {value!r}")


def format_duration(hundredths: int) -> str:
    """Format hundredths of a second as a clock time.

    Returns:
        "SS.cc", "M:SS.cc" or "H:MM:SS.cc"
    """
    sign = "-" if hundredths < 0 else ""
    total_seconds, cs = divmod(abs(hundredths), 100)
    minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)

    if hours:
        return f"{sign}{hours}:{minutes:02d}:{seconds:02d}.{cs:02d}"
    if minutes:
        return f"{sign}{minutes}:{seconds:02d}.{cs:02d}"
    return f"{sign}{seconds}.{cs:02d}"
