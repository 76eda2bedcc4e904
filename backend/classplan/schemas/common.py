from __future__ import annotations

import re

DAY_VALUES = {
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
}

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def validate_day_name(value: str) -> str:
    day = value.strip()
    if day not in DAY_VALUES:
        raise ValueError("Invalid day value")
    return day


def dedupe_ids(values: list[str]) -> list[str]:
    seen: set[str] = set()
    cleaned: list[str] = []
    for item in values:
        value = item.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned


def parse_time_window(label: str) -> tuple[str, str]:
    """Split an ``"HH:MM - HH:MM"`` window label into start and end times."""
    start, separator, end = label.partition("-")
    start, end = start.strip(), end.strip()
    if not separator or parse_time_to_minutes(end) <= parse_time_to_minutes(start):
        raise ValueError(f"Invalid time window: {label!r}")
    return start, end
