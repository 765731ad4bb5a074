"""
Clash detection.

Given courses picked from one or more sections, detect weekly sessions that
overlap on the same day.
Overlap rule:
    start < other_end AND end > other_start
"""

from __future__ import annotations

from typing import Any, Iterable

from timetable_catalog.lookups import split_time_range
from timetable_catalog.model import Course


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def course_meetings(courses: Iterable[Course]) -> list[dict[str, Any]]:
    """
    Flatten courses into one meeting dict per session (with course identity).
    """
    meetings: list[dict[str, Any]] = []
    for course in courses:
        for session in course.get("sessions", []):
            meetings.append(
                {
                    "courseCode": course.get("courseCode", ""),
                    "courseName": course.get("courseName", ""),
                    "section": course.get("section", ""),
                    "day": session.get("day", ""),
                    "timeSlot": session.get("timeSlot", ""),
                    "room": session.get("room", ""),
                }
            )
    return meetings


def find_clashes(courses: Iterable[Course]) -> list[tuple[dict[str, Any], dict[str, Any]]]:
    """
    Find overlapping meeting pairs (A,B), each pair appears once (i<j).
    Sessions of the same course never clash with each other.
    """
    clashes: list[tuple[dict[str, Any], dict[str, Any]]] = []

    # Pre-parse times, skipping "Slot N" style fallbacks
    parsed: list[tuple[str, int, int, dict[str, Any]]] = []
    for m in course_meetings(courses):
        day = str(m["day"]).strip()
        time_range = split_time_range(str(m["timeSlot"]))
        if not day or time_range is None:
            continue
        try:
            start = _time_to_minutes(time_range[0])
            end = _time_to_minutes(time_range[1])
        except ValueError:
            continue
        if end <= start:
            continue
        parsed.append((day, start, end, m))

    for i in range(len(parsed)):
        d1, s1, e1, m1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            d2, s2, e2, m2 = parsed[j]
            if d1 != d2:
                continue
            if (m1["courseCode"], m1["section"]) == (m2["courseCode"], m2["section"]):
                continue
            if _overlaps(s1, e1, s2, e2):
                clashes.append((m1, m2))

    return clashes
