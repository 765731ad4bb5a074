"""
iCalendar (.ics) export.

Each weekly session of the chosen courses becomes one recurring event, so
the calendar can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from timetable_catalog.catalog import day_to_weekday
from timetable_catalog.lookups import split_time_range
from timetable_catalog.model import Course


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _first_date_for_day(term_start: date, day: str) -> date:
    """
    First date on or after term_start that falls on the given day name.
    """
    # day_to_weekday counts from Sunday, date.weekday() from Monday
    target = (day_to_weekday(day) - 1) % 7
    offset = (target - term_start.weekday()) % 7
    return term_start + timedelta(days=offset)


def _dt_local(day: date, time_hh_mm: str) -> str:
    """
    Convert date + time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{day.isoformat()} {time_hh_mm}", "%Y-%m-%d %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def export_courses_to_ics(
    courses: Iterable[Course],
    out_path: str | Path,
    term_start: date,
    weeks: int = 16,
) -> int:
    """
    Export the weekly sessions of courses to an .ics file.
    Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//timetable-catalog//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    count = 0
    for course in courses:
        code = str(course.get("courseCode", "")).strip()
        name = str(course.get("courseName", "")).strip()
        section = str(course.get("section", "")).strip()
        instructor = str(course.get("instructor", "")).strip()

        for session in course.get("sessions", []):
            time_range = split_time_range(str(session.get("timeSlot", "")))
            day_name = str(session.get("day", "")).strip()
            if time_range is None or not day_name:
                continue

            first_day = _first_date_for_day(term_start, day_name)
            try:
                dtstart = _dt_local(first_day, time_range[0])
                dtend = _dt_local(first_day, time_range[1])
            except ValueError:
                continue

            uid = f"{code}-{section}-{dtstart}".replace(" ", "_")
            description = f"{name}\nInstructor: {instructor}" if instructor else name

            lines.append("BEGIN:VEVENT")
            lines.append(f"UID:{_ics_escape(uid)}")
            lines.append(f"DTSTAMP:{dtstamp}")
            lines.append(f"DTSTART:{dtstart}")
            lines.append(f"DTEND:{dtend}")
            lines.append(f"RRULE:FREQ=WEEKLY;COUNT={weeks}")
            lines.append(f"SUMMARY:{_ics_escape(f'{code} {section}'.strip())}")
            room = str(session.get("room", "")).strip()
            if room:
                lines.append(f"LOCATION:{_ics_escape(room)}")
            if description:
                lines.append(f"DESCRIPTION:{_ics_escape(description)}")
            lines.append("END:VEVENT")
            count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
