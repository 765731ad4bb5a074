"""
Read-only helpers on a parsed catalog ({section: [course, ...]}).

None of these functions modify the catalog they are given.
"""

from __future__ import annotations

from typing import Iterator, List

from timetable_catalog.model import Catalog, Course


_WEEKDAY_INDEX = {
    "SUNDAY": 0,
    "MONDAY": 1,
    "TUESDAY": 2,
    "WEDNESDAY": 3,
    "THURSDAY": 4,
    "FRIDAY": 5,
    "SATURDAY": 6,
}


def get_all_sections(catalog: Catalog) -> List[str]:
    return sorted(catalog.keys())


def get_courses_by_section(catalog: Catalog, section: str) -> List[Course]:
    """
    Courses of one section. Lookup ignores case and surrounding whitespace.
    """
    return list(catalog.get(section.strip().upper(), []))


def day_to_weekday(day: str) -> int:
    """
    Convert a day name to 0 (Sunday) .. 6 (Saturday).

    Unknown names map to 1 (Monday). Attendance records saved by the web
    app rely on this fallback, so it is kept.
    """
    return _WEEKDAY_INDEX.get(day.strip().upper(), 1)


def iter_courses(catalog: Catalog) -> Iterator[Course]:
    for section in get_all_sections(catalog):
        yield from catalog[section]


def search_courses(catalog: Catalog, text: str) -> List[Course]:
    """
    Substring search in course code, name, section and instructor.
    """
    query = (text or "").strip().lower()
    if not query:
        return []

    matches: List[Course] = []
    for course in iter_courses(catalog):
        hay = " ".join(
            str(course.get(key, "") or "")
            for key in ("courseCode", "courseName", "section", "instructor")
        ).lower()
        if query in hay:
            matches.append(course)
    return matches
