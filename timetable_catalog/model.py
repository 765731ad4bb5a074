"""
Central data model definitions used across the project.

The parser works on plain dicts so the catalog can be written to JSON as-is.
These TypedDicts define the canonical shape of those dicts so that:
- all modules share the same (camelCase) field names
- the JSON consumed by the web app keeps its historical layout
"""

from __future__ import annotations

from typing import Dict, List, TypedDict


class _ParsedEntryBase(TypedDict):
    courseCode: str
    courseName: str
    section: str
    instructor: str
    room: str
    day: str
    timeSlot: str
    slotNumber: int


class ParsedEntry(_ParsedEntryBase, total=False):
    """
    One class meeting recovered from one timetable cell.

    slotCount is only set when the cell is a lab spanning several periods.
    """

    slotCount: int


class _SessionBase(TypedDict):
    day: str
    timeSlot: str
    room: str
    slotNumber: int


class Session(_SessionBase, total=False):
    """
    One weekly meeting of a course (nested inside a Course).
    """

    slotCount: int


class Course(TypedDict):
    """
    One course of one section, with all its weekly sessions.

    day / timeSlot / room / slotNumber mirror sessions[0] for callers
    that still expect the old single-session shape.
    """

    courseCode: str
    courseName: str
    section: str
    instructor: str
    day: str
    timeSlot: str
    room: str
    slotNumber: int
    creditHours: int
    sessions: List[Session]


Catalog = Dict[str, List[Course]]
