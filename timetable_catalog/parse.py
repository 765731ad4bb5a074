"""
Parsing (timetable CSV -> section catalog).

The university publishes one CSV sheet per weekday. Each sheet is a grid:

    row 1   title
    row 2   slot numbers
    row 3   time ranges
    row 4   "CLASSROOMS"
    row 5+  room name in column 0, then 9 slot columns

A slot cell looks like "DAA BCS-5B\\nFahad Sherwani" (course + section on the
first line, instructor on the second). The room name is only written on the
first row of a room, so it is carried down until the next room cell.

Pipeline:
- parse_csv            text -> grid
- parse_cell_entry     one cell -> one entry (or None)
- parse_day_timetable  one sheet -> entries (with lab lookahead)
- group_by_section     entries -> {section: entries}
- aggregate_courses    entries -> courses with merged sessions
- parse_timetable      five sheets -> {section: courses}

Everything here is best-effort: cells that cannot be understood are skipped.
"""

from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from timetable_catalog.lookups import SLOT_COUNT, course_name_for, split_time_range, time_slot_for
from timetable_catalog.model import Catalog, Course, ParsedEntry, Session
from timetable_catalog.storage import save_catalog


# ---------------------------------------------------------------------------
# Paths & constants
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
TIMETABLE_DIR = PACKAGE_DIR / "data" / "timetable"
CATALOG_PATH = TIMETABLE_DIR / "timetable.json"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

# title, slot numbers, time ranges, "CLASSROOMS"
HEADER_ROWS = 4

# A lab may absorb at most this many empty cells after its own slot.
MAX_LAB_EXTRA_SLOTS = 2

# Section token after the course code, e.g. "BCS-5B", "BSE5F", "BAI-3A".
SECTION_RE = re.compile(r"(?<=\s)([A-Z]{2,}[A-Z]?-?\d+[A-Z]*)(?!\S)")


# ---------------------------------------------------------------------------
# CSV grid
# ---------------------------------------------------------------------------


def _flush_row(rows: List[List[str]], row: List[str]) -> None:
    if any(cell.strip() for cell in row):
        rows.append(row)


def parse_csv(text: str) -> List[List[str]]:
    """
    Split CSV text into rows of cells.

    Quoted cells may contain commas and newlines, "" is a literal quote.
    Carriage returns are dropped and rows made only of blank cells are
    skipped (spreadsheet exports are full of them). Any other `"` toggles
    the quoted state, so broken quoting never raises: an unclosed quote
    simply runs to the end of the text.
    """
    if not isinstance(text, str):
        raise TypeError(f"CSV text must be str, got {type(text).__name__}")

    text = text.replace("\r", "")

    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False

    i = 0
    while i < len(text):
        char = text[i]
        if char == '"':
            if in_quotes and text[i + 1 : i + 2] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            row.append("".join(cell))
            cell = []
        elif char == "\n" and not in_quotes:
            row.append("".join(cell))
            _flush_row(rows, row)
            row, cell = [], []
        else:
            cell.append(char)
        i += 1

    # last row without a trailing newline
    if cell or row:
        row.append("".join(cell))
        _flush_row(rows, row)

    return rows


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


def _is_blank(cell: Optional[str]) -> bool:
    return cell is None or not cell.strip()


def parse_cell_entry(
    cell_text: Optional[str],
    room: str,
    day: str,
    slot_number: int,
) -> Optional[ParsedEntry]:
    """
    Parses one timetable cell into one entry.

    Returns None for empty cells, "Reserved ..." cells and cells without a
    recognisable section.
    """
    if _is_blank(cell_text) or "reserved" in cell_text.lower():
        return None

    lines = [line.strip() for line in cell_text.split("\n") if line.strip()]
    header = lines[0]
    instructor = lines[1] if len(lines) > 1 else "TBA"

    # The first token is always part of the course code, so "XYZ999" in
    # "XYZ999 BCS-5B" is never taken for a section.
    section_match = SECTION_RE.search(header)
    if section_match is None:
        return None

    course_code = header[: section_match.start()].strip()
    if not course_code:
        return None

    return {
        "courseCode": course_code,
        "courseName": course_name_for(course_code),
        "section": section_match.group(1).upper(),
        "instructor": instructor,
        "room": room.strip(),
        "day": day,
        "timeSlot": time_slot_for(slot_number),
        "slotNumber": slot_number,
    }


# ---------------------------------------------------------------------------
# One day sheet
# ---------------------------------------------------------------------------


def _count_empty_after(row: List[str], slot: int) -> int:
    """
    Count consecutive empty slot cells right after `slot` (at most 2).
    """
    count = 0
    for offset in range(1, MAX_LAB_EXTRA_SLOTS + 1):
        col = slot + offset
        if col > SLOT_COUNT:
            break
        cell = row[col] if col < len(row) else None
        if not _is_blank(cell):
            break
        count += 1
    return count


def _widen_lab(entry: ParsedEntry, extra_slots: int) -> None:
    first = split_time_range(entry["timeSlot"])
    last = split_time_range(time_slot_for(entry["slotNumber"] + extra_slots))
    if first is None or last is None:
        return
    entry["timeSlot"] = f"{first[0]}-{last[1]}"
    entry["slotCount"] = 1 + extra_slots


def parse_day_timetable(csv_text: str, day: str) -> List[ParsedEntry]:
    """
    Parses the CSV sheet of one weekday into a flat list of entries.
    """
    entries: List[ParsedEntry] = []
    current_room = ""

    for row in parse_csv(csv_text)[HEADER_ROWS:]:
        room_cell = row[0].strip() if row else ""
        if room_cell:
            current_room = room_cell

        for slot in range(1, SLOT_COUNT + 1):
            if slot >= len(row):
                break

            entry = parse_cell_entry(row[slot], current_room, day, slot)
            if entry is None:
                continue

            # Labs are written once and followed by empty cells for the
            # periods they also occupy.
            empty_after = _count_empty_after(row, slot)
            if "lab" in entry["courseCode"].lower() and empty_after >= 1:
                _widen_lab(entry, empty_after)

            entries.append(entry)

    return entries


# ---------------------------------------------------------------------------
# Grouping & aggregation
# ---------------------------------------------------------------------------


def group_by_section(entries: Iterable[ParsedEntry]) -> Dict[str, List[ParsedEntry]]:
    """
    Buckets entries by section (no merging, no dedup).
    """
    sections: Dict[str, List[ParsedEntry]] = {}
    for entry in entries:
        sections.setdefault(entry["section"], []).append(entry)
    return sections


def _session_from_entry(entry: ParsedEntry) -> Session:
    session: Session = {
        "day": entry["day"],
        "timeSlot": entry["timeSlot"],
        "room": entry["room"],
        "slotNumber": entry["slotNumber"],
    }
    if "slotCount" in entry:
        session["slotCount"] = entry["slotCount"]
    return session


def _is_widened(session: Session) -> bool:
    return session.get("slotCount", 1) > 1


def _continues_run(prev: Session, cur: Session) -> bool:
    return (
        cur["room"] == prev["room"]
        and cur["slotNumber"] == prev["slotNumber"] + 1
        and not _is_widened(prev)
        and not _is_widened(cur)
    )


def _collapse(run: List[Session]) -> Session:
    first: Session = {**run[0]}
    if len(run) == 1:
        return first

    start = split_time_range(run[0]["timeSlot"])
    end = split_time_range(run[-1]["timeSlot"])
    if start is not None and end is not None:
        first["timeSlot"] = f"{start[0]}-{end[1]}"
    first["slotCount"] = len(run)
    return first


def merge_consecutive_sessions(sessions: Iterable[Session]) -> List[Session]:
    """
    Merges back-to-back slots of one course on one day into one session.

    Sessions are partitioned by day (first-seen order) and sorted by slot
    number. A run of sessions in the same room with slot numbers exactly one
    apart becomes a single session spanning the whole run. Lab sessions that
    were already widened stay on their own. A second session at an
    already-seen (day, slotNumber) is dropped.
    """
    by_day: Dict[str, List[Session]] = {}
    for session in sessions:
        by_day.setdefault(session["day"], []).append(session)

    merged: List[Session] = []
    for day_sessions in by_day.values():
        seen_slots: set[int] = set()
        run: List[Session] = []

        for session in sorted(day_sessions, key=lambda s: s["slotNumber"]):
            if session["slotNumber"] in seen_slots:
                continue
            seen_slots.add(session["slotNumber"])

            if run and _continues_run(run[-1], session):
                run.append(session)
                continue
            if run:
                merged.append(_collapse(run))
            run = [session]

        if run:
            merged.append(_collapse(run))

    return merged


def aggregate_courses(entries: Iterable[ParsedEntry]) -> List[Course]:
    """
    Folds entries into one record per (courseCode, section).

    The first entry of a course provides its name and instructor; every
    entry contributes one session. creditHours is the number of sessions
    left after merging consecutive slots.
    """
    records: Dict[str, dict] = {}

    for entry in entries:
        key = f"{entry['courseCode']}-{entry['section']}"
        record = records.get(key)
        if record is None:
            record = {
                "courseCode": entry["courseCode"],
                "courseName": entry["courseName"],
                "section": entry["section"],
                "instructor": entry["instructor"],
                "sessions": [],
            }
            records[key] = record
        record["sessions"].append(_session_from_entry(entry))

    courses: List[Course] = []
    for record in records.values():
        sessions = merge_consecutive_sessions(record["sessions"])
        first = sessions[0]
        courses.append(
            {
                "courseCode": record["courseCode"],
                "courseName": record["courseName"],
                "section": record["section"],
                "instructor": record["instructor"],
                "day": first["day"],
                "timeSlot": first["timeSlot"],
                "room": first["room"],
                "slotNumber": first["slotNumber"],
                "creditHours": len(sessions),
                "sessions": sessions,
            }
        )
    return courses


def parse_timetable(csv_files_by_day: Mapping[str, str]) -> Catalog:
    """
    Parses all day sheets and returns {section: [course, ...]}.
    """
    if not isinstance(csv_files_by_day, Mapping):
        raise TypeError("csv_files_by_day must map day names to CSV text")

    all_entries: List[ParsedEntry] = []
    for day, csv_text in csv_files_by_day.items():
        all_entries.extend(parse_day_timetable(csv_text, day))

    return {
        section: aggregate_courses(section_entries)
        for section, section_entries in group_by_section(all_entries).items()
    }


# ---------------------------------------------------------------------------
# Public API (files)
# ---------------------------------------------------------------------------


def find_day_files(timetable_dir: Path) -> Dict[str, Path]:
    """
    Find one CSV per weekday, e.g. "... TimeTable - MONDAY.csv".
    """
    found: Dict[str, Path] = {}
    csv_files = sorted(Path(timetable_dir).glob("*.csv"))

    for day in WEEKDAYS:
        for path in csv_files:
            if path.stem.strip().upper().endswith(day.upper()):
                found[day] = path
                break

    return found


def parse_all(
    timetable_dir: Path = TIMETABLE_DIR,
    out_file: Path = CATALOG_PATH,
) -> dict:
    """
    Parses the day CSVs found in timetable_dir and writes the catalog JSON.
    """
    timetable_path = Path(timetable_dir).resolve()
    print("TIMETABLE_DIR :", timetable_path)

    day_files = find_day_files(timetable_path)

    csv_files: Dict[str, str] = {}
    for day in WEEKDAYS:
        path = day_files.get(day)
        if path is None:
            print(f"Missing {day} timetable")
            continue
        csv_files[day] = path.read_text(encoding="utf-8")
        print(f"Loaded {day} timetable ({path.name})")

    if not csv_files:
        raise FileNotFoundError(f"No timetable CSV files found in {timetable_path}")

    catalog = parse_timetable(csv_files)
    document = save_catalog(catalog, out_file, days_processed=len(csv_files))

    print(f"Sections : {document['totalSections']}")
    print(f"Courses  : {document['totalCourses']}")
    print(f"Days     : {document['daysProcessed']}")
    return document


# ---------------------------------------------------------------------------
# CLI connection
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="timetable_catalog.parse",
        description="Parse timetable day CSVs into a section catalog JSON",
    )
    p.add_argument("--timetable-dir", type=Path, default=TIMETABLE_DIR)
    p.add_argument("--out", type=Path, default=CATALOG_PATH)
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        parse_all(timetable_dir=args.timetable_dir, out_file=args.out)
    except FileNotFoundError as e:
        print(str(e))
        raise SystemExit(1)

    print(f"Parsing finished. JSON written to {args.out.resolve()}")


if __name__ == "__main__":
    main()
