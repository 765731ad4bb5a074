"""
CLI (Command Line Interface).

Quick terminal commands around the parsed timetable, e.g.:

    timetable-catalog build --timetable-dir <dir>
    timetable-catalog sections
    timetable-catalog show <section>
    timetable-catalog search <text>
    timetable-catalog clashes <section> [<section> ...]
    timetable-catalog export <section> <file.ics> --term-start 2025-09-01

Note:
- Parsing lives in timetable_catalog/parse.py
- All commands read the catalog JSON written by "build"
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from timetable_catalog.catalog import get_all_sections, get_courses_by_section, search_courses
from timetable_catalog.conflicts import find_clashes
from timetable_catalog.export_ics import export_courses_to_ics
from timetable_catalog.model import Catalog, Course
from timetable_catalog.parse import CATALOG_PATH, TIMETABLE_DIR, parse_all
from timetable_catalog.storage import load_catalog


console = Console()


def _sessions_text(course: Course) -> str:
    parts = []
    for s in course.get("sessions", []):
        parts.append(f"{s.get('day', '')} {s.get('timeSlot', '')} ({s.get('room', '')})")
    return "\n".join(parts)


def _cmd_build(args: argparse.Namespace) -> int:
    """
    Parse the day CSVs and write the catalog JSON.
    """
    out = args.out if args.out is not None else args.catalog
    try:
        parse_all(timetable_dir=args.timetable_dir, out_file=out)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    print(f"Catalog written to: {Path(out).resolve()}")
    return 0


def _cmd_sections(args: argparse.Namespace, catalog: Catalog) -> int:
    sections = get_all_sections(catalog)
    if not sections:
        print("No sections. Run 'build' first.")
        return 1

    for section in sections:
        print(f"{section} ({len(catalog[section])} courses)")
    return 0


def _cmd_show(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Print all courses of one section with their weekly sessions.
    """
    courses = get_courses_by_section(catalog, args.section or "")
    if not courses:
        print(f"Section not found: {args.section}")
        return 1

    table = Table(title=f"Section {courses[0]['section']}", box=box.SIMPLE)
    table.add_column("Code", style="bold cyan")
    table.add_column("Course")
    table.add_column("Instructor")
    table.add_column("Sessions")
    table.add_column("Cr", justify="right")

    for c in courses:
        table.add_row(
            c.get("courseCode", ""),
            c.get("courseName", ""),
            c.get("instructor", ""),
            _sessions_text(c),
            str(c.get("creditHours", "")),
        )

    console.print(table)
    return 0


def _cmd_search(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Search courses by substring match in code, name, section or instructor.
    """
    query = (args.text or "").strip()
    if not query:
        print("Please provide a search text.")
        return 1

    matches = search_courses(catalog, query)
    if not matches:
        print("No results.")
        return 0

    # show max 20
    for c in matches[:20]:
        print(f"{c.get('section', '')} | {c.get('courseCode', '')} | {c.get('courseName', '')} | {c.get('instructor', '')}")
    if len(matches) > 20:
        print(f"... and {len(matches) - 20} more results")

    return 0


def _cmd_clashes(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Print clashing sessions among the courses of the given sections.
    """
    courses: list[Course] = []
    for section in args.sections:
        found = get_courses_by_section(catalog, section)
        if not found:
            print(f"Section not found: {section}")
            return 1
        courses.extend(found)

    clashes = find_clashes(courses)
    if not clashes:
        print("No clashes found.")
        return 0

    table = Table(title=f"Clashes found: {len(clashes)}", box=box.SIMPLE)
    table.add_column("Day")
    table.add_column("Course A")
    table.add_column("Course B")

    for a, b in clashes:
        table.add_row(
            a["day"],
            f"{a['courseCode']} {a['section']} {a['timeSlot']}",
            f"{b['courseCode']} {b['section']} {b['timeSlot']}",
        )

    console.print(table)
    return 0


def _cmd_export(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Export the weekly sessions of one section into an iCalendar (.ics) file.
    """
    courses = get_courses_by_section(catalog, args.section or "")
    if not courses:
        print(f"Section not found: {args.section}")
        return 1

    try:
        term_start = datetime.strptime(args.term_start, "%Y-%m-%d").date()
    except ValueError:
        print(f"Invalid --term-start: {args.term_start!r} (expected YYYY-MM-DD)")
        return 1

    if args.weeks < 1:
        print("--weeks must be at least 1.")
        return 1

    n = export_courses_to_ics(courses, args.out, term_start=term_start, weeks=args.weeks)
    print(f"Exported {n} weekly sessions to: {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="timetable-catalog", description="Timetable catalog CLI")
    parser.add_argument("--catalog", type=Path, default=CATALOG_PATH, help="Catalog JSON file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", help="Parse day CSVs into the catalog JSON")
    p_build.add_argument("--timetable-dir", type=Path, default=TIMETABLE_DIR, help="Folder with the day CSVs")
    p_build.add_argument("--out", type=Path, default=None, help="Output JSON (default: --catalog)")

    sub.add_parser("sections", help="List all sections")

    p_show = sub.add_parser("show", help="Show the courses of a section")
    p_show.add_argument("section", type=str, help="Section (e.g. BCS-5B)")

    p_search = sub.add_parser("search", help="Search for courses")
    p_search.add_argument("text", type=str, help="Search text")

    p_clashes = sub.add_parser("clashes", help="Show clashes among the courses of sections")
    p_clashes.add_argument("sections", nargs="+", help="Sections (e.g. BCS-5B BCS-5F)")

    p_export = sub.add_parser("export", help="Export a section's weekly sessions to .ics")
    p_export.add_argument("section", type=str, help="Section (e.g. BCS-5B)")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument("--term-start", required=True, help="First day of the term (YYYY-MM-DD)")
    p_export.add_argument("--weeks", type=int, default=16, help="Number of teaching weeks")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "build":
        raise SystemExit(_cmd_build(args))

    catalog = load_catalog(args.catalog)

    if args.command == "sections":
        raise SystemExit(_cmd_sections(args, catalog))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, catalog))
    if args.command == "search":
        raise SystemExit(_cmd_search(args, catalog))
    if args.command == "clashes":
        raise SystemExit(_cmd_clashes(args, catalog))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, catalog))

    raise SystemExit(2)
