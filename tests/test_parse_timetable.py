"""
Unit tests for grouping, aggregation and slot merging across day sheets.
"""

import unittest

from timetable_catalog.parse import (
    group_by_section,
    merge_consecutive_sessions,
    parse_cell_entry,
    parse_timetable,
)

HEADER = (
    "TimeTable,,,,,,,,,\n"
    ",1,2,3,4,5,6,7,8,9\n"
    ",08:00-08:50,08:55-09:45,09:50-10:40,10:45-11:35,11:40-12:30,"
    "12:35-13:25,13:30-14:20,14:25-15:15,15:20-16:05\n"
    "CLASSROOMS,,,,,,,,,\n"
)


def make_sheet(rows: list[list[str]]) -> str:
    lines = []
    for row in rows:
        cells = list(row) + [""] * (10 - len(row))
        lines.append(",".join('"' + c.replace('"', '""') + '"' for c in cells))
    return HEADER + "\n".join(lines) + "\n"


def sample_week() -> dict[str, str]:
    return {
        "Monday": make_sheet(
            [
                ["E-1", "DAA BCS-5B\nFahad Sherwani", "", "DBS BCS-5B\nJaveria Farooq", "DBS BCS-5B\nJaveria Farooq"],
                ["Lab-3", "", "", "", "CN Lab BCS-5F\nAli Raza", "", "", "TOA BCS-5F\nSara"],
            ]
        ),
        "Tuesday": make_sheet(
            [
                ["E-1", "", "DAA BCS-5B\nFahad Sherwani"],
                ["E-2", "", "", "TOA BCS-5F\nSara"],
            ]
        ),
        "Wednesday": make_sheet([["E-3", "DAA BCS-5B\nFahad Sherwani"]]),
        "Thursday": make_sheet([["E-1", "Reserved"]]),
        "Friday": make_sheet([["E-5", "", "", "", "", "", "", "", "", "SDA bcs-5f\nX"]]),
    }


class TestGroupBySection(unittest.TestCase):
    def test_grouping_is_lossless(self) -> None:
        entries = [
            parse_cell_entry("DAA BCS-5B", "E-1", "Monday", 1),
            parse_cell_entry("DBS BCS-5B", "E-1", "Monday", 2),
            parse_cell_entry("OS BCS-5F", "E-2", "Monday", 1),
            parse_cell_entry("OS BCS-5F", "E-2", "Monday", 1),
        ]
        groups = group_by_section(entries)

        self.assertEqual(list(groups), ["BCS-5B", "BCS-5F"])
        self.assertEqual(sum(len(v) for v in groups.values()), len(entries))
        self.assertEqual(len(groups["BCS-5F"]), 2)

    def test_empty_input(self) -> None:
        self.assertEqual(group_by_section([]), {})


class TestMergeConsecutiveSessions(unittest.TestCase):
    def test_adjacent_same_room_are_merged(self) -> None:
        sessions = [
            {"day": "Monday", "timeSlot": "10:45-11:35", "room": "E-1", "slotNumber": 4},
            {"day": "Monday", "timeSlot": "09:50-10:40", "room": "E-1", "slotNumber": 3},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual(
            merged,
            [{"day": "Monday", "timeSlot": "09:50-11:35", "room": "E-1", "slotNumber": 3, "slotCount": 2}],
        )

    def test_three_slot_run(self) -> None:
        sessions = [
            {"day": "Friday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1},
            {"day": "Friday", "timeSlot": "08:55-09:45", "room": "E-1", "slotNumber": 2},
            {"day": "Friday", "timeSlot": "09:50-10:40", "room": "E-1", "slotNumber": 3},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0]["timeSlot"], "08:00-10:40")
        self.assertEqual(merged[0]["slotCount"], 3)

    def test_different_room_or_gap_not_merged(self) -> None:
        sessions = [
            {"day": "Monday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1},
            {"day": "Monday", "timeSlot": "08:55-09:45", "room": "E-2", "slotNumber": 2},
            {"day": "Monday", "timeSlot": "10:45-11:35", "room": "E-2", "slotNumber": 4},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual([s["slotNumber"] for s in merged], [1, 2, 4])
        self.assertTrue(all("slotCount" not in s for s in merged))

    def test_widened_lab_stays_alone(self) -> None:
        sessions = [
            {"day": "Monday", "timeSlot": "08:00-10:40", "room": "Lab-1", "slotNumber": 1, "slotCount": 3},
            {"day": "Monday", "timeSlot": "08:55-09:45", "room": "Lab-1", "slotNumber": 2},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual(len(merged), 2)
        self.assertEqual(merged[0]["slotCount"], 3)

    def test_duplicate_day_slot_is_dropped(self) -> None:
        sessions = [
            {"day": "Monday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1},
            {"day": "Monday", "timeSlot": "08:00-08:50", "room": "E-2", "slotNumber": 1},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual(merged, [sessions[0]])

    def test_days_keep_first_seen_order(self) -> None:
        sessions = [
            {"day": "Tuesday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1},
            {"day": "Monday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1},
            {"day": "Tuesday", "timeSlot": "08:55-09:45", "room": "E-1", "slotNumber": 2},
        ]
        merged = merge_consecutive_sessions(sessions)

        self.assertEqual([s["day"] for s in merged], ["Tuesday", "Monday"])
        self.assertEqual(merged[0]["timeSlot"], "08:00-09:45")

    def test_input_is_not_modified(self) -> None:
        first = {"day": "Monday", "timeSlot": "08:00-08:50", "room": "E-1", "slotNumber": 1}
        second = {"day": "Monday", "timeSlot": "08:55-09:45", "room": "E-1", "slotNumber": 2}
        merge_consecutive_sessions([first, second])

        self.assertEqual(first["timeSlot"], "08:00-08:50")
        self.assertNotIn("slotCount", first)


class TestParseTimetable(unittest.TestCase):
    def test_sections(self) -> None:
        catalog = parse_timetable(sample_week())
        self.assertEqual(sorted(catalog), ["BCS-5B", "BCS-5F"])

    def test_course_record(self) -> None:
        catalog = parse_timetable(sample_week())
        daa = next(c for c in catalog["BCS-5B"] if c["courseCode"] == "DAA")

        self.assertEqual(daa["courseName"], "Design & Analysis of Algorithms")
        self.assertEqual(daa["instructor"], "Fahad Sherwani")
        self.assertEqual(daa["creditHours"], 3)
        self.assertEqual([s["day"] for s in daa["sessions"]], ["Monday", "Tuesday", "Wednesday"])
        # legacy fields mirror the first session
        self.assertEqual(daa["day"], "Monday")
        self.assertEqual(daa["timeSlot"], "08:00-08:50")
        self.assertEqual(daa["room"], "E-1")
        self.assertEqual(daa["slotNumber"], 1)

    def test_consecutive_slots_merge_into_one_session(self) -> None:
        catalog = parse_timetable(sample_week())
        dbs = next(c for c in catalog["BCS-5B"] if c["courseCode"] == "DBS")

        self.assertEqual(
            dbs["sessions"],
            [{"day": "Monday", "timeSlot": "09:50-11:35", "room": "E-1", "slotNumber": 3, "slotCount": 2}],
        )
        self.assertEqual(dbs["creditHours"], 1)

    def test_lab_session_keeps_width(self) -> None:
        catalog = parse_timetable(sample_week())
        lab = next(c for c in catalog["BCS-5F"] if c["courseCode"] == "CN Lab")

        self.assertEqual(lab["sessions"][0]["timeSlot"], "10:45-13:25")
        self.assertEqual(lab["sessions"][0]["slotCount"], 3)
        self.assertEqual(lab["creditHours"], 1)

    def test_lowercase_section_is_ignored(self) -> None:
        # section tokens are upper case in the export, "bcs-5f" is not one
        catalog = parse_timetable(sample_week())
        codes = [c["courseCode"] for c in catalog["BCS-5F"]]
        self.assertNotIn("SDA", codes)

    def test_no_two_sessions_share_day_and_slot(self) -> None:
        catalog = parse_timetable(sample_week())
        for courses in catalog.values():
            for course in courses:
                keys = [(s["day"], s["slotNumber"]) for s in course["sessions"]]
                self.assertEqual(len(keys), len(set(keys)))

    def test_idempotent(self) -> None:
        self.assertEqual(parse_timetable(sample_week()), parse_timetable(sample_week()))

    def test_empty_input(self) -> None:
        self.assertEqual(parse_timetable({}), {})

    def test_non_mapping_raises(self) -> None:
        with self.assertRaises(TypeError):
            parse_timetable(["Monday"])  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
