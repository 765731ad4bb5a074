"""
Static lookup tables for the timetable parser.

- COURSE_NAMES: course code as written in the timetable -> full course name
- TIME_SLOTS: slot column number (1-9) -> "HH:MM-HH:MM"

Both tables are read-only. They change once per term, never at runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# ---------------------------------------------------------------------------
# Course names
# ---------------------------------------------------------------------------

# Keys are case-sensitive and must match the timetable cells exactly.
COURSE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        # Computing core
        "PF": "Programming Fundamentals",
        "PF Lab": "Programming Fundamentals Lab",
        "OOP": "Object Oriented Programming",
        "OOP Lab": "Object Oriented Programming Lab",
        "DS": "Data Structures",
        "DS Lab": "Data Structures Lab",
        "DSA": "Data Structures & Algorithms",
        "DAA": "Design & Analysis of Algorithms",
        "DBS": "Database Systems",
        "DB Lab": "Database Systems Lab",
        "DBS Lab": "Database Systems Lab",
        "DBMS": "Database Management Systems",
        "OS": "Operating Systems",
        "OS Lab": "Operating Systems Lab",
        "CN": "Computer Networks",
        "CN Lab": "Computer Networks Lab",
        "COAL": "Computer Organization & Assembly Language",
        "COAL Lab": "Computer Organization & Assembly Language Lab",
        "DLD": "Digital Logic Design",
        "DLD Lab": "Digital Logic Design Lab",
        "CAL": "Computer Architecture & Logic Design",
        "CA": "Computer Architecture",
        "CO": "Computer Organization",
        "TOA": "Theory of Automata",
        "CC": "Compiler Construction",
        "PDC": "Parallel & Distributed Computing",
        "ICT": "Information & Communication Technologies",
        "ICT Lab": "Information & Communication Technologies Lab",
        "ITC": "Introduction to Computing",
        "IIT": "Introduction to Information Technology",
        # Software engineering
        "SE": "Software Engineering",
        "SDA": "Software Design & Architecture",
        "SDA Lab": "Software Design & Architecture Lab",
        "SQA": "Software Quality Assurance",
        "SPM": "Software Project Management",
        "SRE": "Software Requirements Engineering",
        "ST": "Software Testing",
        "ASD": "Agile Software Development",
        "SCD": "Software Construction & Development",
        "SCD Lab": "Software Construction & Development Lab",
        "HCI": "Human Computer Interaction",
        "PM": "Project Management",
        "DevOps": "DevOps",
        "FYP-I": "Final Year Project I",
        "FYP-II": "Final Year Project II",
        # Data, AI and systems electives
        "AI": "Artificial Intelligence",
        "AI Lab": "Artificial Intelligence Lab",
        "ML": "Machine Learning",
        "DL": "Deep Learning",
        "NLP": "Natural Language Processing",
        "CV": "Computer Vision",
        "DIP": "Digital Image Processing",
        "CG": "Computer Graphics",
        "DM": "Data Mining",
        "DW": "Data Warehousing",
        "BDA": "Big Data Analytics",
        "BI": "Business Intelligence",
        "GenAI": "Generative AI",
        "RL": "Reinforcement Learning",
        "IoT": "Internet of Things",
        "ES": "Embedded Systems",
        "RTS": "Real Time Systems",
        "Cloud": "Cloud Computing",
        "Web": "Web Technologies",
        "WE": "Web Engineering",
        "Mobile": "Mobile Application Development",
        "MAD": "Mobile Application Development",
        "GD": "Game Development",
        "BC": "Blockchain",
        "ERP": "Enterprise Resource Planning",
        "MIS": "Management Information Systems",
        # Security
        "IS": "Information Security",
        "IS Lab": "Information Security Lab",
        "Cyber": "Cyber Security",
        "NS": "Network Security",
        "Crypto": "Cryptography",
        "EH": "Ethical Hacking",
        "DF": "Digital Forensics",
        # Mathematics and sciences
        "Discrete": "Discrete Mathematics",
        "DMS": "Discrete Mathematical Structures",
        "LA": "Linear Algebra",
        "Calculus": "Calculus",
        "Cal-I": "Calculus & Analytical Geometry",
        "MVC": "Multivariable Calculus",
        "DE": "Differential Equations",
        "P&S": "Probability & Statistics",
        "PS": "Probability & Statistics",
        "NC": "Numerical Computing",
        "NA": "Numerical Analysis",
        "GT": "Graph Theory",
        "AP": "Applied Physics",
        "AP Lab": "Applied Physics Lab",
        # Humanities and writing
        "TBW": "Technical & Business Writing",
        "FE": "Functional English",
        "FE Lab": "Functional English Lab",
        "EW": "Expository Writing",
        "CCS": "Communication & Presentation Skills",
        "PP": "Professional Practices",
        "PST": "Pakistan Studies",
        "ISL": "Islamic Studies",
        "ENT": "Entrepreneurship",
        "MKT": "Marketing Management",
        "SOC": "Introduction to Sociology",
        "PSY": "Introduction to Psychology",
    }
)


# ---------------------------------------------------------------------------
# Time slots
# ---------------------------------------------------------------------------

TIME_SLOTS: Mapping[int, str] = MappingProxyType(
    {
        1: "08:00-08:50",
        2: "08:55-09:45",
        3: "09:50-10:40",
        4: "10:45-11:35",
        5: "11:40-12:30",
        6: "12:35-13:25",
        7: "13:30-14:20",
        8: "14:25-15:15",
        9: "15:20-16:05",
    }
)

SLOT_COUNT = len(TIME_SLOTS)


def course_name_for(course_code: str) -> str:
    """
    Return the full name of a course code, or the code itself if unknown.
    """
    return COURSE_NAMES.get(course_code, course_code)


def time_slot_for(slot_number: int) -> str:
    """
    Return "HH:MM-HH:MM" for a slot number, or "Slot N" if unknown.
    """
    return TIME_SLOTS.get(slot_number, f"Slot {slot_number}")


def split_time_range(time_slot: str) -> Optional[Tuple[str, str]]:
    """
    Split "HH:MM-HH:MM" into ("HH:MM", "HH:MM").

    Returns None for anything else (e.g. the "Slot N" fallback).
    """
    if "-" not in time_slot:
        return None
    start, end = [t.strip() for t in time_slot.split("-", 1)]
    if ":" not in start or ":" not in end:
        return None
    return start, end
