"""Timetable CSV parser and section course catalog."""
