"""
Package entry point.

Allows running the application via:

    python -m timetable_catalog

This simply forwards execution to timetable_catalog.cli.main().
"""

from timetable_catalog.cli import main

if __name__ == "__main__":
    main()
