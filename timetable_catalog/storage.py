"""
Persistent storage for the parsed catalog.

The catalog is written to:

    data/timetable/timetable.json

as a small document with summary statistics around the catalog itself:

    {
      "totalSections": 42,
      "totalCourses": 310,
      "daysProcessed": 5,
      "lastUpdated": "2025-09-01T10:00:00+00:00",
      "data": {"BCS-5B": [...], ...}
    }

The web app fetches this file as-is, so the layout must stay stable.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from timetable_catalog.model import Catalog


def build_document(catalog: Catalog, days_processed: int) -> dict[str, Any]:
    """
    Wrap a catalog with the statistics stored next to it.
    """
    return {
        "totalSections": len(catalog),
        "totalCourses": sum(len(courses) for courses in catalog.values()),
        "daysProcessed": days_processed,
        "lastUpdated": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "data": catalog,
    }


def save_catalog(catalog: Catalog, path: str | Path, days_processed: int) -> dict[str, Any]:
    """
    Save the catalog document to path and return it.

    Creates parent directories if needed.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    document = build_document(catalog, days_processed)
    out.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    return document


def load_catalog(path: str | Path) -> Catalog:
    """
    Load the catalog from a timetable.json file.

    Accepts both the full document and a bare {section: courses} mapping.
    Returns an empty catalog if the file is missing or invalid, so the CLI
    never crashes on a fresh checkout.
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        return {}

    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return {}

    if not isinstance(raw, dict):
        return {}

    data = raw.get("data", raw)
    if not isinstance(data, dict):
        return {}

    # keep only well-formed sections
    out: Catalog = {}
    for section, courses in data.items():
        if isinstance(section, str) and isinstance(courses, list):
            out[section] = [c for c in courses if isinstance(c, dict)]
    return out
