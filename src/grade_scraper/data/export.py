from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from grade_scraper.models import CourseRecord

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """Raised when the scraped courses cannot be written to disk."""


def render_courses(courses: Iterable[CourseRecord]) -> str:
    records = list(courses)
    pending = [course.course_name for course in records if not course.is_populated]
    if pending:
        raise ExportError(f"Grade items were never extracted for: {', '.join(pending)}")
    return json.dumps([course.to_dict() for course in records], indent=4, ensure_ascii=False)


def write_courses(path: Path, courses: Iterable[CourseRecord]) -> Path:
    """Serialize the courses as indented JSON, replacing any existing file."""
    payload = render_courses(courses)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            handle.write(payload)
    except OSError as exc:
        raise ExportError(f"Could not write {path}: {exc}") from exc
    logger.info("Wrote grades to %s.", path)
    return path
