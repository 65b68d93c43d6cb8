from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

NO_DUE_DATE = "No Due Date"
NO_TYPE = "No Type"
NOT_SUBMITTED = "Not Submitted"
NO_STATUS = "No Status"
NO_TOTAL = "No Total"
NO_TIMESTAMP = "-"


@dataclass(slots=True)
class GradeItem:
    title: str
    score: str
    due: str = NO_DUE_DATE
    type: str = NO_TYPE
    submitted: str = NOT_SUBMITTED
    status: str = NO_STATUS
    total: str = NO_TOTAL

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "due": self.due,
            "type": self.type,
            "submitted": self.submitted,
            "status": self.status,
            "score": self.score,
            "total": self.total,
        }


@dataclass(slots=True)
class CourseRecord:
    course_name: str
    grade_value: str
    last_updated: str = NO_TIMESTAMP
    grade_url: Optional[str] = None
    items: list[GradeItem] = field(default_factory=list)

    @property
    def is_populated(self) -> bool:
        return self.grade_url is None

    def attach_items(self, items: list[GradeItem]) -> None:
        """Store the extracted grade items and drop the transient detail URL."""
        if self.grade_url is None:
            raise ValueError(f"Grade items for {self.course_name!r} were already attached.")
        self.items = list(items)
        self.grade_url = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "courseName": self.course_name,
            "gradeValue": self.grade_value,
            "lastUpdated": self.last_updated,
            "items": [item.to_dict() for item in self.items],
        }
