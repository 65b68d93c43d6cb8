from .grades import (
    NO_DUE_DATE,
    NO_STATUS,
    NO_TIMESTAMP,
    NO_TOTAL,
    NO_TYPE,
    NOT_SUBMITTED,
    CourseRecord,
    GradeItem,
)

__all__ = [
    "CourseRecord",
    "GradeItem",
    "NO_DUE_DATE",
    "NO_STATUS",
    "NO_TIMESTAMP",
    "NO_TOTAL",
    "NO_TYPE",
    "NOT_SUBMITTED",
]
