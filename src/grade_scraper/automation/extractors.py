"""Turn the Blackboard grade widgets into course and grade item records.

Every output field is described by a :class:`FieldRule`: a CSS selector
looked up inside the row, an optional fallback used when the element is
missing (or blank), and an optional text transform. Rules without a fallback
are required and raise ``NoSuchElementException`` when the element is absent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from grade_scraper.automation import selectors
from grade_scraper.models import (
    NO_DUE_DATE,
    NO_STATUS,
    NO_TIMESTAMP,
    NO_TOTAL,
    NO_TYPE,
    NOT_SUBMITTED,
    CourseRecord,
    GradeItem,
)

logger = logging.getLogger(__name__)


class ElementLike(Protocol):
    """The slice of Selenium's ``WebElement`` the extractors rely on."""

    @property
    def text(self) -> str: ...

    def find_elements(self, by: str, value: str) -> list: ...

    def get_attribute(self, name: str) -> Optional[str]: ...


def first_line(text: str) -> str:
    return text.split("\n")[0]


def strip_points_prefix(text: str) -> str:
    # "/20" -> "20"
    return text.replace("/", "", 1)


def query(context: ElementLike, selector: str) -> Optional[ElementLike]:
    """Return the first descendant matching ``selector``, or None."""
    matches = context.find_elements(By.CSS_SELECTOR, selector)
    return matches[0] if matches else None


@dataclass(frozen=True, slots=True)
class FieldRule:
    name: str
    selector: str
    fallback: Optional[str] = None
    transform: Optional[Callable[[str], str]] = None

    @property
    def required(self) -> bool:
        return self.fallback is None

    def resolve(self, context: ElementLike) -> str:
        element = query(context, self.selector)
        if element is None:
            if self.required:
                raise NoSuchElementException(
                    f"Required field {self.name!r} missing: no element matches {self.selector!r}"
                )
            return self.fallback

        text = element.text
        if not self.required and not text.strip():
            return self.fallback
        return self.transform(text) if self.transform else text


COURSE_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("course_name", selectors.STREAM_COURSE_NAME),
    FieldRule("grade_value", selectors.STREAM_GRADE_VALUE),
    FieldRule("last_updated", selectors.STREAM_DATESTAMP, NO_TIMESTAMP),
)

GRADE_ITEM_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("title", selectors.ROW_TITLE, transform=first_line),
    FieldRule("due", selectors.ROW_DUE, NO_DUE_DATE),
    FieldRule("type", selectors.ROW_TYPE, NO_TYPE),
    FieldRule("submitted", selectors.ROW_SUBMITTED, NOT_SUBMITTED),
    FieldRule("status", selectors.ROW_STATUS, NO_STATUS),
    FieldRule("score", selectors.ROW_SCORE),
    FieldRule("total", selectors.ROW_TOTAL, NO_TOTAL, transform=strip_points_prefix),
)

PASS_FAIL_FIELD_RULES: tuple[FieldRule, ...] = tuple(
    rule for rule in GRADE_ITEM_FIELD_RULES if rule.name not in {"score", "total"}
)


def apply_rules(context: ElementLike, rules: Sequence[FieldRule]) -> dict[str, str]:
    return {rule.name: rule.resolve(context) for rule in rules}


# ----------------------------------------------------------------------
# Course list (summary frame)
# ----------------------------------------------------------------------
def wait_for_stream_items(driver: WebDriver, timeout: float) -> None:
    WebDriverWait(driver, timeout).until(
        EC.presence_of_element_located((By.CSS_SELECTOR, selectors.STREAM_ITEM))
    )


def parse_course(stream_item: ElementLike) -> CourseRecord:
    fields = apply_rules(stream_item, COURSE_FIELD_RULES)
    grade_url = stream_item.get_attribute(selectors.STREAM_DETAIL_ATTRIBUTE)
    if not grade_url:
        raise NoSuchElementException(
            f"Stream item {fields['course_name']!r} has no {selectors.STREAM_DETAIL_ATTRIBUTE} link"
        )
    return CourseRecord(grade_url=grade_url, **fields)


def parse_course_list(context: ElementLike) -> list[CourseRecord]:
    """Build one record per stream item, in document order."""
    return [
        parse_course(stream_item)
        for stream_item in context.find_elements(By.CSS_SELECTOR, selectors.STREAM_ITEM)
    ]


# ----------------------------------------------------------------------
# Grade items (detail frame)
# ----------------------------------------------------------------------
def parse_grade_row(row: ElementLike) -> GradeItem:
    # pass/fail items carry their result in a status badge and have no total
    pass_fail = query(row, selectors.ROW_PASS_FAIL)
    if pass_fail is None:
        return GradeItem(**apply_rules(row, GRADE_ITEM_FIELD_RULES))

    fields = apply_rules(row, PASS_FAIL_FIELD_RULES)
    return GradeItem(score=pass_fail.text, total=NO_TOTAL, **fields)


def parse_grade_items(context: ElementLike) -> list[GradeItem]:
    """Extract every gradable row, skipping calculated total rows."""
    rows = context.find_elements(By.CSS_SELECTOR, selectors.GRADE_ROW)
    logger.debug("Found %d graded rows.", len(rows))
    return [parse_grade_row(row) for row in rows]


__all__ = [
    "COURSE_FIELD_RULES",
    "GRADE_ITEM_FIELD_RULES",
    "PASS_FAIL_FIELD_RULES",
    "FieldRule",
    "apply_rules",
    "first_line",
    "parse_course",
    "parse_course_list",
    "parse_grade_items",
    "parse_grade_row",
    "query",
    "strip_points_prefix",
    "wait_for_stream_items",
]
