from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Protocol

from selenium.webdriver.remote.webdriver import WebDriver

from grade_scraper.automation import extractors, login, navigation, selectors
from grade_scraper.automation.chrome import BrowserLaunchError, ChromeSession
from grade_scraper.config.settings import AuthCredentials, Settings
from grade_scraper.data import ExportError, write_courses
from grade_scraper.models import CourseRecord

logger = logging.getLogger(__name__)


class ScrapeStageError(RuntimeError):
    """Raised when a pipeline stage fails; the run cannot continue past it."""

    def __init__(self, stage: str, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}\t{self.cause}"


@dataclass(slots=True)
class ScrapeResult:
    success: bool
    summary: str
    stage: Optional[str] = None
    details: Optional[str] = None
    courses: list[CourseRecord] = field(default_factory=list)
    output_path: Optional[Path] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def success_result(
        cls,
        summary: str,
        *,
        courses: list[CourseRecord],
        output_path: Path,
    ) -> "ScrapeResult":
        return cls(
            success=True,
            summary=summary,
            courses=courses,
            output_path=output_path,
        )

    @classmethod
    def failure_result(
        cls,
        stage: str,
        summary: str,
        *,
        details: Optional[str] = None,
    ) -> "ScrapeResult":
        return cls(success=False, summary=summary, stage=stage, details=details)

    def formatted_lines(self) -> list[str]:
        lines = [self.summary]
        if self.details:
            lines.extend(detail.strip() for detail in self.details.splitlines() if detail.strip())
        return lines


class BrowserSession(Protocol):
    def open(self) -> WebDriver: ...

    def close(self) -> None: ...


@contextmanager
def _stage(stage: str, message: str) -> Iterator[None]:
    try:
        yield
    except ScrapeStageError:
        raise
    except Exception as exc:
        raise ScrapeStageError(stage, message, exc) from exc


class GradeScrapeService:
    """Drive an open browser from the login page to fully populated course records."""

    def __init__(self, driver: WebDriver, settings: Settings, credentials: AuthCredentials) -> None:
        self._driver = driver
        self._settings = settings
        self._credentials = credentials

    def sign_in(self) -> None:
        with _stage("login_page", "Error loading page."):
            login.load_login_page(self._driver, self._settings.login_url)

        login.dismiss_cookie_consent(self._driver, self._settings.cookie_consent_timeout)

        with _stage("credentials", "Error entering username and password."):
            login.submit_credentials(self._driver, self._credentials, self._settings.login_timeout)

    def open_grades(self) -> None:
        with _stage("grades_page", "Error navigating to grades."):
            navigation.open_grades_overview(self._driver, self._settings.grades_url)

    def collect_courses(self) -> list[CourseRecord]:
        """Enter the summary frame and read one record per course."""
        logger.info("Parsing Courses")
        with _stage("courses", "Error parsing courses."):
            navigation.enter_frame(
                self._driver, self._settings.summary_frame_name, self._settings.frame_timeout
            )
            extractors.wait_for_stream_items(self._driver, self._settings.course_list_timeout)
            return extractors.parse_course_list(self._driver)

    def collect_grades(self, courses: list[CourseRecord]) -> list[CourseRecord]:
        """Populate each course from the detail frame, one course at a time.

        Must run while the driver is still inside the summary frame.
        """
        logger.info("Parsing Grades")
        with _stage("grades", "Error parsing grades."):
            navigation.enter_frame(
                self._driver, self._settings.detail_frame_name, self._settings.frame_timeout
            )
            for course in courses:
                url = navigation.resolve_grade_url(self._settings.base_url, course.grade_url or "")
                navigation.navigate_frame(
                    self._driver,
                    url,
                    selectors.GRADES_WRAPPER,
                    navigation_timeout=self._settings.page_load_timeout,
                    ready_timeout=self._settings.grades_wrapper_timeout,
                )
                logger.info('Parsing grades for "%s".', course.course_name)
                course.attach_items(extractors.parse_grade_items(self._driver))
        return courses

    def scrape(self) -> list[CourseRecord]:
        self.sign_in()
        self.open_grades()
        courses = self.collect_courses()
        return self.collect_grades(courses)


def run_scrape(
    settings: Settings,
    credentials: AuthCredentials,
    *,
    session: Optional[BrowserSession] = None,
) -> ScrapeResult:
    """Run the whole pipeline once and write the JSON output.

    The browser is closed on every path. Nothing is written unless every
    course was scraped.
    """
    session = session if session is not None else ChromeSession.from_settings(settings)

    try:
        driver = session.open()
        courses = GradeScrapeService(driver, settings, credentials).scrape()
        logger.info("Complete, %d courses scraped. Closing browser.", len(courses))
    except BrowserLaunchError as exc:
        logger.debug("Browser launch failed.", exc_info=True)
        return ScrapeResult.failure_result("browser", "Error launching browser.", details=str(exc))
    except ScrapeStageError as exc:
        logger.debug("Stage %s failed.", exc.stage, exc_info=True)
        return ScrapeResult.failure_result(
            exc.stage,
            exc.message,
            details=str(exc.cause) if exc.cause is not None else None,
        )
    finally:
        session.close()

    try:
        output_path = write_courses(settings.output_path, courses)
    except ExportError as exc:
        logger.debug("Export failed.", exc_info=True)
        return ScrapeResult.failure_result("export", "Error writing output.", details=str(exc))

    return ScrapeResult.success_result(
        f"Scraped {len(courses)} courses into {output_path}.",
        courses=courses,
        output_path=output_path,
    )


__all__ = [
    "BrowserSession",
    "GradeScrapeService",
    "ScrapeResult",
    "ScrapeStageError",
    "run_scrape",
]
