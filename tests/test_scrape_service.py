from __future__ import annotations

import json
from pathlib import Path

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By

from fakes import FakeDriver, FakeElement
from grade_scraper.automation import extractors, login, navigation
from grade_scraper.automation.chrome import BrowserLaunchError
from grade_scraper.automation.extractors import wait_for_stream_items
from grade_scraper.automation.navigation import FrameNotFoundError, navigate_frame
from grade_scraper.config.settings import AuthCredentials, Settings
from grade_scraper.models import CourseRecord, GradeItem
from grade_scraper.services import ScrapeResult, run_scrape


class FakeSession:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.driver = FakeDriver()
        self.open_calls = 0
        self.close_calls = 0

    def open(self):
        self.open_calls += 1
        if self.error is not None:
            raise self.error
        return self.driver

    def close(self) -> None:
        self.close_calls += 1


class FakePortal:
    """Replaces the browser steps with canned course and grade data."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self.calls: list[str] = []
        self.frames: list[str] = []
        self.frame_urls: list[str] = []
        self.current_url: str | None = None
        self.grades = {
            "https://blackboard.unist.ac.kr/webapps/grades?id=1": [
                GradeItem(title="HW1", score="18", due="Mar 10", type="Homework",
                          submitted="Mar 9", status="Graded", total="20"),
            ],
            "https://blackboard.unist.ac.kr/webapps/grades?id=2": [],
        }

        monkeypatch.setattr(login, "load_login_page", self.load_login_page)
        monkeypatch.setattr(login, "dismiss_cookie_consent", self.dismiss_cookie_consent)
        monkeypatch.setattr(login, "submit_credentials", self.submit_credentials)
        monkeypatch.setattr(navigation, "open_grades_overview", self.open_grades_overview)
        monkeypatch.setattr(navigation, "enter_frame", self.enter_frame)
        monkeypatch.setattr(navigation, "navigate_frame", self.navigate_frame)
        monkeypatch.setattr(extractors, "wait_for_stream_items", lambda driver, timeout: None)
        monkeypatch.setattr(extractors, "parse_course_list", self.parse_course_list)
        monkeypatch.setattr(extractors, "parse_grade_items", self.parse_grade_items)

    def load_login_page(self, driver, url):
        self.calls.append("load_login_page")

    def dismiss_cookie_consent(self, driver, timeout):
        self.calls.append("dismiss_cookie_consent")
        return False

    def submit_credentials(self, driver, credentials, timeout):
        self.calls.append(f"submit_credentials:{credentials.username}")

    def open_grades_overview(self, driver, url):
        self.calls.append("open_grades_overview")

    def enter_frame(self, driver, name, timeout):
        self.frames.append(name)

    def navigate_frame(self, driver, url, ready_selector, *, navigation_timeout, ready_timeout):
        self.frame_urls.append(url)
        self.current_url = url

    def parse_course_list(self, driver):
        return [
            CourseRecord("Algorithms I", "92%", "3/1", grade_url="webapps/grades?id=1"),
            CourseRecord("Seminar", "-", "-", grade_url="/webapps/grades?id=2"),
        ]

    def parse_grade_items(self, driver):
        return list(self.grades[self.current_url])


@pytest.fixture
def portal(monkeypatch: pytest.MonkeyPatch) -> FakePortal:
    return FakePortal(monkeypatch)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings.from_env({}).with_overrides(output_path=tmp_path / "courses_data.json")


@pytest.fixture
def credentials() -> AuthCredentials:
    return AuthCredentials("20231234", "hunter2")


def test_run_scrape_writes_populated_courses(portal, settings, credentials):
    session = FakeSession()

    result = run_scrape(settings, credentials, session=session)

    assert result
    assert result.output_path == settings.output_path
    assert session.close_calls == 1
    assert portal.calls == [
        "load_login_page",
        "dismiss_cookie_consent",
        "submit_credentials:20231234",
        "open_grades_overview",
    ]
    assert portal.frames == ["mybbCanvas", "right_stream_mygrades"]
    assert portal.frame_urls == [
        "https://blackboard.unist.ac.kr/webapps/grades?id=1",
        "https://blackboard.unist.ac.kr/webapps/grades?id=2",
    ]

    data = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert [course["courseName"] for course in data] == ["Algorithms I", "Seminar"]
    assert all("gradeUrl" not in course for course in data)
    assert data[0]["items"][0]["total"] == "20"
    assert data[1]["items"] == []
    assert all(course.grade_url is None for course in result.courses)


def test_grade_failure_aborts_without_output(portal, settings, credentials, monkeypatch):
    def broken_parse(driver):
        if portal.current_url.endswith("id=2"):
            raise TimeoutException("grades wrapper never appeared")
        return []

    monkeypatch.setattr(extractors, "parse_grade_items", broken_parse)
    session = FakeSession()

    result = run_scrape(settings, credentials, session=session)

    assert not result
    assert result.stage == "grades"
    assert result.summary == "Error parsing grades."
    assert "grades wrapper never appeared" in result.details
    assert session.close_calls == 1
    assert not settings.output_path.exists()


def test_missing_summary_frame_is_reported(portal, settings, credentials, monkeypatch):
    def missing_frame(driver, name, timeout):
        raise FrameNotFoundError(name, timeout)

    monkeypatch.setattr(navigation, "enter_frame", missing_frame)
    session = FakeSession()

    result = run_scrape(settings, credentials, session=session)

    assert result.stage == "courses"
    assert "mybbCanvas" in result.details
    assert session.close_calls == 1
    assert not settings.output_path.exists()


def test_login_page_failure_stops_before_credentials(portal, settings, credentials, monkeypatch):
    def unreachable(driver, url):
        raise WebDriverException("net::ERR_NAME_NOT_RESOLVED")

    monkeypatch.setattr(login, "load_login_page", unreachable)
    session = FakeSession()

    result = run_scrape(settings, credentials, session=session)

    assert result.stage == "login_page"
    assert result.formatted_lines()[0] == "Error loading page."
    assert not any(call.startswith("submit_credentials") for call in portal.calls)
    assert session.close_calls == 1


def test_browser_launch_failure_is_reported(portal, settings, credentials):
    session = FakeSession(error=BrowserLaunchError("chrome not found"))

    result = run_scrape(settings, credentials, session=session)

    assert result.stage == "browser"
    assert result.details == "chrome not found"
    assert session.close_calls == 1
    assert portal.calls == []


def test_write_failure_is_reported(portal, tmp_path, credentials):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    settings = Settings.from_env({}).with_overrides(output_path=blocker / "courses_data.json")

    result = run_scrape(settings, credentials, session=FakeSession())

    assert result.stage == "export"
    assert isinstance(result, ScrapeResult)


def test_missing_grades_wrapper_times_out_as_grade_failure(portal, settings, credentials, monkeypatch):
    monkeypatch.setattr(navigation, "navigate_frame", navigate_frame)
    previous_document = FakeElement()
    previous_document.stale = True
    session = FakeSession()
    session.driver.elements[(By.TAG_NAME, "html")] = previous_document
    settings = settings.with_overrides(page_load_timeout=0.01, grades_wrapper_timeout=0.01)

    result = run_scrape(settings, credentials, session=session)

    assert result.stage == "grades"
    assert result.summary == "Error parsing grades."
    assert session.close_calls == 1
    assert not settings.output_path.exists()


def test_empty_course_list_times_out_as_course_failure(portal, settings, credentials, monkeypatch):
    monkeypatch.setattr(extractors, "wait_for_stream_items", wait_for_stream_items)
    session = FakeSession()
    settings = settings.with_overrides(course_list_timeout=0.01)

    result = run_scrape(settings, credentials, session=session)

    assert result.stage == "courses"
    assert result.summary == "Error parsing courses."
    assert portal.frames == ["mybbCanvas"]
    assert session.close_calls == 1
    assert not settings.output_path.exists()
