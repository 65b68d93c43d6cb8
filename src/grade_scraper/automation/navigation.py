from __future__ import annotations

import logging
from urllib.parse import urljoin

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

logger = logging.getLogger(__name__)


class FrameNotFoundError(RuntimeError):
    """Raised when a named frame does not attach within the allowed time."""

    def __init__(self, frame_name: str, timeout: float) -> None:
        super().__init__(f"Frame {frame_name!r} did not appear within {timeout:g} seconds.")
        self.frame_name = frame_name
        self.timeout = timeout


def open_grades_overview(driver: WebDriver, url: str) -> None:
    logger.info("Navigating to grades.")
    driver.switch_to.default_content()
    driver.get(url)


def enter_frame(driver: WebDriver, frame_name: str, timeout: float) -> None:
    """Switch into the frame called ``frame_name`` once it exists.

    The lookup is relative to the current browsing context, so nested frames
    are entered one level at a time.
    """
    try:
        WebDriverWait(driver, timeout).until(
            EC.frame_to_be_available_and_switch_to_it((By.NAME, frame_name))
        )
    except TimeoutException as exc:
        raise FrameNotFoundError(frame_name, timeout) from exc
    logger.debug("Switched into frame %r.", frame_name)


def navigate_frame(
    driver: WebDriver,
    url: str,
    ready_selector: str,
    *,
    navigation_timeout: float,
    ready_timeout: float,
) -> None:
    """Point the current frame at ``url`` and wait until ``ready_selector`` shows up.

    Waiting for the previous document to go stale first keeps the ready check
    from matching the page that was loaded before.
    """
    previous_document = driver.find_element(By.TAG_NAME, "html")
    driver.execute_script("window.location.href = arguments[0];", url)
    WebDriverWait(driver, navigation_timeout).until(EC.staleness_of(previous_document))
    WebDriverWait(driver, ready_timeout).until(
        EC.presence_of_element_located((By.CSS_SELECTOR, ready_selector))
    )


def resolve_grade_url(base_url: str, relative_path: str) -> str:
    return urljoin(base_url, relative_path)


__all__ = [
    "FrameNotFoundError",
    "enter_frame",
    "navigate_frame",
    "open_grades_overview",
    "resolve_grade_url",
]
