from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service

try:  # pragma: no cover - import guard for static analysis
    from webdriver_manager.chrome import ChromeDriverManager
except ImportError as exc:  # pragma: no cover - missing dependency
    raise RuntimeError(
        "webdriver-manager is required for Chrome automation support."
    ) from exc

from grade_scraper.config.settings import Settings

logger = logging.getLogger(__name__)


class BrowserLaunchError(RuntimeError):
    """Raised when the automated Chrome session cannot be launched."""


@dataclass(slots=True)
class ChromeSession:
    """Own a single Chrome WebDriver for the lifetime of one scrape."""

    headless: bool = True
    binary_path: Optional[Path] = None
    driver_path: Optional[Path] = None
    page_load_timeout: float = 60.0
    _driver: Optional[webdriver.Chrome] = field(init=False, default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChromeSession":
        return cls(
            headless=settings.headless,
            binary_path=settings.chrome_binary_path,
            driver_path=settings.selenium_driver_path,
            page_load_timeout=settings.page_load_timeout,
        )

    @property
    def driver(self) -> webdriver.Chrome:
        if self._driver is None:
            raise BrowserLaunchError("Browser session has not been opened.")
        return self._driver

    def open(self) -> webdriver.Chrome:
        """Launch Chrome, or return the driver if it is already running."""
        if self._driver is not None:
            return self._driver

        options = self._build_options()
        driver_path = self.driver_path
        if driver_path is None:
            try:
                driver_path = Path(ChromeDriverManager().install())
            except Exception as exc:  # webdriver-manager raises a mix of network and OS errors
                raise BrowserLaunchError(f"Could not resolve chromedriver: {exc}") from exc
        service = Service(str(driver_path))

        try:
            driver = webdriver.Chrome(service=service, options=options)
        except WebDriverException as exc:
            raise BrowserLaunchError(f"Failed to launch Chrome: {exc.msg or exc}") from exc

        driver.set_page_load_timeout(self.page_load_timeout)
        self._driver = driver
        logger.debug("Chrome started (headless=%s).", self.headless)
        return driver

    def close(self) -> None:
        if self._driver is None:
            return
        driver, self._driver = self._driver, None
        try:
            driver.quit()
        except WebDriverException as exc:
            logger.error("Error closing browser.\t%s", exc)

    def __enter__(self) -> webdriver.Chrome:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_options(self) -> Options:
        options = Options()
        # "eager" returns once DOMContentLoaded fires
        options.page_load_strategy = "eager"
        if self.headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-first-run")
        options.add_argument("--no-default-browser-check")
        if sys.platform.startswith("linux"):
            options.add_argument("--disable-dev-shm-usage")
        if self.binary_path is not None:
            options.binary_location = str(self.binary_path)
        return options
