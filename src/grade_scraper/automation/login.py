from __future__ import annotations

import logging

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from grade_scraper.automation import selectors
from grade_scraper.config.settings import AuthCredentials

logger = logging.getLogger(__name__)


def load_login_page(driver: WebDriver, url: str) -> None:
    logger.info("Loading login page.")
    driver.get(url)


def dismiss_cookie_consent(driver: WebDriver, timeout: float = 5.0) -> bool:
    """Click the cookie consent button if it shows up within ``timeout``.

    Returns False when the dialog never appears; that is not an error.
    """
    logger.info("Accepting cookies.")
    try:
        button = WebDriverWait(driver, timeout).until(
            EC.element_to_be_clickable((By.CSS_SELECTOR, selectors.COOKIE_AGREE_BUTTON))
        )
        button.click()
    except (TimeoutException, WebDriverException):
        logger.info("Agree to cookies element didn't appear.")
        return False
    return True


def submit_credentials(
    driver: WebDriver,
    credentials: AuthCredentials,
    timeout: float = 30.0,
) -> None:
    """Type the credentials, press login and wait for the next page to load."""
    logger.info("Entering username and password.")
    wait = WebDriverWait(driver, timeout)

    username_field = wait.until(
        EC.element_to_be_clickable((By.CSS_SELECTOR, selectors.USERNAME_INPUT))
    )
    username_field.click()
    username_field.send_keys(credentials.username)

    password_field = driver.find_element(By.CSS_SELECTOR, selectors.PASSWORD_INPUT)
    password_field.click()
    password_field.send_keys(credentials.password)

    login_button = driver.find_element(By.CSS_SELECTOR, selectors.LOGIN_BUTTON)
    login_button.click()
    # the login page going stale marks the post-login navigation
    wait.until(EC.staleness_of(login_button))


__all__ = [
    "dismiss_cookie_consent",
    "load_login_page",
    "submit_credentials",
]
