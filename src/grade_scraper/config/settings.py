from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[3]
ENV_PATH = BASE_DIR / ".env"
load_dotenv(ENV_PATH)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://blackboard.unist.ac.kr/"
DEFAULT_GRADES_PATH = (
    "webapps/bb-social-learning-BB5a8801a04ee83/execute/mybb"
    "?cmd=display&toolId=MyGradesOnMyBb_____MyGradesTool"
)
DEFAULT_OUTPUT_PATH = "courses_data.json"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s.", key, raw, default)
        return default


def _env_path(environ: Mapping[str, str], key: str) -> Optional[Path]:
    raw = environ.get(key)
    return Path(raw).expanduser() if raw else None


@dataclass(frozen=True)
class AuthCredentials:
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AuthCredentials":
        """Read the portal login from PORTAL_USERNAME/PORTAL_PASSWORD.

        USERNAME and PASSWORD are accepted as a fallback. Missing values are
        not rejected here; the login form will fail downstream instead.
        """
        env = os.environ if environ is None else environ
        username = env.get("PORTAL_USERNAME") or env.get("USERNAME") or ""
        password = env.get("PORTAL_PASSWORD") or env.get("PASSWORD") or ""
        if not username or not password:
            logger.warning("Portal username or password is not set; login will likely fail.")
        return cls(username=username, password=password)


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    login_url: str = DEFAULT_BASE_URL
    grades_url: str = DEFAULT_BASE_URL + DEFAULT_GRADES_PATH
    summary_frame_name: str = "mybbCanvas"
    detail_frame_name: str = "right_stream_mygrades"
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    headless: bool = True
    chrome_binary_path: Path | None = None
    selenium_driver_path: Path | None = None
    page_load_timeout: float = 60.0
    cookie_consent_timeout: float = 5.0
    login_timeout: float = 30.0
    frame_timeout: float = 30.0
    course_list_timeout: float = 10.0
    grades_wrapper_timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        base_url = env.get("PORTAL_BASE_URL") or DEFAULT_BASE_URL
        if not base_url.endswith("/"):
            base_url += "/"
        return cls(
            base_url=base_url,
            login_url=base_url,
            grades_url=env.get("PORTAL_GRADES_URL") or base_url + DEFAULT_GRADES_PATH,
            output_path=Path(env.get("OUTPUT_PATH") or DEFAULT_OUTPUT_PATH),
            headless=_env_flag(env, "HEADLESS", True),
            chrome_binary_path=_env_path(env, "CHROME_BINARY_PATH"),
            selenium_driver_path=_env_path(env, "SELENIUM_DRIVER_PATH"),
            page_load_timeout=_env_float(env, "PAGE_LOAD_TIMEOUT", 60.0),
            frame_timeout=_env_float(env, "FRAME_TIMEOUT", 30.0),
        )

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def __print__(self) -> str:
        return (
            f"Settings(base_url={self.base_url}, "
            f"grades_url={self.grades_url}, "
            f"output_path={self.output_path}, "
            f"headless={self.headless}, "
            f"chrome_binary_path={self.chrome_binary_path}, "
            f"selenium_driver_path={self.selenium_driver_path}, "
            f"frame_timeout={self.frame_timeout})"
        )


settings = Settings.from_env()
