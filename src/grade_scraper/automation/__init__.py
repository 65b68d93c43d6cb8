from .chrome import BrowserLaunchError, ChromeSession
from .extractors import (
	FieldRule,
	parse_course_list,
	parse_grade_items,
	wait_for_stream_items,
)
from .login import dismiss_cookie_consent, load_login_page, submit_credentials
from .navigation import (
	FrameNotFoundError,
	enter_frame,
	navigate_frame,
	open_grades_overview,
	resolve_grade_url,
)

__all__ = [
	"BrowserLaunchError",
	"ChromeSession",
	"FieldRule",
	"FrameNotFoundError",
	"dismiss_cookie_consent",
	"enter_frame",
	"load_login_page",
	"navigate_frame",
	"open_grades_overview",
	"parse_course_list",
	"parse_grade_items",
	"resolve_grade_url",
	"submit_credentials",
	"wait_for_stream_items",
]
