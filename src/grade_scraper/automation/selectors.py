# DOM contract of the Blackboard portal pages.

# Login page
COOKIE_AGREE_BUTTON = "#agree_button"
USERNAME_INPUT = "#user_id"
PASSWORD_INPUT = "#password"
LOGIN_BUTTON = "#entry-login"

# Summary frame (course stream)
STREAM_ITEM = ".stream_item"
STREAM_COURSE_NAME = ".stream_area_name"
STREAM_GRADE_VALUE = ".grade-value"
STREAM_DATESTAMP = ".stream_datestamp"
STREAM_DETAIL_ATTRIBUTE = "bb:rhs"

# Detail frame (per-course grade table)
GRADES_WRAPPER = "#grades_wrapper"
GRADE_ROW = ".sortable_item_row:not(.calculatedRow)"
ROW_TITLE = ".cell.gradable"
ROW_DUE = ".gradable > .activityType"
ROW_TYPE = ".itemCat"
ROW_SUBMITTED = ".lastActivityDate"
ROW_STATUS = ".timestamp > .activityType"
ROW_SCORE = ".grade > .grade"
ROW_TOTAL = ".pointsPossible"
ROW_PASS_FAIL = ".gradeStatus > span > span"
