"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_UPCOMING_LIMIT = 5
DEFAULT_ACTIVITY_LIMIT = 10
DEFAULT_TOKEN_HOURS = 24
MIN_PASSWORD_LENGTH = 6

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Column limits, mirrored in database/schema.sql
MEETING_TITLE_MAX = 500
MEETING_DESCRIPTION_MAX = 2500
DOCUMENT_PATH_MAX = 250
REMARKS_MAX = 500
CANCELLATION_REASON_MAX = 500
STAFF_NAME_MAX = 250
STAFF_MOBILE_MAX = 20
EMAIL_MAX = 100
DEPARTMENT_MAX = 100
MEETING_TYPE_NAME_MAX = 250
DOCUMENT_NAME_MAX = 250
FILE_TYPE_MAX = 50
# meeting_documents.sequence is DECIMAL(10,2)
SEQUENCE_MAX = Decimal("99999999.99")
SEQUENCE_STEP = Decimal("0.01")
USER_NAME_MAX = 150
USER_MOBILE_MAX = 15

DASHBOARD_PERIODS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "1y": 365,
}
DEFAULT_DASHBOARD_PERIOD = "30d"

ALLOWED_UPLOAD_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
        "image/jpeg",
        "image/png",
        "image/gif",
    }
)
