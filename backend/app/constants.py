"""Application-wide constants."""
import enum


class EventType(str, enum.Enum):
    """Kinds of telemetry events recorded by the widget."""
    ERROR = "ERROR"
    ACTION = "ACTION"
    PERFORMANCE = "PERFORMANCE"
    NETWORK = "NETWORK"
    CUSTOM = "CUSTOM"


class Tag(str, enum.Enum):
    """Report tags selectable in the widget and dashboard."""
    NO_SUITABLE_TAG = "NO_SUITABLE_TAG"
    BROKEN_LINK = "BROKEN_LINK"
    SLOW_LOADING = "SLOW_LOADING"
    BLANK_SCREEN = "BLANK_SCREEN"
    INTERFACE_ISSUE = "INTERFACE_ISSUE"
    FUNCTIONALITY_PROBLEMS = "FUNCTIONALITY_PROBLEMS"
    BROKEN_IMAGE = "BROKEN_IMAGE"
    SEARCH_PROBLEM = "SEARCH_PROBLEM"
    FORM_NOT_WORKING = "FORM_NOT_WORKING"
    MOBILE_VIEW = "MOBILE_VIEW"
    REDIRECT_LOOP = "REDIRECT_LOOP"
    LOGIN_ISSUE = "LOGIN_ISSUE"
    REGISTER_ISSUE = "REGISTER_ISSUE"
    FILTERS_NOT_WORKING = "FILTERS_NOT_WORKING"
    PAGINATION_ISSUE = "PAGINATION_ISSUE"


class CriticalityLevel(str, enum.Enum):
    """Severity assigned to a report."""
    UNKNOWN = "UNKNOWN"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ReportStatus(str, enum.Enum):
    """Workflow status of a report."""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


# Field size caps (values are truncated, never rejected)
MAX_EVENT_NAME = 255
MAX_EVENT_LOG = 4_000_000
MAX_EVENT_STACK_TRACE = 4_000_000
MAX_REPORT_TITLE = 255
MAX_REPORT_COMMENTS = 5000
MAX_REPORT_TAGS = 10

# Per-field cap when events are sent to the classifier
MAX_CLASSIFIER_FIELD = 20_000

# Report listing
DEFAULT_PAGE_SIZE = 30
