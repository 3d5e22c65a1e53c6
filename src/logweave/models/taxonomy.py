"""Classification taxonomy attached to every record.

Category is a closed set. Type and Area are conventions: the enums below list
suggested values, but records store plain strings so workflow and UI callers
can supply their own.
"""

from enum import Enum


class Category(str, Enum):
    """Where a record originated."""

    APPLICATION = "Application"
    WORKFLOW = "Workflow"
    WARNING = "Warning"
    EVENT = "Event"
    DEBUG = "Debug"
    INTEGRATION = "Integration"
    COMPONENT = "Component"

    @classmethod
    def parse(cls, value: "str | Category | None") -> "Category | None":
        """Resolve a value or a case-insensitive name; None when unknown."""
        if value is None:
            return None
        if isinstance(value, Category):
            return value
        candidate = value.strip().lower()
        for member in cls:
            if candidate in (member.value.lower(), member.name.lower()):
                return member
        return None


class LogType(str, Enum):
    """Suggested record types."""

    BACKEND = "Backend"
    FRONTEND = "Frontend"
    LONG_RUNNING_REQUEST = "LongRunningRequest"
    CONCURRENT_REQUESTS_LIMIT = "ConcurrentRequestsLimit"
    DOMAIN_TRIGGER = "DomainTrigger"


class Area(str, Enum):
    """Suggested functional areas."""

    GENERAL = "General"
    COMMUNITY = "Community"
    REST_API = "RestAPI"
    ACCOUNTS = "Accounts"
    OPPORTUNITIES = "Opportunities"
    LEAD_CONVERSION = "LeadConversion"


class Level(str, Enum):
    """Record severity, most to least severe."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    FINE = "FINE"
    FINER = "FINER"
    FINEST = "FINEST"

    @classmethod
    def parse(cls, value: "str | Level | None", default: "Level") -> "Level":
        """Resolve a case-insensitive level name, falling back to default."""
        if isinstance(value, Level):
            return value
        if not value or not value.strip():
            return default
        try:
            return cls(value.strip().upper())
        except ValueError:
            return default


class SystemAttribute(str, Enum):
    """Attribute names the facade stamps on records."""

    USER_ID = "user_id"
    OPERATION = "operation"
    RELATED_OBJECT_ID = "related_object_id"
    HTTP_PAIR = "http_pair"
    FLOW_INTERVIEW_ID = "flow_interview_id"


def text(value: "str | Enum | None") -> str | None:
    """Plain string for an enum member or string; None for blank input."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    value = str(value)
    return value if value.strip() else None


def is_known_type(value: str) -> bool:
    """Advisory check against the suggested LogType values."""
    return value in {t.value for t in LogType}


def is_known_area(value: str) -> bool:
    """Advisory check against the suggested Area values."""
    return value in {a.value for a in Area}
