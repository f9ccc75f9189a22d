from enum import Enum


class RecordKind(str, Enum):
    ADMISSION = "admission"
    CONSULTATION = "consultation"
    APPOINTMENT = "appointment"


class ReportType(str, Enum):
    """Which record sections a clinical report includes (the dashboard's active tab)."""
    ALL = "all"
    ADMISSIONS = "admissions"
    CONSULTATIONS = "consultations"
    APPOINTMENTS = "appointments"


class StatisticKind(str, Enum):
    SUMMARY = "summary"
    DEPARTMENT = "department"
    SAFETY = "safety"
    URGENCY = "urgency"


class BadgeLevel(str, Enum):
    HIGH = "high"  # red
    MEDIUM = "medium"  # yellow
    LOW = "low"  # green
    INFO = "info"  # blue
    NEUTRAL = "neutral"  # grey


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextRole(str, Enum):
    TITLE = "title"
    HEADER = "header"
    SECTION_TITLE = "section_title"
    FOOTER = "footer"
