from .enums import (
    Alignment,
    BadgeLevel,
    RecordKind,
    ReportType,
    StatisticKind,
    TextRole,
)
from .common import DateRange, FilterSpec, Timestamp
from .domain import (
    Admission,
    Appointment,
    ArtifactRef,
    Consultation,
    Record,
    RecordBundle,
    ReportConfig,
    ReportExports,
    Warning,
)
from .report import Badge, Column, Document, DrawCommand, Page, Row, Section, Table, TextAt

__all__ = [
    "Alignment",
    "BadgeLevel",
    "RecordKind",
    "ReportType",
    "StatisticKind",
    "TextRole",
    "DateRange",
    "FilterSpec",
    "Timestamp",
    "Admission",
    "Appointment",
    "ArtifactRef",
    "Consultation",
    "Record",
    "RecordBundle",
    "ReportConfig",
    "ReportExports",
    "Warning",
    "Badge",
    "Column",
    "Document",
    "DrawCommand",
    "Page",
    "Row",
    "Section",
    "Table",
    "TextAt",
]
