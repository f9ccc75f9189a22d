"""
Shared value formatting and per-variant field access for report building.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from packages.shared.models import Admission, Appointment, Consultation, Record

NOT_AVAILABLE = "N/A"
NOT_ASSIGNED = "Not assigned"

_ISO_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})\s*$")
# Postgres-style timestamps: space or T separator, any fraction length, "+00" / "+0530" / "Z" offsets.
_STORE_TS_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[T ](?P<time>\d{2}:\d{2}(?::\d{2})?)"
    r"(?:\.(?P<frac>\d+))?\s*(?P<tz>Z|[+-]\d{2}(?::?\d{2})?)?$"
)


def _normalize_store_timestamp(text: str) -> str:
    """Rewrite a store timestamp into the subset datetime.fromisoformat reads on every supported Python."""
    m = _STORE_TS_RE.match(text)
    if not m:
        return text
    out = f"{m.group('date')}T{m.group('time')}"
    if m.group("frac"):
        out += "." + m.group("frac")[:6].ljust(6, "0")
    tz = m.group("tz")
    if tz == "Z":
        out += "+00:00"
    elif tz:
        digits = tz[1:].replace(":", "")
        out += f"{tz[0]}{digits[:2]}:{digits[2:4] or '00'}"
    return out


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a store timestamp into a datetime. Returns None when it cannot be read."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text:
        return None
    m = _ISO_DATE_RE.match(text)
    if m:
        try:
            return datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(_normalize_store_timestamp(text))
    except ValueError:
        return None


def parse_calendar_date(value: Any) -> date | None:
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


def format_date(value: Any) -> str:
    """dd/MM/yyyy, or N/A for missing or unreadable values."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return NOT_AVAILABLE
    return parsed.strftime("%d/%m/%Y")


def format_datetime(value: datetime) -> str:
    return value.strftime("%d/%m/%Y %H:%M")


def display(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    if value is None:
        return placeholder
    text = str(value).strip()
    return text or placeholder


def upper(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    text = display(value, placeholder)
    return text if text == placeholder else text.upper()


def capitalize_label(value: str) -> str:
    """Uppercase the first character only; the rest is kept as typed."""
    if not value:
        return value
    return value[0].upper() + value[1:]


def percentage(count: float, total: float) -> int:
    """Whole-number share of total. A zero total counts as 1 so the result is 0, never NaN."""
    return math.floor(count / (total or 1) * 100 + 0.5)


def record_anchor(record: Record) -> Any:
    if isinstance(record, Admission):
        return record.admission_date
    if isinstance(record, Consultation):
        return record.created_at
    if isinstance(record, Appointment):
        return record.created_at
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def record_category(record: Record) -> str | None:
    if isinstance(record, Admission):
        return record.department
    if isinstance(record, Consultation):
        return record.consultation_specialty
    if isinstance(record, Appointment):
        return record.specialty
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def search_fields(record: Record) -> tuple[str | None, ...]:
    """Display name, record number, clinician. Variants without a clinician yield None there."""
    if isinstance(record, Admission):
        return (record.name, record.mrn, record.doctor_name)
    if isinstance(record, Consultation):
        return (record.patient_name, record.mrn, record.doctor_name)
    if isinstance(record, Appointment):
        return (record.patient_name, record.medical_number, None)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def report_filename(prefix: str, now: datetime) -> str:
    return f"{prefix}-{now.strftime('%d-%m-%Y-%H%M')}.pdf"
