"""
Record sections: one titled table per record variant.

Missing fields degrade to placeholders; nothing here raises on record content.
"""
from __future__ import annotations

from typing import Sequence

from packages.shared.models import (
    Admission,
    Appointment,
    Badge,
    BadgeLevel,
    Consultation,
    RecordKind,
    Row,
    Section,
)

from apps.worker.steps.report.common import (
    NOT_ASSIGNED,
    display,
    format_date,
    upper,
)
from apps.worker.steps.report.constants import (
    ACTIVE_STATUS,
    ADMISSION_COLUMNS,
    ADMISSIONS_TITLE,
    APPOINTMENT_COLUMNS,
    APPOINTMENT_TYPE_BADGES,
    APPOINTMENTS_TITLE,
    CONSULTATION_COLUMNS,
    CONSULTATIONS_TITLE,
    URGENCY_BADGES,
)


def _badge(value: str | None, table: dict[str, BadgeLevel], default: BadgeLevel) -> Badge | None:
    if not value:
        return None
    return Badge(text=value, level=table.get(value, default))


def admission_row(admission: Admission) -> Row:
    status = admission.status
    level = BadgeLevel.LOW if status == ACTIVE_STATUS else BadgeLevel.NEUTRAL
    return Row(
        cells=[
            display(admission.name),
            display(admission.mrn),
            display(admission.department),
            format_date(admission.admission_date),
            display(admission.diagnosis),
            display(admission.doctor_name, NOT_ASSIGNED),
            display(admission.safety_type),
        ],
        badge=Badge(text=status, level=level) if status else None,
    )


def consultation_row(consultation: Consultation) -> Row:
    return Row(
        cells=[
            display(consultation.patient_name),
            display(consultation.mrn),
            display(consultation.consultation_specialty),
            format_date(consultation.created_at),
            upper(consultation.urgency),
            display(consultation.reason),
        ],
        badge=_badge(consultation.urgency, URGENCY_BADGES, BadgeLevel.LOW),
    )


def appointment_row(appointment: Appointment) -> Row:
    return Row(
        cells=[
            display(appointment.patient_name),
            display(appointment.medical_number),
            display(appointment.specialty),
            format_date(appointment.created_at),
            upper(appointment.appointment_type),
            upper(appointment.status),
            display(appointment.notes, ""),
        ],
        badge=_badge(appointment.appointment_type, APPOINTMENT_TYPE_BADGES, BadgeLevel.INFO),
    )


def build_section(records: Sequence, kind: RecordKind) -> Section:
    """Build the titled table for one record variant from already-filtered records."""
    if kind == RecordKind.ADMISSION:
        title, columns, row_fn, expected = ADMISSIONS_TITLE, ADMISSION_COLUMNS, admission_row, Admission
    elif kind == RecordKind.CONSULTATION:
        title, columns, row_fn, expected = CONSULTATIONS_TITLE, CONSULTATION_COLUMNS, consultation_row, Consultation
    elif kind == RecordKind.APPOINTMENT:
        title, columns, row_fn, expected = APPOINTMENTS_TITLE, APPOINTMENT_COLUMNS, appointment_row, Appointment
    else:
        raise ValueError(f"Unknown record kind: {kind!r}")

    section = Section(title=title, columns=[c.model_copy() for c in columns])
    for record in records:
        if not isinstance(record, expected):
            raise TypeError(f"{title} cannot hold a {type(record).__name__} record")
        section.rows.append(row_fn(record))
    section.stats["count"] = len(section.rows)
    return section

