"""
Statistical sections for the administrative summary report.

Counts are grouping-by-key reductions over already-filtered records. Keys are
compared exactly as stored; distinct casings are distinct groups.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from packages.shared.models import (
    Admission,
    Badge,
    BadgeLevel,
    Consultation,
    ReportConfig,
    Row,
    Section,
    StatisticKind,
)

from apps.worker.steps.report.common import capitalize_label, percentage
from apps.worker.steps.report.constants import (
    ACTIVE_STATUS,
    DEPARTMENT_COLUMNS,
    DEPARTMENT_TITLE,
    DEPARTMENTS,
    SAFETY_BADGES,
    SAFETY_COLUMNS,
    SAFETY_TITLE,
    SUMMARY_COLUMNS,
    SUMMARY_TITLE,
    URGENCY_BADGES,
    URGENCY_COLUMNS,
    URGENCY_TITLE,
)

logger = logging.getLogger(__name__)


def count_by_key(keys: Iterable[str | None]) -> dict[str, int]:
    """Count occurrences per key in first-seen order. Empty keys are skipped."""
    counts: dict[str, int] = {}
    for key in keys:
        if not key:
            continue
        counts[key] = counts.get(key, 0) + 1
    return counts


def percentage_breakdown(counts: dict[str, int]) -> dict[str, int]:
    total = sum(counts.values())
    return {key: percentage(count, total) for key, count in counts.items()}


def ordered_groups(reference: Sequence[str], encountered: Iterable[str | None]) -> list[str]:
    """Reference keys in their fixed order, then unlisted keys in first-seen order."""
    groups = list(reference)
    known = set(groups)
    for key in encountered:
        if key and key not in known:
            known.add(key)
            groups.append(key)
    return groups


def _is_active(record: Admission | Consultation) -> bool:
    return record.status == ACTIVE_STATUS


def summary_section(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    bed_capacity: int,
) -> Section:
    active_patients = sum(1 for a in admissions if _is_active(a))
    active_consultations = sum(1 for c in consultations if _is_active(c))
    occupancy = percentage(active_patients, bed_capacity) if bed_capacity else 0
    return Section(
        title=SUMMARY_TITLE,
        columns=[c.model_copy() for c in SUMMARY_COLUMNS],
        rows=[
            Row(cells=["Active Patients", str(active_patients)]),
            Row(cells=["Active Consultations", str(active_consultations)]),
            Row(cells=["Occupancy Rate", f"{occupancy}%"]),
        ],
        stats={
            "active_patients": active_patients,
            "active_consultations": active_consultations,
            "occupancy_rate": occupancy,
        },
    )


def department_section(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    departments: Sequence[str] = DEPARTMENTS,
) -> Section:
    encountered = [a.department for a in admissions] + [c.consultation_specialty for c in consultations]
    groups = ordered_groups(departments, encountered)
    extra = len(groups) - len(departments)
    if extra:
        logger.info(f"Department statistics: {extra} department(s) outside the reference list")

    patients = count_by_key(a.department for a in admissions if _is_active(a))
    pending = count_by_key(c.consultation_specialty for c in consultations if _is_active(c))

    section = Section(title=DEPARTMENT_TITLE, columns=[c.model_copy() for c in DEPARTMENT_COLUMNS])
    for dept in groups:
        section.rows.append(Row(cells=[dept, str(patients.get(dept, 0)), str(pending.get(dept, 0))]))
    section.stats["active_patients"] = sum(patients.values())
    section.stats["pending_consultations"] = sum(pending.values())
    return section


def _breakdown_section(
    title: str,
    columns,
    counts: dict[str, int],
    badge_for,
) -> Section:
    shares = percentage_breakdown(counts)
    section = Section(title=title, columns=[c.model_copy() for c in columns])
    for key, count in counts.items():
        label = capitalize_label(key)
        section.rows.append(Row(
            cells=[label, str(count), f"{shares[key]}%"],
            badge=Badge(text=label, level=badge_for(key, label)),
        ))
        section.stats[key] = count
    section.stats["total"] = sum(counts.values())
    return section


def safety_section(admissions: Sequence[Admission]) -> Section:
    counts = count_by_key(a.safety_type for a in admissions)
    return _breakdown_section(
        SAFETY_TITLE,
        SAFETY_COLUMNS,
        counts,
        lambda key, label: SAFETY_BADGES.get(label, BadgeLevel.LOW),
    )


def urgency_section(consultations: Sequence[Consultation]) -> Section:
    counts = count_by_key(c.urgency for c in consultations)
    return _breakdown_section(
        URGENCY_TITLE,
        URGENCY_COLUMNS,
        counts,
        lambda key, label: URGENCY_BADGES.get(key.lower(), BadgeLevel.NEUTRAL),
    )


def build_statistics_section(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    kind: StatisticKind,
    config: ReportConfig | None = None,
) -> Section:
    config = config or ReportConfig()
    if kind == StatisticKind.SUMMARY:
        return summary_section(admissions, consultations, config.bed_capacity)
    if kind == StatisticKind.DEPARTMENT:
        return department_section(admissions, consultations)
    if kind == StatisticKind.SAFETY:
        return safety_section(admissions)
    if kind == StatisticKind.URGENCY:
        return urgency_section(consultations)
    raise ValueError(f"Unknown statistic kind: {kind!r}")
