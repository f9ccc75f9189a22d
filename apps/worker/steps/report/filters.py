"""
Record filtering by date range, specialty and free-text search.

The three predicates are independent and ANDed; the result keeps input order.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence

from packages.shared.models import DateRange, FilterSpec, Record, Warning

from apps.worker.steps.report.common import (
    parse_calendar_date,
    record_anchor,
    record_category,
    search_fields,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], bool]


def _resolve_bound(value, side: str, warnings: list[Warning] | None) -> date | None:
    if value is None or value == "":
        return None
    parsed = parse_calendar_date(value)
    if parsed is None:
        logger.warning(f"Ignoring unparseable '{side}' bound: {value!r}")
        if warnings is not None:
            warnings.append(Warning(
                code="UNPARSEABLE_BOUND",
                message=f"Date range '{side}' bound {value!r} could not be parsed and was ignored",
            ))
    return parsed


def date_predicate(date_range: DateRange, warnings: list[Warning] | None = None) -> Predicate:
    """
    Accept records whose anchor date lies in [from, to] (inclusive, calendar days).
    A record whose anchor is missing or unreadable fails whenever a bound is active.
    """
    start = _resolve_bound(date_range.date_from, "from", warnings)
    end = _resolve_bound(date_range.date_to, "to", warnings)

    if start is None and end is None:
        return lambda record: True

    def accept(record) -> bool:
        anchor = parse_calendar_date(record_anchor(record))
        if anchor is None:
            if warnings is not None:
                warnings.append(Warning(
                    code="UNPARSEABLE_DATE",
                    message=f"Record date {record_anchor(record)!r} could not be parsed; excluded by date filter",
                    record_id=getattr(record, "id", None),
                ))
            return False
        if start is not None and anchor < start:
            return False
        if end is not None and anchor > end:
            return False
        return True

    return accept


def specialty_predicate(specialty: str) -> Predicate:
    if not specialty or specialty == "all":
        return lambda record: True
    return lambda record: record_category(record) == specialty


def search_predicate(query: str) -> Predicate:
    needle = (query or "").lower()
    if not needle:
        return lambda record: True

    def accept(record) -> bool:
        for value in search_fields(record):
            if value and needle in str(value).lower():
                return True
        return False

    return accept


def build_predicates(spec: FilterSpec, warnings: list[Warning] | None = None) -> list[Predicate]:
    """Resolve the filter criteria once; the predicates can then be applied to any collection."""
    return [
        date_predicate(spec.date_range, warnings),
        specialty_predicate(spec.specialty),
        search_predicate(spec.search_query),
    ]


def apply_predicates(records: Sequence[Record], predicates: Sequence[Predicate]) -> list[Record]:
    """Stable filter: accepted records in their input order."""
    accepted = [r for r in records if all(p(r) for p in predicates)]
    logger.debug(f"Filter kept {len(accepted)}/{len(records)} records")
    return accepted


def filter_records(
    records: Sequence[Record],
    spec: FilterSpec,
    warnings: list[Warning] | None = None,
) -> list[Record]:
    return apply_predicates(records, build_predicates(spec, warnings))
