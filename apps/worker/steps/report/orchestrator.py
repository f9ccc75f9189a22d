"""
Orchestrator for report building.

Runs filter -> sections -> layout -> footer stamping as one synchronous build
and hands the finished document to the PDF/CSV renderers. Any failure inside a
build surfaces as a single ReportBuildError; no partial document is returned.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Sequence

from packages.shared.models import (
    Admission,
    Appointment,
    ArtifactRef,
    Consultation,
    DateRange,
    Document,
    FilterSpec,
    RecordKind,
    ReportConfig,
    ReportExports,
    ReportType,
    Section,
    StatisticKind,
    TextRole,
    Warning,
)
from packages.shared.schema_validator import validate_document
from packages.shared.storage import save_report, sha256_bytes

from apps.worker.steps.report.common import format_date, format_datetime, report_filename
from apps.worker.steps.report.csv_render import generate_csv
from apps.worker.steps.report.filters import apply_predicates, build_predicates
from apps.worker.steps.report.footer import stamp
from apps.worker.steps.report.layout import HeaderLine, layout
from apps.worker.steps.report.pdf_render import render_pdf
from apps.worker.steps.report.sections import build_section
from apps.worker.steps.report.statistics import build_statistics_section

logger = logging.getLogger(__name__)

CLINICAL_REPORT_PREFIX = "imd-care-report"
ADMIN_REPORT_PREFIX = "imd-care-admin-report"

_SECTION_ORDER = [
    (ReportType.ADMISSIONS, RecordKind.ADMISSION),
    (ReportType.CONSULTATIONS, RecordKind.CONSULTATION),
    (ReportType.APPOINTMENTS, RecordKind.APPOINTMENT),
]

_ADMIN_STATISTICS = [
    StatisticKind.SUMMARY,
    StatisticKind.DEPARTMENT,
    StatisticKind.SAFETY,
    StatisticKind.URGENCY,
]


class ReportBuildError(RuntimeError):
    """A report could not be produced; the cause is chained."""


def _parse_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_report_config(path: str | Path | None = None) -> ReportConfig:
    """Load ReportConfig from an optional JSON file, then apply environment overrides."""
    data: dict = {}
    if path:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    capacity = os.getenv("REPORT_BED_CAPACITY")
    if capacity:
        data["bed_capacity"] = int(capacity)
    return ReportConfig(**data)


def clinical_header_lines(config: ReportConfig, spec: FilterSpec, generated_at: datetime) -> list[HeaderLine]:
    lines = [
        HeaderLine(config.report_title, config.title_font_size, 10, TextRole.TITLE),
        HeaderLine(f"Generated on: {format_datetime(generated_at)}", config.subtitle_font_size, 7),
    ]
    rng = spec.date_range
    if rng.date_from and rng.date_to:
        lines.append(HeaderLine(
            f"Period: {format_date(rng.date_from)} to {format_date(rng.date_to)}",
            config.subtitle_font_size,
            7,
        ))
    lines.append(HeaderLine("", config.subtitle_font_size, 8))
    return lines


def admin_header_lines(config: ReportConfig, title: str, period_label: str, generated_at: datetime) -> list[HeaderLine]:
    return [
        HeaderLine(title, config.title_font_size, 10, TextRole.TITLE),
        HeaderLine(f"Generated on: {generated_at.strftime('%d/%m/%Y')}", config.subtitle_font_size, 7),
        HeaderLine(f"Period: {period_label}", config.subtitle_font_size, 7),
        HeaderLine("", config.subtitle_font_size, 8),
    ]


def build_clinical_sections(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    appointments: Sequence[Appointment],
    spec: FilterSpec,
    report_type: ReportType = ReportType.ALL,
    warnings: list[Warning] | None = None,
) -> list[Section]:
    """Filter each collection and build the non-empty sections the report type asks for."""
    collections = {
        RecordKind.ADMISSION: admissions,
        RecordKind.CONSULTATION: consultations,
        RecordKind.APPOINTMENT: appointments,
    }
    report_type = ReportType(report_type)
    predicates = build_predicates(spec, warnings)
    sections: list[Section] = []
    for tab, kind in _SECTION_ORDER:
        if report_type not in (ReportType.ALL, tab):
            continue
        filtered = apply_predicates(collections[kind], predicates)
        if not filtered:
            logger.info(f"Skipping empty section for {kind.value}")
            continue
        sections.append(build_section(filtered, kind))
    return sections


def build_admin_sections(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    date_range: DateRange,
    config: ReportConfig,
    warnings: list[Warning] | None = None,
) -> list[Section]:
    predicates = build_predicates(FilterSpec(date_range=date_range), warnings)
    kept_admissions = apply_predicates(admissions, predicates)
    kept_consultations = apply_predicates(consultations, predicates)
    return [
        build_statistics_section(kept_admissions, kept_consultations, kind, config)
        for kind in _ADMIN_STATISTICS
    ]


def _paginate(sections: list[Section], config: ReportConfig, header_lines: list[HeaderLine]) -> Document:
    return stamp(layout(sections, config, header_lines), config)


def assemble_clinical_report(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    appointments: Sequence[Appointment],
    spec: FilterSpec,
    report_type: ReportType = ReportType.ALL,
    config: ReportConfig | None = None,
    generated_at: datetime | None = None,
    warnings: list[Warning] | None = None,
) -> tuple[list[Section], Document]:
    config = config or ReportConfig()
    generated_at = generated_at or datetime.now()
    try:
        sections = build_clinical_sections(admissions, consultations, appointments, spec, report_type, warnings)
        document = _paginate(sections, config, clinical_header_lines(config, spec, generated_at))
    except Exception as exc:
        logger.exception(f"Error generating report: {exc}")
        raise ReportBuildError("Failed to generate report") from exc
    logger.info(f"Clinical report built: {len(sections)} section(s), {document.total_pages} page(s)")
    return sections, document


def build_clinical_report(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    appointments: Sequence[Appointment],
    spec: FilterSpec,
    report_type: ReportType = ReportType.ALL,
    config: ReportConfig | None = None,
    generated_at: datetime | None = None,
    warnings: list[Warning] | None = None,
) -> Document:
    _, document = assemble_clinical_report(
        admissions, consultations, appointments, spec, report_type, config, generated_at, warnings
    )
    return document


def assemble_admin_report(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    date_range: DateRange,
    title: str | None = None,
    period_label: str | None = None,
    config: ReportConfig | None = None,
    generated_at: datetime | None = None,
    warnings: list[Warning] | None = None,
) -> tuple[list[Section], Document]:
    config = config or ReportConfig()
    generated_at = generated_at or datetime.now()
    title = title or config.admin_report_title
    if period_label is None:
        period_label = f"{format_date(date_range.date_from)} to {format_date(date_range.date_to)}"
    try:
        sections = build_admin_sections(admissions, consultations, date_range, config, warnings)
        document = _paginate(sections, config, admin_header_lines(config, title, period_label, generated_at))
    except Exception as exc:
        logger.exception(f"Error generating admin report: {exc}")
        raise ReportBuildError("Failed to generate administrative report") from exc
    logger.info(f"Administrative report built: {document.total_pages} page(s)")
    return sections, document


def build_admin_report(
    admissions: Sequence[Admission],
    consultations: Sequence[Consultation],
    date_range: DateRange,
    title: str | None = None,
    period_label: str | None = None,
    config: ReportConfig | None = None,
    generated_at: datetime | None = None,
    warnings: list[Warning] | None = None,
) -> Document:
    _, document = assemble_admin_report(
        admissions, consultations, date_range, title, period_label, config, generated_at, warnings
    )
    return document


def _artifact(path: Path, data: bytes) -> ArtifactRef:
    return ArtifactRef(uri=str(path), sha256=sha256_bytes(data), bytes=len(data))


def render_report_exports(
    document: Document,
    sections: Sequence[Section],
    prefix: str = CLINICAL_REPORT_PREFIX,
    generated_at: datetime | None = None,
    out_dir: Path | None = None,
    include_csv: bool = False,
    title: str = "",
) -> ReportExports:
    """
    Render the stamped document to PDF (and optionally CSV), save under a
    timestamped name and return the artifact refs.
    """
    generated_at = generated_at or datetime.now()
    filename = report_filename(prefix, generated_at)
    stem = filename[: -len(".pdf")]

    pdf_bytes = render_pdf(document, title=title)
    pdf_path = save_report(filename, pdf_bytes, out_dir)
    exports = ReportExports(pdf=_artifact(pdf_path, pdf_bytes))

    if include_csv:
        csv_bytes = generate_csv(sections)
        csv_path = save_report(f"{stem}.csv", csv_bytes, out_dir)
        exports.csv = _artifact(csv_path, csv_bytes)

    if _parse_bool_env("DEBUG_ARTIFACTS", False):
        payload = document.model_dump(mode="json")
        ok, errors = validate_document(payload)
        if not ok:
            logger.warning(f"Report document failed schema validation: {errors[:5]}")
        json_bytes = json.dumps(payload, indent=2).encode("utf-8")
        json_path = save_report(f"{stem}.json", json_bytes, out_dir)
        exports.document_json = _artifact(json_path, json_bytes)

    logger.info(f"Saved report {pdf_path} ({len(pdf_bytes)} bytes)")
    return exports
