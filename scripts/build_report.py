from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.shared.models import DateRange, FilterSpec, RecordBundle, ReportType, Warning
from apps.worker.steps.report.orchestrator import (
    ADMIN_REPORT_PREFIX,
    CLINICAL_REPORT_PREFIX,
    ReportBuildError,
    assemble_admin_report,
    assemble_clinical_report,
    load_report_config,
    render_report_exports,
)
from apps.worker.steps.report.pdf_render import RenderError

logger = logging.getLogger("imd_care.report")


def _load_bundle(path: Path) -> RecordBundle:
    return RecordBundle.model_validate(json.loads(path.read_text(encoding="utf-8")))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build a paginated clinical or administrative PDF report")
    parser.add_argument("--input", type=Path, required=True, help="JSON file with admissions/consultations/appointments")
    parser.add_argument("--report", choices=["clinical", "admin"], default="clinical")
    parser.add_argument("--type", dest="report_type", choices=[t.value for t in ReportType], default="all")
    parser.add_argument("--from", dest="date_from", default=None, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", default=None, help="End date (YYYY-MM-DD)")
    parser.add_argument("--specialty", default="all")
    parser.add_argument("--search", default="")
    parser.add_argument("--title", default=None, help="Administrative report title")
    parser.add_argument("--period", default=None, help="Administrative report period label")
    parser.add_argument("--config", type=Path, default=None, help="ReportConfig JSON overrides")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (defaults to DATA_DIR/reports)")
    parser.add_argument("--csv", action="store_true", help="Also write a CSV export")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        config = load_report_config(args.config)
        bundle = _load_bundle(args.input)
    except (OSError, ValueError) as exc:
        logger.error(f"Could not load report inputs: {exc}")
        return 1

    date_range = DateRange(date_from=args.date_from, date_to=args.date_to)
    warnings: list[Warning] = []

    try:
        if args.report == "admin":
            title = args.title or config.admin_report_title
            sections, document = assemble_admin_report(
                bundle.admissions,
                bundle.consultations,
                date_range,
                title=title,
                period_label=args.period,
                config=config,
                warnings=warnings,
            )
            prefix = ADMIN_REPORT_PREFIX
        else:
            title = config.report_title
            spec = FilterSpec(date_range=date_range, specialty=args.specialty, search_query=args.search)
            sections, document = assemble_clinical_report(
                bundle.admissions,
                bundle.consultations,
                bundle.appointments,
                spec,
                report_type=ReportType(args.report_type),
                config=config,
                warnings=warnings,
            )
            prefix = CLINICAL_REPORT_PREFIX
    except ReportBuildError as exc:
        logger.error(f"{exc}. Please try again.")
        return 1

    for w in warnings:
        logger.warning(f"{w.code}: {w.message}")

    try:
        exports = render_report_exports(
            document,
            sections,
            prefix=prefix,
            out_dir=args.out,
            include_csv=args.csv,
            title=title,
        )
    except (RenderError, OSError) as exc:
        logger.error(f"Failed to save report: {exc}")
        return 1
    print(f"Report written to {exports.pdf.uri} ({document.total_pages} page(s))")
    if exports.csv:
        print(f"CSV written to {exports.csv.uri}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
