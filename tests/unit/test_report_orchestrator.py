"""
Unit tests for end-to-end report assembly and error surfacing.
"""
from __future__ import annotations

from datetime import datetime

import pytest

from packages.shared.models import (
    Admission,
    Appointment,
    Consultation,
    DateRange,
    FilterSpec,
    ReportConfig,
    TextAt,
    TextRole,
)
from apps.worker.steps.report.orchestrator import (
    ReportBuildError,
    assemble_admin_report,
    assemble_clinical_report,
    build_admin_report,
    build_clinical_report,
    load_report_config,
)

GENERATED_AT = datetime(2024, 3, 5, 14, 7)


def _records():
    admissions = [
        Admission(id="a1", name="Jane Roe", department="Neurology", admission_date="2024-02-10",
                  status="active", safety_type="Emergency"),
        Admission(id="a2", name="Mark Poe", department="Hematology", admission_date="2023-11-02",
                  status="active", safety_type="Observation"),
    ]
    consultations = [
        Consultation(id="c1", patient_name="John Doe", consultation_specialty="Neurology",
                     created_at="2024-02-11T09:00:00Z", urgency="urgent", status="active"),
    ]
    appointments = [
        Appointment(id="p1", patient_name="Amal Haddad", specialty="Neurology", created_at="2024-02-12",
                    appointment_type="regular", status="pending"),
    ]
    return admissions, consultations, appointments


def _texts(doc, role=None) -> list[str]:
    return [
        c.text
        for page in doc.pages
        for c in page.commands
        if isinstance(c, TextAt) and (role is None or c.role == role)
    ]


def test_clinical_report_all_sections_in_order():
    admissions, consultations, appointments = _records()
    sections, doc = assemble_clinical_report(
        admissions, consultations, appointments, FilterSpec(), generated_at=GENERATED_AT
    )
    assert [s.title for s in sections] == ["Active Admissions", "Medical Consultations", "Clinic Appointments"]
    assert _texts(doc, TextRole.SECTION_TITLE) == [s.title for s in sections]
    assert doc.total_pages == len(doc.pages) == 1
    assert _texts(doc, TextRole.FOOTER) == ["Page 1 of 1"]


def test_clinical_report_header_lines():
    admissions, consultations, appointments = _records()
    spec = FilterSpec(date_range=DateRange(date_from="2024-02-01", date_to="2024-02-29"))
    doc = build_clinical_report(admissions, consultations, appointments, spec, generated_at=GENERATED_AT)
    headers = _texts(doc, TextRole.HEADER)
    assert headers == ["Generated on: 05/03/2024 14:07", "Period: 01/02/2024 to 29/02/2024"]
    assert _texts(doc, TextRole.TITLE) == ["IMD-Care Report"]


def test_period_line_needs_both_bounds():
    admissions, consultations, appointments = _records()
    spec = FilterSpec(date_range=DateRange(date_from="2024-02-01"))
    doc = build_clinical_report(admissions, consultations, appointments, spec, generated_at=GENERATED_AT)
    assert not [t for t in _texts(doc) if t.startswith("Period:")]


def test_report_type_selects_one_section():
    admissions, consultations, appointments = _records()
    sections, _ = assemble_clinical_report(
        admissions, consultations, appointments, FilterSpec(), report_type="consultations"
    )
    assert [s.title for s in sections] == ["Medical Consultations"]


def test_empty_filtered_sections_are_skipped():
    admissions, consultations, appointments = _records()
    spec = FilterSpec(specialty="Hematology")
    sections, doc = assemble_clinical_report(admissions, consultations, appointments, spec)
    assert [s.title for s in sections] == ["Active Admissions"]
    assert [r.cells[0] for r in sections[0].rows] == ["Mark Poe"]
    assert doc.total_pages == 1


def test_filter_warnings_are_collected():
    admissions, consultations, appointments = _records()
    admissions.append(Admission(id="bad", admission_date="someday"))
    warnings = []
    spec = FilterSpec(date_range=DateRange(date_from="2024-01-01"))
    assemble_clinical_report(admissions, consultations, appointments, spec, warnings=warnings)
    assert [(w.code, w.record_id) for w in warnings] == [("UNPARSEABLE_DATE", "bad")]


def test_unknown_report_type_raises_build_error():
    admissions, consultations, appointments = _records()
    with pytest.raises(ReportBuildError, match="Failed to generate report") as info:
        build_clinical_report(admissions, consultations, appointments, FilterSpec(), report_type="weekly")
    assert isinstance(info.value.__cause__, ValueError)


def test_impossible_geometry_raises_build_error():
    admissions, consultations, appointments = _records()
    config = ReportConfig(page_height=40, top_margin=10, bottom_margin=10)
    with pytest.raises(ReportBuildError):
        build_clinical_report(admissions, consultations, appointments, FilterSpec(), config=config)


def test_admin_report_sections_and_period():
    admissions, consultations, _ = _records()
    rng = DateRange(date_from="2024-01-01", date_to="2024-12-31")
    sections, doc = assemble_admin_report(
        admissions, consultations, rng, title="Monthly Review", generated_at=GENERATED_AT
    )
    assert [s.title for s in sections] == [
        "Summary Statistics",
        "Department Statistics",
        "Safety Admission Statistics",
        "Consultation Urgency Distribution",
    ]
    assert _texts(doc, TextRole.TITLE) == ["Monthly Review"]
    assert "Period: 01/01/2024 to 31/12/2024" in _texts(doc, TextRole.HEADER)
    # a2 was admitted before the range
    safety = sections[2]
    assert [r.cells for r in safety.rows] == [["Emergency", "1", "100%"]]
    footers = _texts(doc, TextRole.FOOTER)
    assert footers == [f"Page {i} of {doc.total_pages}" for i in range(1, doc.total_pages + 1)]


def test_admin_report_custom_period_label():
    admissions, consultations, _ = _records()
    doc = build_admin_report(admissions, consultations, DateRange(), period_label="February 2024")
    assert "Period: February 2024" in _texts(doc, TextRole.HEADER)
    assert _texts(doc, TextRole.TITLE) == ["Administrative Report"]


def test_admin_report_failure_is_wrapped():
    admissions, consultations, _ = _records()
    config = ReportConfig(page_height=40, top_margin=10, bottom_margin=10)
    with pytest.raises(ReportBuildError, match="administrative"):
        build_admin_report(admissions, consultations, DateRange(), config=config)


def test_load_report_config_from_file_and_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "config.json"
    path.write_text('{"row_height": 8, "bed_capacity": 20}', encoding="utf-8")
    monkeypatch.delenv("REPORT_BED_CAPACITY", raising=False)
    assert load_report_config(path).bed_capacity == 20
    monkeypatch.setenv("REPORT_BED_CAPACITY", "64")
    config = load_report_config(path)
    assert config.bed_capacity == 64
    assert config.row_height == 8


def test_bad_bound_is_reported_once_per_clinical_build():
    admissions, consultations, appointments = _records()
    warnings = []
    spec = FilterSpec(date_range=DateRange(date_from="soon", date_to="2024-12-31"))
    assemble_clinical_report(admissions, consultations, appointments, spec, warnings=warnings)
    assert [w.code for w in warnings] == ["UNPARSEABLE_BOUND"]


def test_bad_bound_is_reported_once_per_admin_build():
    admissions, consultations, _ = _records()
    warnings = []
    assemble_admin_report(admissions, consultations, DateRange(date_to="later"), warnings=warnings)
    assert [w.code for w in warnings] == ["UNPARSEABLE_BOUND"]
