from __future__ import annotations

import json

import pytest

from packages.shared.models import RecordBundle
from scripts import build_report
from scripts.build_report import main

BUNDLE = {
    "admissions": [
        {"id": "a1", "name": "Jane Roe", "mrn": "MRN-1", "department": "Neurology",
         "admission_date": "2024-02-10T08:00:00Z", "status": "active", "safety_type": "Emergency"},
    ],
    "consultations": [
        {"id": "c1", "patient_name": "John Doe", "consultation_specialty": "Pulmonology",
         "created_at": "2024-02-11", "urgency": "routine", "status": "active"},
    ],
    "appointments": [
        {"id": "p1", "patient_name": "Amal Haddad", "medical_number": "A-1", "specialty": "Hematology",
         "created_at": "not a date", "appointment_type": "urgent", "status": "pending"},
    ],
}


@pytest.fixture
def bundle_path(tmp_path):
    path = tmp_path / "records.json"
    path.write_text(json.dumps(BUNDLE), encoding="utf-8")
    return path


def test_bundle_keeps_raw_timestamps():
    bundle = RecordBundle.model_validate(BUNDLE)
    assert bundle.appointments[0].created_at == "not a date"
    assert bundle.consultations[0].kind == "consultation"


def test_cli_clinical_report(bundle_path, tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DEBUG_ARTIFACTS", raising=False)
    out = tmp_path / "out"
    code = main(["--input", str(bundle_path), "--out", str(out), "--csv", "--from", "2024-02-01"])
    assert code == 0
    pdfs = list(out.glob("imd-care-report-*.pdf"))
    assert len(pdfs) == 1
    assert len(list(out.glob("imd-care-report-*.csv"))) == 1


def test_cli_admin_report(bundle_path, tmp_path):
    out = tmp_path / "out"
    code = main(["--input", str(bundle_path), "--report", "admin", "--out", str(out), "--period", "Q1 2024"])
    assert code == 0
    assert len(list(out.glob("imd-care-admin-report-*.pdf"))) == 1


def test_cli_reports_build_failure(bundle_path, tmp_path):
    config = tmp_path / "tiny.json"
    config.write_text('{"page_height": 30, "top_margin": 10, "bottom_margin": 10}', encoding="utf-8")
    code = main(["--input", str(bundle_path), "--config", str(config), "--out", str(tmp_path / "out")])
    assert code == 1
    assert not (tmp_path / "out").exists()


def test_cli_invalid_bundle_exits_cleanly(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"admissions": [{"name": "missing id"}]}', encoding="utf-8")
    assert main(["--input", str(bad), "--out", str(tmp_path / "out")]) == 1


def test_cli_missing_config_exits_cleanly(bundle_path, tmp_path):
    code = main(["--input", str(bundle_path), "--config", str(tmp_path / "absent.json")])
    assert code == 1


def test_cli_export_failure_exits_cleanly(bundle_path, tmp_path, monkeypatch: pytest.MonkeyPatch):
    def _fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(build_report, "render_report_exports", _fail)
    assert main(["--input", str(bundle_path), "--out", str(tmp_path / "out")]) == 1
