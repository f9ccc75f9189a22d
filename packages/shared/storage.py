"""
Local disk storage helpers for generated report artifacts.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("DATA_DIR", "data"))
REPORTS_DIR = DATA_DIR / "reports"


def sha256_bytes(data: bytes) -> str:
    """Compute sha256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def save_report(filename: str, data: bytes, out_dir: Path | None = None) -> Path:
    """Save a generated report artifact (PDF/CSV/JSON). Returns the file path."""
    target = Path(out_dir) if out_dir is not None else REPORTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    path = target / filename
    path.write_bytes(data)
    return path
