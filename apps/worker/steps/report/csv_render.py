"""
CSV rendering for report sections.

One CSV row per section row, prefixed with the section title; each section
starts with its own header line since column sets differ between sections.
"""
from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from packages.shared.models import Section


def generate_csv(sections: Sequence[Section]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    for section in sections:
        writer.writerow(["section", *section.header_row, "badge"])
        for row in section.rows:
            writer.writerow([section.title, *row.cells, row.badge.text if row.badge else ""])
    return buf.getvalue().encode("utf-8")
