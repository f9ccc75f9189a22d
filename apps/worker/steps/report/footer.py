"""
Footer stamping, the second pass that numbers pages once the count is known.
"""
from __future__ import annotations

import logging

from packages.shared.models import Alignment, Document, ReportConfig, TextAt, TextRole

logger = logging.getLogger(__name__)


def footer_text(index: int, total: int) -> str:
    return f"Page {index} of {total}"


def stamp(doc: Document, config: ReportConfig | None = None) -> Document:
    """
    Return a copy of doc with a centered "Page i of N" footer appended to
    every page and total_pages set. Existing commands are left untouched.
    """
    config = config or ReportConfig()
    total = len(doc.pages)
    stamped = []
    for page in doc.pages:
        footer = TextAt(
            x=doc.page_width / 2,
            y=doc.page_height - config.footer_offset,
            font_size=config.footer_font_size,
            text=footer_text(page.index, total),
            align=Alignment.CENTER,
            role=TextRole.FOOTER,
        )
        stamped.append(page.model_copy(update={"commands": [*page.commands, footer]}))
    logger.debug(f"Stamped footers on {total} page(s)")
    return doc.model_copy(update={"pages": stamped, "total_pages": total})
