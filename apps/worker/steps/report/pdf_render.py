"""
PDF rendering of a laid-out report document.

Consumes draw commands only; every pagination decision has already been made
by the layout engine, so one Document page becomes exactly one PDF page.
"""
from __future__ import annotations

import logging
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as pdf_canvas
from reportlab.platypus import Table as PlatypusTable
from reportlab.platypus import TableStyle

from packages.shared.models import Alignment, Document, Row, Table, TextAt, TextRole

from apps.worker.steps.report.constants import BADGE_COLORS, HEADER_FILL, STRIPE_FILL

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
CELL_PADDING = 2.0
ELLIPSIS = "..."


class RenderError(RuntimeError):
    """Raised when the document cannot be turned into PDF bytes."""


def _rgb(values: tuple[int, int, int]) -> colors.Color:
    r, g, b = values
    return colors.Color(r / 255, g / 255, b / 255)


def fit_text(text: str, width: float, font: str, size: float) -> str:
    """Trim text so it fits width (points), marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if stringWidth(text, font, size) <= width:
        return text
    cut = text
    while cut and stringWidth(cut + ELLIPSIS, font, size) > width:
        cut = cut[:-1]
    return cut + ELLIPSIS if cut else ""


def _fit_cells(cells: list[str], widths: list[float], font: str, size: float) -> list[str]:
    """One string per column, each trimmed to its column's inner width."""
    padded = list(cells) + [""] * (len(widths) - len(cells))
    return [
        fit_text(value, (width - 2 * CELL_PADDING) * mm, font, size)
        for width, value in zip(widths, padded)
    ]


class _PageRenderer:
    def __init__(self, canvas: pdf_canvas.Canvas, page_height: float):
        self.canvas = canvas
        self.page_height = page_height

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    def text(self, cmd: TextAt) -> None:
        font = FONT_BOLD if cmd.role in (TextRole.TITLE, TextRole.SECTION_TITLE) else FONT
        self.canvas.setFont(font, cmd.font_size)
        self.canvas.setFillColor(colors.black)
        x, y = cmd.x * mm, self._y(cmd.y)
        if cmd.align == Alignment.CENTER:
            self.canvas.drawCentredString(x, y, cmd.text)
        elif cmd.align == Alignment.RIGHT:
            self.canvas.drawRightString(x, y, cmd.text)
        else:
            self.canvas.drawString(x, y, cmd.text)

    def table(self, cmd: Table) -> None:
        row_h = float(cmd.style_hints.get("row_height", 7.0))
        body_size = float(cmd.style_hints.get("font_size", 9))
        head_size = float(cmd.style_hints.get("header_font_size", 10))
        n_rows = 1 + len(cmd.body_rows)

        data = [_fit_cells(cmd.header_row, cmd.column_widths, FONT_BOLD, head_size)]
        for row in cmd.body_rows:
            data.append(_fit_cells(row.cells, cmd.column_widths, FONT, body_size))

        style = [
            ("BACKGROUND", (0, 0), (-1, 0), _rgb(HEADER_FILL)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), FONT_BOLD),
            ("FONTSIZE", (0, 0), (-1, 0), head_size),
            ("FONTNAME", (0, 1), (-1, -1), FONT),
            ("FONTSIZE", (0, 1), (-1, -1), body_size),
            ("TEXTCOLOR", (0, 1), (-1, -1), colors.black),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING * mm),
            ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING * mm),
            ("TOPPADDING", (0, 0), (-1, -1), 0),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
        ]
        if cmd.body_rows:
            style.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _rgb(STRIPE_FILL)]))

        t = PlatypusTable(
            data,
            colWidths=[w * mm for w in cmd.column_widths],
            rowHeights=[row_h * mm] * n_rows,
        )
        t.setStyle(TableStyle(style))
        t.wrapOn(self.canvas, sum(cmd.column_widths) * mm, n_rows * row_h * mm)
        t.drawOn(self.canvas, cmd.x * mm, self._y(cmd.y + n_rows * row_h))

        for i, row in enumerate(cmd.body_rows):
            self._badge(cmd.x, cmd.y + row_h * (i + 1), row_h, row)

    def _badge(self, x: float, top: float, row_h: float, row: Row) -> None:
        if row.badge is None:
            return
        self.canvas.setFillColor(colors.HexColor(BADGE_COLORS[row.badge.level]))
        self.canvas.circle((x - 2.0) * mm, self._y(top + row_h / 2), 0.9 * mm, stroke=0, fill=1)


def render_pdf(doc: Document, title: str = "") -> bytes:
    """Render every page's draw commands in order and return the PDF bytes."""
    if doc.total_pages is None:
        logger.warning("Rendering a document that has not been footer-stamped")
    buffer = BytesIO()
    try:
        canvas = pdf_canvas.Canvas(buffer, pagesize=(doc.page_width * mm, doc.page_height * mm))
        if title:
            canvas.setTitle(title)
        page_renderer = _PageRenderer(canvas, doc.page_height)
        for page in doc.pages:
            for cmd in page.commands:
                if isinstance(cmd, TextAt):
                    page_renderer.text(cmd)
                elif isinstance(cmd, Table):
                    page_renderer.table(cmd)
                else:
                    raise RenderError(f"Unsupported draw command: {type(cmd).__name__}")
            canvas.showPage()
        canvas.save()
    except RenderError:
        raise
    except Exception as exc:
        raise RenderError(f"PDF rendering failed: {exc}") from exc
    logger.info(f"Rendered {len(doc.pages)} page(s) to PDF")
    return buffer.getvalue()
