"""
Layout engine: lays sections out on fixed-size pages.

Vertical positions grow downward from the top edge of the page. Every row has
the same height, so a page break is decided before a row is written and a row
never straddles two pages. Footers are not written here; see footer.py.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from packages.shared.models import (
    Alignment,
    Column,
    Document,
    Page,
    ReportConfig,
    Row,
    Section,
    Table,
    TextAt,
    TextRole,
)

logger = logging.getLogger(__name__)

# Baseline position inside a text line box, as a fraction of the line height.
_BASELINE = 0.75


class LayoutError(ValueError):
    """Raised when content cannot be placed on a page at all."""


@dataclass(frozen=True)
class HeaderLine:
    text: str
    font_size: float
    height: float
    role: TextRole = TextRole.HEADER


def resolve_column_widths(columns: Sequence[Column], content_width: float) -> list[float]:
    """
    Fixed widths are kept as given; the single auto column (width None) takes
    what is left of content_width. With no fixed widths at all the columns
    share the width equally.
    """
    if not columns:
        return []
    auto = [i for i, c in enumerate(columns) if c.width is None]
    if len(auto) == len(columns):
        share = content_width / len(columns)
        return [share] * len(columns)
    if len(auto) > 1:
        raise LayoutError(f"At most one auto-width column is allowed, got {len(auto)}")
    widths = [c.width if c.width is not None else 0.0 for c in columns]
    if auto:
        remaining = content_width - sum(widths)
        if remaining < 0:
            logger.warning(f"Fixed columns exceed content width by {-remaining:.1f}; auto column collapsed")
            remaining = 0.0
        widths[auto[0]] = remaining
    return widths


def check_geometry(config: ReportConfig, header_lines: Sequence[HeaderLine] = ()) -> None:
    """Fail fast when a section's minimum footprint cannot fit on an empty page."""
    body = config.body_height
    minimum = config.title_height + 2 * config.row_height
    if body <= 0:
        raise LayoutError(f"Page body height must be positive, got {body}")
    if minimum > body:
        raise LayoutError(
            f"A section title plus header row plus one row needs {minimum} units "
            f"but the page body is only {body}"
        )
    header_total = sum(line.height for line in header_lines)
    if header_total > body:
        raise LayoutError(f"Report header needs {header_total} units but the page body is only {body}")


@dataclass
class PageBuilder:
    """Mutable layout state for one layout() call: the cursor and the pages so far."""
    config: ReportConfig
    pages: list[Page] = field(default_factory=list)
    current: Page | None = None
    cursor_y: float = 0.0
    table: Table | None = None

    @property
    def limit(self) -> float:
        return self.config.page_height - self.config.bottom_margin

    @property
    def at_top(self) -> bool:
        return self.cursor_y <= self.config.top_margin

    def fits(self, height: float) -> bool:
        return self.cursor_y + height <= self.limit

    def start_page(self) -> None:
        self.current = Page(index=len(self.pages) + 1, cursor_y=self.config.top_margin)
        self.cursor_y = self.config.top_margin

    def finish_page(self) -> None:
        if self.current is None:
            return
        self.table = None
        self.current.cursor_y = min(self.cursor_y, self.limit)
        self.pages.append(self.current)
        self.current = None

    def break_page(self) -> None:
        logger.debug(f"Page break after page {self.current.index if self.current else 0}")
        self.finish_page()
        self.start_page()

    def write_text(self, line: HeaderLine, align: Alignment = Alignment.CENTER) -> None:
        if not line.text:
            self.cursor_y += line.height
            return
        cfg = self.config
        x = cfg.page_width / 2 if align == Alignment.CENTER else cfg.left_margin
        self.current.commands.append(TextAt(
            x=x,
            y=self.cursor_y + line.height * _BASELINE,
            font_size=line.font_size,
            text=line.text,
            align=align,
            role=line.role,
        ))
        self.cursor_y += line.height

    def open_table(self, section: Section, widths: list[float]) -> None:
        cfg = self.config
        self.table = Table(
            x=cfg.left_margin,
            y=self.cursor_y,
            column_widths=widths,
            header_row=section.header_row,
            style_hints={
                "row_height": cfg.row_height,
                "font_size": cfg.body_font_size,
                "header_font_size": cfg.header_font_size,
                "theme": "striped",
            },
        )
        self.current.commands.append(self.table)
        self.cursor_y += cfg.row_height

    def write_row(self, row: Row) -> None:
        self.table.body_rows.append(row)
        self.cursor_y += self.config.row_height

    def close_table(self) -> None:
        self.table = None


def layout(
    sections: Sequence[Section],
    config: ReportConfig | None = None,
    header_lines: Sequence[HeaderLine] = (),
) -> Document:
    """
    Lay sections out in order. The returned document has no footers and
    total_pages is left unset until footer stamping.
    """
    config = config or ReportConfig()
    check_geometry(config, header_lines)

    builder = PageBuilder(config=config)
    builder.start_page()
    for line in header_lines:
        builder.write_text(line)

    section_minimum = config.title_height + 2 * config.row_height
    for section in sections:
        widths = resolve_column_widths(section.columns, config.content_width)

        if not builder.fits(section_minimum) and not builder.at_top:
            builder.break_page()

        builder.write_text(
            HeaderLine(section.title, config.section_font_size, config.title_height, TextRole.SECTION_TITLE),
            align=Alignment.LEFT,
        )
        builder.open_table(section, widths)

        for row in section.rows:
            if not builder.fits(config.row_height):
                builder.close_table()
                builder.break_page()
                builder.open_table(section, widths)
            builder.write_row(row)

        builder.close_table()
        builder.cursor_y += config.section_gap

    builder.finish_page()
    logger.info(f"Laid out {len(sections)} section(s) on {len(builder.pages)} page(s)")
    return Document(
        pages=builder.pages,
        total_pages=None,
        page_width=config.page_width,
        page_height=config.page_height,
    )
