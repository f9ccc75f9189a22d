from __future__ import annotations

from packages.shared.models import Column, ReportConfig, Row, Section, TextAt, TextRole
from apps.worker.steps.report.footer import footer_text, stamp
from apps.worker.steps.report.layout import layout


def _doc(n_rows: int):
    section = Section(
        title="Active Admissions",
        columns=[Column(header="Patient Name")],
        rows=[Row(cells=[f"p{i}"]) for i in range(n_rows)],
    )
    return layout([section], ReportConfig())


def _footers(page) -> list[TextAt]:
    return [c for c in page.commands if isinstance(c, TextAt) and c.role == TextRole.FOOTER]


def test_footer_text():
    assert footer_text(2, 5) == "Page 2 of 5"


def test_every_page_gets_one_footer_with_total():
    doc = stamp(_doc(80))
    total = len(doc.pages)
    assert total > 1
    assert doc.total_pages == total
    for page in doc.pages:
        footers = _footers(page)
        assert [f.text for f in footers] == [f"Page {page.index} of {total}"]


def test_footer_position_is_centered_near_bottom():
    config = ReportConfig()
    doc = stamp(_doc(1), config)
    footer = _footers(doc.pages[0])[0]
    assert footer.x == config.page_width / 2
    assert footer.y == config.page_height - config.footer_offset
    assert footer.align == "center"


def test_stamp_does_not_mutate_input():
    raw = _doc(80)
    before = [len(p.commands) for p in raw.pages]
    stamped = stamp(raw)
    assert raw.total_pages is None
    assert [len(p.commands) for p in raw.pages] == before
    assert [len(p.commands) for p in stamped.pages] == [n + 1 for n in before]


def test_stamp_keeps_existing_commands_in_order():
    raw = _doc(3)
    stamped = stamp(raw)
    assert stamped.pages[0].commands[:-1] == raw.pages[0].commands
