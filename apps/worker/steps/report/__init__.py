from .filters import filter_records
from .sections import build_section
from .statistics import build_statistics_section
from .layout import LayoutError, layout
from .footer import stamp
from .orchestrator import ReportBuildError, build_admin_report, build_clinical_report, render_report_exports
from .pdf_render import RenderError, render_pdf
from .csv_render import generate_csv

__all__ = [
    "filter_records",
    "build_section",
    "build_statistics_section",
    "LayoutError",
    "layout",
    "stamp",
    "ReportBuildError",
    "build_admin_report",
    "build_clinical_report",
    "render_report_exports",
    "RenderError",
    "render_pdf",
    "generate_csv",
]
