"""Reports module - Text and JSON report rendering."""

from appcheck.reports.text import render_report, write_report

__all__ = [
    "render_report",
    "write_report",
]
