"""Report rendering.

The text report is a comma-joined table with a fixed header. Notes are
written as-is, without quoting, so a note containing commas spills into
extra columns; consumers that need a strict format should use JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from appcheck.core.exceptions import ReportError
from appcheck.core.models import ProbeReport, ProbeResult

REPORT_HEADER = "Application,Accessible,HTTP Status,Notes"

REPORT_FORMATS = ("text", "json")


def format_row(result: ProbeResult) -> str:
    """Render one result as a report line."""
    accessible = "true" if result.reachable else "false"
    return f"{result.target},{accessible},{result.status},{result.notes}"


def render_text_report(report: ProbeReport) -> str:
    """Render the header and one line per result, in report order."""
    lines = [REPORT_HEADER]
    lines.extend(format_row(result) for result in report.results)
    return "\n".join(lines) + "\n"


def render_json_report(report: ProbeReport) -> str:
    """Render the report with summary counts as a JSON document."""
    data = {
        "summary": {
            "total": report.total,
            "reachable": report.reachable_count,
            "unreachable": report.unreachable_count,
            "started_at": report.started_at.isoformat(),
            "finished_at": report.finished_at.isoformat() if report.finished_at else None,
            "duration_seconds": report.duration_seconds,
        },
        "results": [r.model_dump(mode="json") for r in report.results],
    }
    return json.dumps(data, indent=2) + "\n"


def render_report(report: ProbeReport, fmt: str = "text") -> str:
    if fmt == "text":
        return render_text_report(report)
    if fmt == "json":
        return render_json_report(report)
    raise ReportError(
        f"Unknown report format '{fmt}' (expected one of: {', '.join(REPORT_FORMATS)})"
    )


def write_report(
    report: ProbeReport,
    fmt: str = "text",
    path: Optional[Path] = None,
) -> str:
    """
    Render a report and optionally write it to a file.

    Args:
        report: Completed probe report
        fmt: "text" or "json"
        path: Destination file; parent directories are created

    Returns:
        The rendered report
    """
    content = render_report(report, fmt)

    if path is not None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ReportError(f"Cannot write report to {path}: {e}") from e

    return content
