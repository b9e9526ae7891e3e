"""appcheck - Probe hosted applications and spot platform placeholder pages."""

__version__ = "1.0.0"

from appcheck.core.config import Settings
from appcheck.core.models import ProbeReport, ProbeResult
from appcheck.prober.scanner import ProberEngine

__all__ = [
    "Settings",
    "ProbeReport",
    "ProbeResult",
    "ProberEngine",
]
