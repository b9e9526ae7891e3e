"""Core module - Configuration, models, and target input."""

from appcheck.core.config import Settings
from appcheck.core.models import Classification, PageCategory, ProbeReport, ProbeResult
from appcheck.core.targets import read_targets

__all__ = [
    "Settings",
    "Classification",
    "PageCategory",
    "ProbeReport",
    "ProbeResult",
    "read_targets",
]
