"""Prober module - Concurrent fetching and page classification."""

from appcheck.prober.scanner import ProberEngine
from appcheck.prober.heuristics import ResponseClassifier

__all__ = [
    "ProberEngine",
    "ResponseClassifier",
]
