"""Custom exceptions for appcheck.

Only failures that prevent building the work list or writing the report are
raised. Per-target network failures never surface as exceptions; the prober
records them as results.
"""

from __future__ import annotations


class AppCheckError(Exception):
    """Base exception for all appcheck errors.

    All custom exceptions inherit from this class, allowing callers to
    catch all appcheck-specific errors with a single except clause.
    """
    pass


class ConfigError(AppCheckError):
    """Raised when a configuration file cannot be read or validated."""
    pass


class TargetListError(AppCheckError):
    """Raised when the target list cannot be read.

    This includes:
    - A missing input file
    - A path that is not a regular file
    - I/O or decoding failures while reading lines
    """
    pass


class ProbeError(AppCheckError):
    """Raised when the prober is misused.

    Network, TLS and body-read failures for individual targets are
    reported in the result notes instead.
    """
    pass


class ReportError(AppCheckError):
    """Raised when a report cannot be rendered or written."""
    pass
