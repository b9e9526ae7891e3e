"""Tests for custom exceptions module."""

import pytest

from appcheck.core.exceptions import (
    AppCheckError,
    ConfigError,
    ProbeError,
    ReportError,
    TargetListError,
)


class TestExceptionHierarchy:
    """Tests for exception inheritance structure."""

    def test_base_exception_inherits_from_exception(self):
        """AppCheckError should inherit from Exception."""
        assert issubclass(AppCheckError, Exception)

    @pytest.mark.parametrize("error", [ConfigError, TargetListError, ProbeError, ReportError])
    def test_errors_inherit_from_base(self, error):
        assert issubclass(error, AppCheckError)


class TestExceptionCatching:
    """Tests for catching exceptions at different levels."""

    def test_catch_base_catches_all(self):
        """Catching AppCheckError should catch all custom exceptions."""
        with pytest.raises(AppCheckError):
            raise TargetListError("Target file missing")

        with pytest.raises(AppCheckError):
            raise ReportError("Cannot write report")

    def test_exception_message(self):
        """Exception should preserve error message."""
        error_msg = "Target file 'apps.txt' does not exist"
        try:
            raise TargetListError(error_msg)
        except TargetListError as e:
            assert str(e) == error_msg

    def test_exception_can_wrap_cause(self):
        """Exception should be able to wrap original cause."""
        original = OSError("Permission denied")
        try:
            try:
                raise original
            except OSError as e:
                raise TargetListError("Error reading target file") from e
        except TargetListError as e:
            assert e.__cause__ is original
