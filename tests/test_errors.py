from __future__ import annotations

import pytest

from logstream.errors import (
    ConfigError,
    FileParseError,
    LogstreamError,
    MultipleError,
    UnresolvedCalendarTokenError,
    UnresolvedTokenError,
    UnresolvedTranslationTokenError,
)


class TestMultipleError:
    """Tests for the aggregate error."""

    def test_starts_empty(self) -> None:
        """Test that a new aggregate holds no messages."""
        error = MultipleError()
        assert not error.is_error
        assert len(error) == 0
        assert str(error) == ""

    def test_add_message(self) -> None:
        """Test that messages accumulate in order."""
        error = MultipleError()
        error.add_message("first")
        error.add_message("second")
        assert error.is_error
        assert error.messages == ["first", "second"]
        assert str(error) == "first :: second"

    def test_initial_messages(self) -> None:
        """Test construction from an existing list of messages."""
        error = MultipleError(["a", "b", "c"])
        assert len(error) == 3
        assert str(error) == "a :: b :: c"

    def test_is_raisable(self) -> None:
        """Test that the aggregate can be raised and caught as a LogstreamError."""
        with pytest.raises(LogstreamError, match="broken"):
            raise MultipleError(["broken"])


class TestTokenErrors:
    """Tests for unresolved-token errors."""

    def test_month_message(self) -> None:
        """Test the message for an unknown month name."""
        error = UnresolvedCalendarTokenError("MonthName", "Smarch")
        assert str(error) == "Unable to locate month name: Smarch"
        assert error.group == "MonthName"
        assert error.value == "Smarch"

    def test_day_message(self) -> None:
        """Test the message for an unknown day name."""
        assert str(UnresolvedCalendarTokenError("DayName", "Funday")) == "Unable to locate day name: Funday"

    def test_translation_message(self) -> None:
        """Test the message for a value missing from a custom table."""
        error = UnresolvedTranslationTokenError("Level", "TRACE")
        assert str(error) == "Unable to locate value: (TRACE) in translation map: Level"

    def test_hierarchy(self) -> None:
        """Test that token errors are ValueErrors and LogstreamErrors."""
        error = UnresolvedTranslationTokenError("Level", "TRACE")
        assert isinstance(error, UnresolvedTokenError)
        assert isinstance(error, ValueError)
        assert isinstance(error, LogstreamError)
        assert issubclass(ConfigError, ValueError)


class TestFileParseError:
    """Tests for FileParseError."""

    def test_message_includes_path_and_problems(self) -> None:
        """Test that all problems of one file are joined after its path."""
        error = FileParseError("a.log", ["bad month", "bad day"])
        assert str(error) == "a.log: bad month; bad day"
        assert error.messages == ["bad month", "bad day"]
