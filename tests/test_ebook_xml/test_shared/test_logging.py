"""Tests for correlation-aware logging and diagnostic types."""

import logging

import pytest

from ebook_xml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseMetrics,
    get_logger,
)


class TestCorrelationLogger:
    """Test the logging wrapper."""

    def test_component_defaults_to_module_name(self) -> None:
        """Test the derived component name."""
        logger = get_logger("ebook_xml.tree.builder")

        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that extra fields reach the log record."""
        logger = get_logger("ebook_xml.test", "book-1", "tests")

        with caplog.at_level(logging.DEBUG, logger="ebook_xml.test"):
            logger.debug("scanning", extra={"offset": 12})

        record = caplog.records[0]
        assert record.getMessage() == "scanning"
        assert record.component == "tests"
        assert record.correlation_id == "book-1"
        assert record.offset == 12

    def test_is_enabled_for(self) -> None:
        """Test level checks are delegated to the underlying logger."""
        logger = get_logger("ebook_xml.test.levels")
        logger.logger.setLevel(logging.WARNING)

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)

    def test_exposes_only_debug_logging(self) -> None:
        """Test that the parser logs recoveries at debug level only."""
        logger = get_logger("ebook_xml.test.surface")

        for level in ("info", "warning", "error"):
            assert not hasattr(logger, level)


class TestDiagnosticEntry:
    """Test diagnostic entries."""

    def test_requires_message_and_component(self) -> None:
        """Test validation of required fields."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "tree_builder")
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "")

    def test_offset_and_to_dict(self) -> None:
        """Test offset access and dictionary export."""
        entry = DiagnosticEntry(
            DiagnosticSeverity.WARNING,
            "Truncated start tag dropped",
            "tree_builder",
            position={"offset": 7},
            details={"tag": "p"},
        )

        assert entry.offset == 7
        assert entry.to_dict()["severity"] == "WARNING"
        assert entry.to_dict()["details"] == {"tag": "p"}

    def test_offset_without_position(self) -> None:
        entry = DiagnosticEntry(DiagnosticSeverity.DEBUG, "note", "tests")

        assert entry.offset is None


class TestParseMetrics:
    """Test derived metric values."""

    def test_characters_per_second(self) -> None:
        metrics = ParseMetrics(processing_time_ms=500.0, characters_processed=1000)

        assert metrics.characters_per_second == 2000.0

    def test_zero_time(self) -> None:
        assert ParseMetrics().characters_per_second == 0.0
