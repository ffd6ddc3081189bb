"""Tests for logging configuration."""

import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from impact_analyzer.config.models import LoggingConfig
from impact_analyzer.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Reset loguru sinks after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_file_sink_receives_messages(self, tmp_path: Path) -> None:
        log_file = tmp_path / "impact.log"

        configure_logging(LoggingConfig(level="INFO", file=log_file))
        logger.info("analysis started for {}", "api")
        logger.complete()

        assert "analysis started for api" in log_file.read_text()

    def test_stdlib_logging_is_intercepted(self, tmp_path: Path) -> None:
        log_file = tmp_path / "impact.log"

        configure_logging(LoggingConfig(level="DEBUG", file=log_file))
        logging.getLogger("some.library").warning("library warning")
        logger.complete()

        assert "library warning" in log_file.read_text()

    def test_level_filters_messages(self, tmp_path: Path) -> None:
        log_file = tmp_path / "impact.log"

        configure_logging(LoggingConfig(level="WARNING", file=log_file))
        logger.info("quiet")
        logger.warning("loud")
        logger.complete()

        content = log_file.read_text()
        assert "loud" in content
        assert "quiet" not in content

    def test_file_records_carry_repo_context(self, tmp_path: Path) -> None:
        log_file = tmp_path / "impact.log"

        configure_logging(LoggingConfig(level="INFO", file=log_file))
        logger.bind(repo="api").info("schema changed")
        logger.info("summary written")
        logger.complete()

        lines = log_file.read_text().splitlines()
        assert "| api |" in lines[0]
        assert "| - |" in lines[1]

    def test_json_format_serializes_records(self, tmp_path: Path) -> None:
        log_file = tmp_path / "impact.jsonl"

        configure_logging(LoggingConfig(level="INFO", format="json", file=log_file))
        logger.bind(repo="web").warning("ts-morph unsupported")
        logger.complete()

        record = json.loads(log_file.read_text().splitlines()[-1])["record"]
        assert record["message"] == "ts-morph unsupported"
        assert record["extra"]["repo"] == "web"
