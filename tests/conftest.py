"""Shared test fixtures for jsonmock tests.

Provides structlog capture configuration, CliRunner fixtures and
template fixtures.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from jsonmock.config import GeneratorSettings
from jsonmock.template.loader import load_template

COUNTRIES_TEMPLATE = "json-generator-countries.json5"
REFERENCE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Reset structlog before each test.

    Invoking the CLI group reconfigures structlog for stderr; every test
    starts again from a plain console renderer on stdout.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Put the stdlib root logger back after configure_logging replaced it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_jsonmock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove JSONMOCK_* variables so settings start from their defaults."""
    for name in ("SEED", "LOCALE", "REFERENCE_TIME", "MAX_REPEAT", "TIMEZONE_OFFSET_MINUTES"):
        monkeypatch.delenv(f"JSONMOCK_{name}", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Runner for invoking the jsonmock CLI in-process."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Runner whose working directory is a fresh temporary directory.

    Commands that default to writing result.json write it there.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def countries_template_path(fixtures_dir: Path) -> Path:
    """Path to the countries/users template."""
    return fixtures_dir / "templates" / COUNTRIES_TEMPLATE


@pytest.fixture
def countries_template(countries_template_path: Path) -> Any:
    """The countries/users template, parsed."""
    return load_template(countries_template_path)


@pytest.fixture
def settings() -> GeneratorSettings:
    """Seeded settings with a fixed reference time."""
    return GeneratorSettings(seed=42, reference_time=REFERENCE_TIME)
