"""Shared pytest fixtures for attr-validator tests."""

from pathlib import Path

import pytest
import structlog

from attr_validator.testing import FakeTypeRegistry


@pytest.fixture(autouse=True, scope="session")
def _route_structlog_to_stdlib():
    """Send structlog events through stdlib logging so caplog sees them and
    nothing is printed on stdout."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_php(tmp_path):
    """Write a PHP file under tmp_path and return its path."""

    def _write(relpath: str, body: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        return path

    return _write


@pytest.fixture
def registry():
    return FakeTypeRegistry()
