from __future__ import annotations

import json
import logging
import sys

import pytest

from fuel_exporter.core.logging import (
    _ContainerFormatter,
    _JsonFormatter,
    request_id_var,
    setup_logging,
)


def test_setup_logging_sets_root_level() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_writes_to_stdout() -> None:
    setup_logging("info")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert handlers[0].stream is sys.stdout


def test_setup_logging_picks_formatter() -> None:
    setup_logging("info", json_format=True)
    assert isinstance(logging.getLogger().handlers[0].formatter, _JsonFormatter)

    setup_logging("info")
    assert isinstance(logging.getLogger().handlers[0].formatter, _ContainerFormatter)


def test_setup_logging_quiets_httpx_at_debug() -> None:
    setup_logging("debug")
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("uvicorn").level == logging.WARNING


def test_setup_logging_allows_uvicorn_at_error() -> None:
    setup_logging("error")
    assert logging.getLogger("uvicorn").level == logging.ERROR


def test_formatter_excludes_location_for_info() -> None:
    fmt = _ContainerFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="Loaded %d stations for %s",
        args=(3, "AB1 2CD"),
        exc_info=None,
    )
    output = fmt.format(record)
    assert "Loaded 3 stations for AB1 2CD" in output
    assert "[test.py:" not in output


def test_formatter_includes_location_for_warning() -> None:
    fmt = _ContainerFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.WARNING,
        pathname="test.py",
        lineno=42,
        msg="bad thing",
        args=(),
        exc_info=None,
    )
    output = fmt.format(record)
    assert "bad thing" in output
    assert "[test.py:42]" in output


def test_request_id_survives_repeated_setup(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("info")
    setup_logging("info", json_format=True)

    token = request_id_var.set("scrape-7")
    try:
        logging.getLogger("fuel_exporter.services.renderer").info("rendering")
    finally:
        request_id_var.reset(token)
    logging.getLogger("fuel_exporter.server").info("outside a request")

    entries = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert entries[0]["request_id"] == "scrape-7"
    assert "request_id" not in entries[1]


def test_container_formatter_shows_request_id() -> None:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="GET /metrics",
        args=(),
        exc_info=None,
    )
    record.request_id = "scrape-8"  # type: ignore[attr-defined]
    assert _ContainerFormatter().format(record).endswith("  request_id=scrape-8")
