"""Tests for logging configuration and diagnostics capture."""

import io
import json

import pytest

from sitegen.blueprint import Blueprint, Page, PageView, View
from sitegen.compiler import SiteCompiler
from sitegen.core import LogContext, capture_diagnostics, configure_logging, get_logger


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    configure_logging("DEBUG")


@pytest.mark.unit
def test_capture_collects_warnings_only(log_stream):
    configure_logging("DEBUG", stream=log_stream)
    logger = get_logger("sitegen.tests.capture")

    with capture_diagnostics() as records:
        logger.info("started", views=2)
        logger.warning("view_not_found", view_id="v9")
        logger.error("broken", reason="x")

    assert [(r["level"], r["event"]) for r in records] == [("warning", "view_not_found"), ("error", "broken")]
    assert records[0]["view_id"] == "v9"


@pytest.mark.unit
def test_capture_ignores_log_level(log_stream):
    configure_logging("ERROR", stream=log_stream)
    logger = get_logger("sitegen.tests.level")

    with capture_diagnostics() as records:
        logger.warning("filtered_but_collected")

    assert [r["event"] for r in records] == ["filtered_but_collected"]
    assert "filtered_but_collected" not in log_stream.getvalue()


@pytest.mark.unit
def test_no_capture_outside_block(log_stream):
    configure_logging("DEBUG", stream=log_stream)
    logger = get_logger("sitegen.tests.outside")

    with capture_diagnostics() as records:
        pass
    logger.warning("after_block")

    assert records == []


@pytest.mark.unit
def test_json_logs_with_run_context(log_stream):
    configure_logging("INFO", json_logs=True, stream=log_stream)
    logger = get_logger("sitegen.tests.json")

    with LogContext(run_id="run_01"):
        logger.info("compile_started", views=3)

    record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
    line = json.loads(record["message"])
    assert line["event"] == "compile_started"
    assert line["run_id"] == "run_01"
    assert line["views"] == 3


@pytest.mark.integration
def test_site_reports_diagnostics(settings):
    blueprint = Blueprint(
        views=[View(id="v1", name="Intro", type="text")],
        pages=[Page(id="p", name="Home", is_home=True, views=[PageView(id="v1"), PageView(id="ghost", rowpos=1)])],
    )
    site = SiteCompiler(settings).compile(blueprint)

    missing = [d for d in site.diagnostics if d["event"] == "page_view_not_found"]
    assert len(missing) == 1
    assert missing[0]["view_id"] == "ghost"
    assert missing[0]["run_id"] == site.run_id
