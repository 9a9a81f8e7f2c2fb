"""
================================================================================
Raw Results Collector (pytest plugin)
================================================================================

Writes the raw run document that `test_result_json` normalizes, in the same
nested shape the Playwright JSON reporter produces:

    test file  -> suite
    test class -> nested suite
    test       -> spec with one test and one result

Enable with `--results-json test-results/results.json`. Under pytest-xdist
only the controller process writes; worker reports reach it through
`pytest_runtest_logreport`.

================================================================================
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from loguru import logger

from portfolio_tools.common import get_config


PLUGIN_NAME = "results-collector"


@dataclass
class CollectedResult:
    """Outcome of one test item across its setup/call/teardown phases."""

    nodeid: str
    status: str = "passed"
    duration: float = 0.0
    error: Optional[str] = None

    def record(self, report: pytest.TestReport) -> None:
        self.duration += report.duration
        if report.failed:
            self.status = "failed"
            if self.error is None:
                self.error = report.longreprtext
        elif report.skipped and self.status == "passed":
            self.status = "skipped"


def split_nodeid(nodeid: str):
    """Return (file, [classes], test name) for a pytest node id."""
    parts = nodeid.split("::")
    return parts[0], parts[1:-1], parts[-1]


def _find_or_add_suite(suites: List[Dict[str, Any]], title: str, file: str) -> Dict[str, Any]:
    for suite in suites:
        if suite["title"] == title:
            return suite
    suite = {"title": title, "file": file, "specs": [], "suites": []}
    suites.append(suite)
    return suite


def build_report(
    results: List[CollectedResult],
    start_time: datetime,
    duration_ms: float,
    project_name: str = "pytest",
) -> Dict[str, Any]:
    """Arrange collected results into the nested raw run document."""
    suites: List[Dict[str, Any]] = []

    for item in results:
        file, classes, name = split_nodeid(item.nodeid)
        suite = _find_or_add_suite(suites, file, file)
        for class_name in classes:
            suite = _find_or_add_suite(suite["suites"], class_name, file)

        result: Dict[str, Any] = {
            "status": item.status,
            "duration": int(round(item.duration * 1000)),
        }
        if item.error:
            result["error"] = {"message": item.error}

        suite["specs"].append({
            "title": name,
            "ok": item.status != "failed",
            "tests": [{"projectName": project_name, "results": [result]}],
        })

    return {
        "stats": {
            "startTime": start_time.astimezone(timezone.utc).isoformat(timespec="milliseconds"),
            "duration": round(duration_ms, 3),
            "expected": sum(1 for r in results if r.status == "passed"),
            "unexpected": sum(1 for r in results if r.status == "failed"),
            "skipped": sum(1 for r in results if r.status == "skipped"),
        },
        "suites": suites,
    }


class ResultsCollector:
    """Accumulates test reports and writes the raw run document at session end."""

    def __init__(self, output: Path, project_name: str = "pytest"):
        self.output = Path(output)
        self.project_name = project_name
        self.results: Dict[str, CollectedResult] = {}
        self.start_time = datetime.now(timezone.utc)
        self._started = time.monotonic()

    def pytest_sessionstart(self, session):
        self.start_time = datetime.now(timezone.utc)
        self._started = time.monotonic()

    def pytest_runtest_logreport(self, report: pytest.TestReport):
        if report.outcome == "rerun":
            return
        entry = self.results.get(report.nodeid)
        if entry is None:
            entry = self.results[report.nodeid] = CollectedResult(report.nodeid)
        entry.record(report)

    def pytest_sessionfinish(self, session, exitstatus):
        duration_ms = (time.monotonic() - self._started) * 1000
        document = build_report(
            list(self.results.values()),
            self.start_time,
            duration_ms,
            project_name=self.project_name,
        )
        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.output.write_text(json.dumps(document, indent=2), encoding="utf-8")
        logger.info(f"Raw results written to {self.output} ({len(self.results)} tests)")


# ================================================================================
# Hooks
# ================================================================================

def pytest_addoption(parser):
    group = parser.getgroup("results-json", "raw run document for result upload")
    group.addoption(
        "--results-json",
        action="store",
        default=None,
        metavar="PATH",
        help="Write the raw run document to PATH",
    )


def pytest_configure(config):
    path = config.getoption("results_json")
    # xdist workers forward their reports to the controller
    if not path or hasattr(config, "workerinput"):
        return
    project_name = config.getoption("browser", None) or get_config("browser.type", "chromium")
    config.pluginmanager.register(ResultsCollector(Path(path), project_name), PLUGIN_NAME)


def pytest_unconfigure(config):
    collector = config.pluginmanager.get_plugin(PLUGIN_NAME)
    if collector is not None:
        config.pluginmanager.unregister(collector, PLUGIN_NAME)
