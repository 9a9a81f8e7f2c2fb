"""
Repository-level pytest configuration.

Why this exists:
  - Register the raw results plugin (`--results-json`) for every run
  - Expose browser selection on the command line (`--browser`, `--headed`, `--base-url`)
  - Initialize loguru once per process

Command line choices are written to the environment so the configuration
loader (and xdist workers, which inherit the environment) see them as
ordinary overrides of config/config.yaml.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from portfolio_tools.common import init_logger


pytest_plugins = ["portfolio_tools.report_tools.results_collector"]


def pytest_addoption(parser):
    group = parser.getgroup("portfolio", "portfolio site UI suite")
    group.addoption(
        "--browser",
        action="store",
        default=None,
        choices=["chromium", "firefox", "webkit"],
        help="Browser engine (overrides browser.type)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )
    group.addoption(
        "--base-url",
        action="store",
        default=None,
        help="Site under test (overrides site.base_url)",
    )


def pytest_configure(config):
    overrides = {
        "BROWSER_TYPE": config.getoption("browser"),
        "SITE_BASE_URL": config.getoption("base_url"),
        "BROWSER_HEADLESS": "false" if config.getoption("headed") else None,
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[key] = value

    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
