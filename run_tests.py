#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# This is the main entry point for executing the test suites.
# It provides a unified interface for running the UI and unit suites and for
# publishing the run to the Live Automation dashboard.
#
# Features:
#   - Run UI tests (desktop and mobile viewports)
#   - Run framework unit tests
#   - Generate Allure reports
#   - Normalize the raw results and upload them to the results backend
#
# Usage:
#   python run_tests.py --suite ui --tags P0 smoke
#   python run_tests.py --suite ui --browser firefox --headed
#   python run_tests.py --suite all --parallel 4 --report --upload
#
# ================================================================================

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from portfolio_tools.common import get_config
from portfolio_tools.report_tools.allure_utils import generate_allure_report
from portfolio_tools.report_tools.test_result_json import create_test_result_json
from portfolio_tools.report_tools.upload_test_result import UploadError, upload_test_result


# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO"
)


SUITE_PATHS = {
    "ui": "testsuites/ui_testing/tests",
    "unit": "testsuites/unit",
    "all": "testsuites/",
}


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    This class handles:
    - Test suite selection and execution
    - Parallel execution configuration
    - Allure report generation
    - Result normalization and upload
    """

    def __init__(
        self,
        suite: str = "all",
        tags: Optional[List[str]] = None,
        parallel: int = 1,
        browser: Optional[str] = None,
        headed: bool = False,
        base_url: Optional[str] = None,
        allure_report: bool = True,
        report: bool = False,
        upload: bool = False,
        verbose: bool = False
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "ui", "unit", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers
            browser: Browser for UI tests - "chromium", "firefox", "webkit"
            headed: Run browser with a visible window
            base_url: Site under test (defaults to site.base_url)
            allure_report: Generate Allure report
            report: Write the normalized run record after the run
            upload: Upload the run record (implies report)
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.browser = browser
        self.headed = headed
        self.base_url = base_url
        self.allure_report = allure_report
        self.upload = upload
        self.report = report or upload
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"
        self.raw_results = self.root_dir / get_config("reporting.raw_results")
        self.run_record = self.root_dir / get_config("reporting.output")

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.suite in ["ui", "all"]:
            logger.info(f"Browser: {self.browser or get_config('browser.type')}")
            logger.info(f"Headed: {self.headed}")
            logger.info(f"Site: {self.base_url or get_config('site.base_url')}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self._build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=str(self.root_dir))
            exit_code = result.returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            logger.info("Generating Allure report...")
            generate_allure_report(str(self.allure_results), str(self.allure_report_dir))

        publish_code = self._publish_results()

        self._print_summary(exit_code)

        return exit_code or publish_code

    def _prepare_environment(self) -> None:
        """Prepare test environment."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        self.allure_results.mkdir(parents=True, exist_ok=True)
        self.raw_results.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def _build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", SUITE_PATHS[self.suite]]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        if self.report:
            cmd.extend(["--results-json", str(self.raw_results)])

        cmd.append("-v" if self.verbose else "-q")

        if self.suite in ["ui", "all"]:
            if self.browser:
                cmd.append(f"--browser={self.browser}")
            if self.headed:
                cmd.append("--headed")
            if self.base_url:
                cmd.append(f"--base-url={self.base_url}")

        return cmd

    def _publish_results(self) -> int:
        """Normalize the raw results and optionally upload them."""
        if not self.report:
            return 0

        try:
            create_test_result_json(
                str(self.raw_results),
                str(self.run_record),
                project=get_config("reporting.project"),
            )
        except (OSError, ValueError) as e:
            logger.error(f"Failed to create run record: {e}")
            return 1

        if not self.upload:
            return 0

        try:
            upload_test_result(str(self.run_record))
        except UploadError as e:
            logger.error(f"Failed to upload run record: {e}")
            return 1
        return 0

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")
        if self.report:
            logger.info(f"📄 Run record: {self.run_record}")

        logger.info("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Portfolio Site Automation Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run all UI tests
  python run_tests.py --suite ui

  # Run P0 smoke tests in parallel
  python run_tests.py --suite ui --tags P0 smoke --parallel 4

  # Run UI tests with visible browser
  python run_tests.py --suite ui --headed --browser firefox

  # Full run, publish to the Live Automation dashboard
  python run_tests.py --suite all --upload
        """
    )

    parser.add_argument(
        "--suite",
        choices=list(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke regression mobile)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser for UI tests (default: browser.type)"
    )

    parser.add_argument(
        "--headed",
        action="store_true",
        help="Run browser in headed mode (visible)"
    )

    parser.add_argument(
        "--base-url",
        default=None,
        help="Site under test (default: site.base_url)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--report",
        action="store_true",
        help="Write the normalized run record after the run"
    )

    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload the run record to the results backend (implies --report)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        browser=args.browser,
        headed=args.headed,
        base_url=args.base_url,
        allure_report=not args.no_allure,
        report=args.report,
        upload=args.upload,
        verbose=args.verbose
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
