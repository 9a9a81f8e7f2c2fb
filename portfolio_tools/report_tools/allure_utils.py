"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the UI suite and the Allure HTML generation
step used by the test runner.

Features:
- JSON / text attachments
- Report generation via the Allure CLI

================================================================================
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    allure.attach(
        json.dumps(data, indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """Attach plain text to Allure report."""
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


# ================================================================================
# Report Generation
# ================================================================================

def generate_allure_report(results_dir: str, output_dir: Optional[str] = None) -> bool:
    """
    Generate Allure HTML report from results.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Output directory (defaults to a sibling allure-report)

    Returns:
        True if successful
    """
    results_path = Path(results_dir)
    report_path = Path(output_dir) if output_dir else results_path.parent / "allure-report"

    cmd = ["allure", "generate", str(results_path), "-o", str(report_path), "--clean"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure CLI not found. Please install Allure to generate reports.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"Report generated at {report_path}")
    return True
