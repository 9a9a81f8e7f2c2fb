"""
================================================================================
Portfolio Tools
================================================================================

Utilities around the portfolio site UI suite.

Modules:
    - common: Shared configuration and logging utilities
    - report_tools: Raw results collection, normalization and upload

Example:
    from portfolio_tools.report_tools import create_test_result_json, upload_test_result

    create_test_result_json("test-results/results.json", "test-results/test-result.json")
    upload_test_result("test-results/test-result.json")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
