"""
================================================================================
Report Tools
================================================================================

Run result post-processing for the results backend and Allure.

Modules:
    - results_collector: pytest plugin writing the raw run document
    - test_result_json: raw run document -> normalized run record
    - upload_test_result: POST the run record to the backend
    - allure_utils: Allure attachments and HTML report generation

================================================================================
"""

from .test_result_json import build_test_result, create_test_result_json
from .upload_test_result import UploadError, upload_test_result

__all__ = [
    "build_test_result",
    "create_test_result_json",
    "UploadError",
    "upload_test_result",
]
