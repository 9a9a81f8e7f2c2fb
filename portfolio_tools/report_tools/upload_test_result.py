"""
================================================================================
Test Result Upload
================================================================================

Posts a normalized run record to the results backend that feeds the
site's Live Automation dashboard.

Features:
    - Strips the human-readable `display` block before sending
    - JSON body, bounded request timeout
    - Non-2xx answers and transport errors become UploadError (exit code 1)

Usage:
    python -m portfolio_tools.report_tools.upload_test_result test-results/test-result.json

================================================================================
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import httpx
from loguru import logger

from portfolio_tools.common import get_config, init_logger


DEFAULT_UPLOAD_TIMEOUT = 60.0


class UploadError(Exception):
    """Raised when the backend rejects the upload or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def load_payload(result_file: str) -> Dict[str, Any]:
    """
    Read a run record and drop its display-only fields.

    Raises:
        FileNotFoundError: The file does not exist
        json.JSONDecodeError: The file is not valid JSON
    """
    data = json.loads(Path(result_file).read_text(encoding="utf-8"))
    data.pop("display", None)
    return data


def upload_test_result(
    result_file: str,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Response:
    """
    Upload a run record.

    Args:
        result_file: Normalized run record on disk
        url: Endpoint (defaults to reporting.upload_url)
        timeout: Request timeout in seconds (defaults to reporting.upload_timeout)
        transport: Optional httpx transport (used by tests)

    Returns:
        The successful response

    Raises:
        UploadError: Non-2xx status or no response
    """
    url = url or get_config("reporting.upload_url")
    if not url:
        raise UploadError("No upload URL configured (reporting.upload_url)")
    timeout = float(timeout or get_config("reporting.upload_timeout", DEFAULT_UPLOAD_TIMEOUT))

    payload = load_payload(result_file)
    logger.info(f"Uploading test results to {url}:\n{json.dumps(payload, indent=2)}")

    try:
        with httpx.Client(timeout=httpx.Timeout(timeout), transport=transport) as client:
            response = client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
    except httpx.RequestError as e:
        raise UploadError(f"No response received: {e}") from e

    if not response.is_success:
        raise UploadError(
            f"Upload failed with status {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    logger.info(f"Upload successful: {response.text}")
    return response


def main(
    argv: Optional[Sequence[str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """Command line entry point. Returns the process exit code."""
    init_logger()

    parser = argparse.ArgumentParser(description="Upload a normalized test run record")
    parser.add_argument("result_file", help="Normalized run record JSON")
    parser.add_argument("--url", default=None, help="Override reporting.upload_url")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    try:
        upload_test_result(args.result_file, url=args.url, timeout=args.timeout, transport=transport)
    except FileNotFoundError:
        logger.error(f"Result file not found: {args.result_file}")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Result file is not valid JSON: {e}")
        return 1
    except UploadError as e:
        logger.error(str(e))
        if e.status_code is not None:
            logger.error(f"Status: {e.status_code}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
