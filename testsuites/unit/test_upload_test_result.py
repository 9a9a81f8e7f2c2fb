import json

import httpx
import pytest

from portfolio_tools.report_tools.upload_test_result import (
    UploadError,
    load_payload,
    main,
    upload_test_result,
)


URL = "https://results.example.test/api/test-runs"


@pytest.fixture
def result_file(tmp_path):
    path = tmp_path / "test-result.json"
    path.write_text(
        json.dumps({
            "project": "Playwright",
            "status": "passed",
            "results": {"passed": 2, "failed": 0, "skipped": 0, "tests": []},
            "display": {"duration": "3 seconds"},
        }),
        encoding="utf-8",
    )
    return path


def recording_transport(status_code=201, body=None):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"id": "run-1"})

    return httpx.MockTransport(handler), requests


def test_payload_drops_display(result_file):
    payload = load_payload(str(result_file))

    assert "display" not in payload
    assert payload["results"]["passed"] == 2


def test_upload_posts_json(result_file):
    transport, requests = recording_transport()

    response = upload_test_result(str(result_file), url=URL, timeout=5, transport=transport)

    assert response.status_code == 201
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content)["status"] == "passed"
    assert "display" not in json.loads(request.content)


def test_upload_non_2xx_raises(result_file):
    transport, _ = recording_transport(500, {"error": "boom"})

    with pytest.raises(UploadError) as exc_info:
        upload_test_result(str(result_file), url=URL, transport=transport)

    assert exc_info.value.status_code == 500
    assert "boom" in exc_info.value.body


def test_upload_without_response_raises(result_file):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UploadError, match="No response received"):
        upload_test_result(str(result_file), url=URL, transport=httpx.MockTransport(handler))


def test_main_exit_codes(result_file, tmp_path):
    ok, _ = recording_transport(200)
    failing, _ = recording_transport(503)

    assert main([str(result_file), "--url", URL], transport=ok) == 0
    assert main([str(result_file), "--url", URL], transport=failing) == 1
    assert main([str(tmp_path / "missing.json"), "--url", URL], transport=ok) == 1
