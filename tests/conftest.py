import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from appraisal_feedback.llm import adapters
from appraisal_feedback.models import AppraisalData

_NOT_JSON = object()


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._body = {} if body is None else body
        self.closed = False

    def iter_content(self, chunk_size=1):
        raw = b"<html>oops</html>" if self._body is _NOT_JSON else json.dumps(self._body).encode()
        for start in range(0, len(raw), chunk_size):
            yield raw[start : start + chunk_size]

    def close(self):
        self.closed = True


class RecordingPost:
    """Stands in for `requests.post`; remembers every call and replays one canned outcome."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse()
        self.exc = None

    def reply(self, body=None, status_code=200, reason="OK"):
        self.response = FakeResponse(status_code=status_code, body=body, reason=reason)

    def reply_not_json(self):
        self.response = FakeResponse(body=_NOT_JSON)

    def fail_with(self, exc):
        self.exc = exc

    def __call__(self, url, json=None, headers=None, params=None, timeout=None, **kwargs):
        self.calls.append(
            {
                "url": url,
                "json": json,
                "headers": headers,
                "params": params,
                "timeout": timeout,
                "stream": kwargs.get("stream"),
            }
        )
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_post(monkeypatch):
    recorder = RecordingPost()
    monkeypatch.setattr(adapters.requests, "post", recorder)
    return recorder


# ---------------------------------------------------------------------------
# real HTTP endpoint on localhost
# ---------------------------------------------------------------------------


class StubServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), _StubHandler)
        self.status = 200
        self.body = {}
        self.delay = 0.0
        self.drip = 0.0  # pause between body bytes
        self.requests = []

    @property
    def url(self):
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"

    def handle_error(self, request, client_address):
        # client hung up on a delayed response; nothing to report
        pass


class _StubHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        raw = self.rfile.read(length)
        self.server.requests.append({"path": self.path, "headers": dict(self.headers), "json": json.loads(raw or b"{}")})
        if self.server.delay:
            time.sleep(self.server.delay)
        payload = json.dumps(self.server.body).encode()
        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if not self.server.drip:
            self.wfile.write(payload)
            return
        for i in range(len(payload)):
            self.wfile.write(payload[i : i + 1])
            time.sleep(self.server.drip)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def stub_server():
    server = StubServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


# ---------------------------------------------------------------------------
# appraisal payloads
# ---------------------------------------------------------------------------


APPRAISAL_JSON = {
    "employeeName": "Jordan Lee",
    "employeeId": "E-1042",
    "reviewerName": "Sam Patel",
    "reviewDate": "2026-09-30",
    "employeeGender": "female",
    "template": {
        "id": "engineering",
        "name": "Engineering",
        "description": "IC review",
        "categories": [
            {"id": "quality", "name": "Code Quality", "description": "Readable, tested code", "weight": 0.4},
            {"id": "delivery", "name": "Delivery", "description": "Ships on time", "weight": 0.35},
            {"id": "collab", "name": "Collaboration", "description": "Works well with others", "weight": 0.25},
        ],
    },
    "ratings": [
        {"categoryId": "quality", "score": 4.5, "comments": "Thorough reviews."},
        {"categoryId": "delivery", "score": 2.5, "comments": "Two milestones slipped."},
        {"categoryId": "collab", "score": 3.6, "comments": ""},
    ],
    "overallScore": 3.75,
}


@pytest.fixture
def appraisal_json():
    return json.loads(json.dumps(APPRAISAL_JSON))


@pytest.fixture
def appraisal(appraisal_json):
    return AppraisalData.model_validate(appraisal_json)
