"""
pytest configuration for gobble tests.

Adds the project root to the Python path and provides HTTP fakes.
"""

import io
import sys
from pathlib import Path

import pytest
import requests
from requests.structures import CaseInsensitiveDict

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))


class FakeRaw(io.BytesIO):
    """Undecoded response body"""
    version = 11


class FakeResponse:
    """Minimal stand-in for a streaming requests.Response"""

    def __init__(self, body=b"", status_code=200, reason="OK", headers=None, content_length=True):
        self.raw = FakeRaw(body)
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        if content_length and "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(body))
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"{self.status_code} Client Error: {self.reason}", response=self
            )

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeSession:
    """Records GET calls and hands out a canned response or error"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_session():
    return FakeSession
