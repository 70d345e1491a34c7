"""
Shared fixtures: a stub catalog page builder, a thread-safe fake HTTP
session that records in-flight requests, and the Biology subject row.
"""
import threading
import time
from typing import Dict, Optional, Tuple

import pytest
import requests

from pastpaper_crawler.catalog import find_subject

BASE = "https://catalog.test/a-levels"


def listing_page(*names: str) -> str:
    rows = "\n".join(f'<tr><td><a class="name" href="#">{n}</a></td></tr>' for n in names)
    return f"<html><body><table>{rows}</table><div class='footer'>x</div></body></html>"


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, body: bytes = b"", content_type: str = "application/pdf"):
        self.url = url
        self.status_code = status_code
        self.content = body
        self.headers = {"Content-Type": content_type}
        self.closed = False

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Serves canned routes; unknown URLs return 404. Tracks peak concurrency."""

    def __init__(self, routes: Optional[Dict[str, Tuple[int, bytes, str]]] = None, delay: float = 0.02):
        self.routes = dict(routes or {})
        self.delay = delay
        self.calls = []
        self.responses = []
        self._lock = threading.Lock()
        self._in_flight = 0
        self.peak = 0

    def add(self, url: str, body, status: int = 200, content_type: str = "application/pdf") -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[url] = (status, body, content_type)

    def get(self, url, **kwargs):
        with self._lock:
            self.calls.append(url)
            self._in_flight += 1
            self.peak = max(self.peak, self._in_flight)
        try:
            time.sleep(self.delay)
            status, body, ctype = self.routes.get(url, (404, b"not found", "text/html"))
            resp = FakeResponse(url, status, body, ctype)
            with self._lock:
                self.responses.append(resp)
            return resp
        finally:
            with self._lock:
                self._in_flight -= 1


@pytest.fixture
def biology():
    return find_subject("Biology")


@pytest.fixture
def fake_session():
    return FakeSession()
