"""Shared fakes for the test suite: a recording requests.Session stand-in and Response builder."""
from __future__ import annotations

import json as _json
from typing import Any, Dict, List, Optional

import requests

SITE = "https://contoso.sharepoint.com/sites/hr"


def make_response(status: int = 200, payload: Any = None, *, url: str = "", text: Optional[str] = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    if text is not None:
        resp._content = text.encode("utf-8")
    elif payload is not None:
        resp._content = _json.dumps(payload).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


class FakeSession:
    """Records calls; answers from a queue (responses or exceptions)."""

    def __init__(self, *responses: Any) -> None:
        self.queue: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def add(self, *responses: Any) -> "FakeSession":
        self.queue.extend(responses)
        return self

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.queue:
            raise AssertionError(f"unexpected request: {method} {url}")
        nxt = self.queue.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        if isinstance(nxt, requests.Response):
            if not nxt.url:
                nxt.url = url
            return nxt
        return make_response(200, nxt, url=url)
