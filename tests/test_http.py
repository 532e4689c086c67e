from __future__ import annotations

import pytest

from sprestfw.core.errors import TransportError
from sprestfw.core.http import SpHttp
from sprestfw.core.logbuffer import LogBuffer
from sprestfw.core.odata import Verbosity

from tests.helpers import FakeSession, make_response


def test_build_headers_extra_overrides() -> None:
    hdrs = SpHttp(session=FakeSession()).build_headers(Verbosity.MINIMAL, "tok", {"IF-MATCH": "*"})
    assert hdrs["Accept"] == "application/json;odata=minimalmetadata"
    assert hdrs["X-RequestDigest"] == "tok"
    assert hdrs["IF-MATCH"] == "*"


def test_request_passes_timeout_and_json() -> None:
    session = FakeSession({"ok": True})
    data = SpHttp(session=session, timeout=5).request(
        "post", "https://x/_api/y", verbosity="verbose", token="t", json={"a": 1}
    )
    assert data == {"ok": True}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["timeout"] == 5
    assert call["json"] == {"a": 1}


def test_http_error_is_logged_and_raised() -> None:
    lb = LogBuffer(echo=False)
    session = FakeSession(make_response(500, text="x" * 600))
    with pytest.raises(TransportError) as exc:
        SpHttp(session=session, log=lb).request("GET", "https://x/_api/y", verbosity="verbose", token="")
    assert exc.value.status == 500
    assert len(exc.value.text) < 600
    assert [e["level"] for e in lb.to_list()] == ["DEBUG", "ERROR"]


def test_non_json_body_is_transport_error() -> None:
    session = FakeSession(make_response(200, text="<html/>"))
    with pytest.raises(TransportError):
        SpHttp(session=session).request("GET", "https://x", verbosity="compact", token="")
