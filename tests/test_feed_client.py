"""Tests for the httpx feed client."""

import httpx
import pytest

from paddock.core import MalformedPayload, NetworkFailure
from paddock.providers import FeedClient

URL = "https://api.example/ergast/f1/2025/driverstandings.json"


def _client(handler) -> FeedClient:
    return FeedClient(timeout=1.0, transport=httpx.MockTransport(handler))


class TestFeedClient:
    def test_returns_decoded_object(self):
        client = _client(lambda request: httpx.Response(200, json={"MRData": {}}))

        assert client.fetch(URL) == {"MRData": {}}

    def test_sends_user_agent(self):
        seen = {}

        def handler(request):
            seen["ua"] = request.headers.get("user-agent")
            return httpx.Response(200, json={"ok": True})

        _client(handler).fetch(URL)

        assert seen["ua"].startswith("paddock/")

    def test_single_attempt_per_call(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            return httpx.Response(503)

        with pytest.raises(NetworkFailure):
            _client(handler).fetch(URL)
        assert len(calls) == 1

    @pytest.mark.parametrize("status_code", [404, 429, 500])
    def test_error_status_is_network_failure(self, status_code):
        client = _client(lambda request: httpx.Response(status_code))

        with pytest.raises(NetworkFailure, match=str(status_code)):
            client.fetch(URL)

    def test_transport_error_is_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkFailure):
            _client(handler).fetch(URL)

    def test_timeout_is_network_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(NetworkFailure):
            _client(handler).fetch(URL)

    @pytest.mark.parametrize(
        "body",
        [b"", b"   ", b"<html>maintenance</html>", b"[1, 2]", b"{}", b'"text"'],
    )
    def test_unusable_body_is_malformed(self, body):
        client = _client(lambda request: httpx.Response(200, content=body))

        with pytest.raises(MalformedPayload):
            client.fetch(URL)

    def test_client_reused_between_calls(self):
        client = _client(lambda request: httpx.Response(200, json={"ok": True}))

        client.fetch(URL)
        first = client._get_client()
        client.fetch(URL)

        assert client._get_client() is first

    def test_close_then_fetch_opens_new_client(self):
        client = _client(lambda request: httpx.Response(200, json={"ok": True}))
        client.fetch(URL)

        client.close()

        assert client._client is None
        assert client.fetch(URL) == {"ok": True}

    def test_context_manager_closes(self):
        with _client(lambda request: httpx.Response(200, json={"ok": True})) as client:
            client.fetch(URL)
        assert client._client is None
