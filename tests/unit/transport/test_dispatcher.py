"""Tests for the authenticated request dispatcher."""

import json

import httpx
import pytest

from stormpath_client.config import BASE_URL, USER_AGENT, ClientSettings
from stormpath_client.transport import RequestDispatcher


class RecordingHandler:
    """MockTransport handler that records requests and answers with a fixed response."""

    def __init__(self, response: httpx.Response | None = None):
        self.response = response or httpx.Response(200, json={})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
async def dispatcher(keypair, handler):
    async with RequestDispatcher(keypair, transport=httpx.MockTransport(handler)) as dispatcher:
        yield dispatcher


class TestUrlNormalization:
    @pytest.mark.unit
    async def test_relative_path_resolved_against_base_url(self, dispatcher, handler):
        await dispatcher.dispatch("GET", "/tenants/current")

        assert str(handler.requests[0].url) == f"{BASE_URL}/tenants/current"

    @pytest.mark.unit
    async def test_absolute_url_used_as_is(self, dispatcher, handler):
        await dispatcher.dispatch("GET", "https://elsewhere.example.com/v1/tenants/abc")

        assert str(handler.requests[0].url) == "https://elsewhere.example.com/v1/tenants/abc"

    @pytest.mark.unit
    async def test_custom_base_url(self, keypair, handler):
        settings = ClientSettings(base_url="https://stormpath.internal/v1")

        async with RequestDispatcher(keypair, settings=settings, transport=httpx.MockTransport(handler)) as dispatcher:
            await dispatcher.dispatch("GET", "/tenants/current")

        assert str(handler.requests[0].url) == "https://stormpath.internal/v1/tenants/current"

    @pytest.mark.unit
    async def test_query_params_appended(self, dispatcher, handler):
        await dispatcher.dispatch("GET", f"{BASE_URL}/tenants/abc/applications", params={"offset": 25})

        assert str(handler.requests[0].url) == f"{BASE_URL}/tenants/abc/applications?offset=25"


class TestRequestHeaders:
    @pytest.mark.unit
    async def test_fixed_headers_and_basic_auth(self, dispatcher, handler):
        await dispatcher.dispatch("GET", "/tenants/current")

        headers = handler.requests[0].headers
        assert headers["User-Agent"] == USER_AGENT
        assert headers["Accept"] == "application/json"
        # base64("test-key-id:test-key-secret")
        assert headers["Authorization"] == "Basic dGVzdC1rZXktaWQ6dGVzdC1rZXktc2VjcmV0"

    @pytest.mark.unit
    async def test_json_body_sets_content_type(self, dispatcher, handler):
        await dispatcher.dispatch("POST", "/applications", json={"name": "portal"})

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "portal"}

    @pytest.mark.unit
    async def test_no_body_no_content_type(self, dispatcher, handler):
        await dispatcher.dispatch("GET", "/tenants/current")

        assert "Content-Type" not in handler.requests[0].headers


class TestResponseHandling:
    @pytest.mark.unit
    async def test_redirect_is_not_followed(self, keypair):
        handler = RecordingHandler(httpx.Response(302, headers={"Location": f"{BASE_URL}/tenants/abc"}))

        async with RequestDispatcher(keypair, transport=httpx.MockTransport(handler)) as dispatcher:
            response = await dispatcher.dispatch("GET", "/tenants/current")

        assert response.status_code == 302
        assert response.headers["Location"] == f"{BASE_URL}/tenants/abc"
        assert len(handler.requests) == 1

    @pytest.mark.unit
    async def test_error_status_is_returned_not_raised(self, keypair):
        handler = RecordingHandler(httpx.Response(500, text="boom"))

        async with RequestDispatcher(keypair, transport=httpx.MockTransport(handler)) as dispatcher:
            response = await dispatcher.dispatch("GET", "/tenants/current")

        assert response.status_code == 500

    @pytest.mark.unit
    async def test_transport_error_propagates_without_retry(self, keypair):
        attempts = 0

        def failing_handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            raise httpx.ConnectError("Name or service not known", request=request)

        async with RequestDispatcher(keypair, transport=httpx.MockTransport(failing_handler)) as dispatcher:
            with pytest.raises(httpx.ConnectError):
                await dispatcher.dispatch("GET", "/tenants/current")

        assert attempts == 1
