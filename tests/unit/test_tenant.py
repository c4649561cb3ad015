"""Tests for tenant discovery."""

import json

import httpx
import pytest

from stormpath_client.config import BASE_URL
from stormpath_client.errors import NotFoundError, ResponseDecodeError, TenantDiscoveryError
from stormpath_client.resources import Tenant
from stormpath_client.tenant import TenantResolver
from stormpath_client.testing import FakeStormpathService, make_keypair
from stormpath_client.transport import RequestDispatcher

TENANT_HREF = f"{BASE_URL}/tenants/abc"


async def resolve_with(handler) -> Tenant:
    async with RequestDispatcher(make_keypair(), transport=httpx.MockTransport(handler)) as dispatcher:
        return await TenantResolver(dispatcher).resolve()


def redirecting_handler(tenant_response: httpx.Response):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/v1/tenants/current":
            return httpx.Response(302, headers={"Location": TENANT_HREF})
        return tenant_response

    handler.requests = requests
    return handler


@pytest.mark.unit
async def test_resolve_follows_redirect_with_second_request():
    handler = redirecting_handler(httpx.Response(200, json={"href": TENANT_HREF, "name": "acme", "key": "acme-key"}))

    tenant = await resolve_with(handler)

    assert tenant == Tenant(href=TENANT_HREF, name="acme", key="acme-key")
    assert [str(request.url) for request in handler.requests] == [f"{BASE_URL}/tenants/current", TENANT_HREF]
    assert all("Authorization" in request.headers for request in handler.requests)


@pytest.mark.unit
async def test_resolve_against_fake_service():
    service = FakeStormpathService()
    async with RequestDispatcher(make_keypair(), transport=service.transport()) as dispatcher:
        tenant = await TenantResolver(dispatcher).resolve()

    assert tenant.href == service.tenant["href"]
    assert tenant.name == "fake-tenant"
    assert len(service.requests) == 2


@pytest.mark.unit
@pytest.mark.parametrize("status_code", [200, 301, 401, 500])
async def test_resolve_rejects_non_302(status_code):
    with pytest.raises(TenantDiscoveryError) as exc_info:
        await resolve_with(lambda request: httpx.Response(status_code, json={"href": TENANT_HREF}))

    assert str(exc_info.value) == f"tenant discovery failed: unexpected status {status_code}"
    assert exc_info.value.response.status_code == status_code


@pytest.mark.unit
async def test_resolve_rejects_missing_location():
    with pytest.raises(TenantDiscoveryError, match="missing redirect target"):
        await resolve_with(lambda request: httpx.Response(302))


@pytest.mark.unit
async def test_resolve_rejects_empty_location():
    with pytest.raises(TenantDiscoveryError, match="missing redirect target"):
        await resolve_with(lambda request: httpx.Response(302, headers={"Location": ""}))


@pytest.mark.unit
async def test_resolve_propagates_json_decode_error():
    handler = redirecting_handler(httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(json.JSONDecodeError):
        await resolve_with(handler)


@pytest.mark.unit
async def test_resolve_rejects_body_without_href():
    handler = redirecting_handler(httpx.Response(200, json={"name": "acme"}))

    with pytest.raises(ResponseDecodeError):
        await resolve_with(handler)


@pytest.mark.unit
async def test_resolve_raises_service_error_for_missing_tenant():
    handler = redirecting_handler(
        httpx.Response(404, json={"status": 404, "developerMessage": "Gone", "moreInfo": "https://docs/404"})
    )

    with pytest.raises(NotFoundError) as exc_info:
        await resolve_with(handler)

    assert exc_info.value.developer_message == "Gone"


@pytest.mark.unit
async def test_resolve_propagates_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(httpx.ConnectTimeout):
        await resolve_with(handler)
