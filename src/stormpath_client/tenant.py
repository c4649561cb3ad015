"""Discovery of the caller's tenant.

Stormpath only exposes the current tenant through ``/tenants/current``,
which answers ``302 Found`` with the tenant's canonical href in
``Location``. The resolver follows that redirect with a second explicit
request rather than letting the transport do it.
"""

import logging

from stormpath_client.errors.exceptions import TenantDiscoveryError
from stormpath_client.errors.handler import raise_for_status
from stormpath_client.resources import Tenant
from stormpath_client.transport.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)

CURRENT_TENANT_PATH = "/tenants/current"


class TenantResolver:
    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    async def resolve(self) -> Tenant:
        """Resolve the tenant that owns the dispatcher's API key.

        Raises:
            TenantDiscoveryError: ``/tenants/current`` did not answer 302 with a Location.
            ServiceError: The tenant href answered with an error status.
            ValueError: The tenant body is not valid JSON or not a tenant.
        """
        response = await self.dispatcher.dispatch("GET", CURRENT_TENANT_PATH)

        if response.status_code != 302:
            raise TenantDiscoveryError(
                f"tenant discovery failed: unexpected status {response.status_code}", response=response
            )
        location = response.headers.get("Location")
        if not location:
            raise TenantDiscoveryError("tenant discovery failed: missing redirect target", response=response)

        logger.debug(f"Current tenant redirects to {location}")
        response = await self.dispatcher.dispatch("GET", location)
        raise_for_status(response)

        tenant = Tenant.from_dict(response.json())
        logger.info(f"Resolved Stormpath tenant {tenant.name!r} ({tenant.href})")
        return tenant
