"""The Stormpath client session."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from stormpath_client.auth.credentials import CredentialResolver, resolve_api_key_pair
from stormpath_client.auth.keypair import ApiKeyPair
from stormpath_client.config import ClientSettings
from stormpath_client.errors.exceptions import ApplicationCreationError
from stormpath_client.errors.handler import raise_for_unexpected_status
from stormpath_client.pagination import CollectionFetcher
from stormpath_client.resources import Application, CollectionPage, Directory, ResourceT, Tenant
from stormpath_client.tenant import TenantResolver
from stormpath_client.transport.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)

APPLICATIONS = "applications"
DIRECTORIES = "directories"


class StormpathClient:
    """An authenticated session bound to the caller's tenant.

    Build it with :meth:`connect`, which resolves the tenant before handing
    the client out. The key pair and tenant never change afterwards, so one
    client can serve concurrent reads.

    Example:
        ```python
        async with await StormpathClient.connect(ApiKeyPair("id", "secret")) as client:
            directories = await client.list_directories()
            app = await client.create_application(Application(name="portal"), create_directory=True)
        ```
    """

    def __init__(self, keypair: ApiKeyPair, dispatcher: RequestDispatcher, tenant: Tenant) -> None:
        self.keypair = keypair
        self.dispatcher = dispatcher
        self._tenant = tenant
        self._resolver = TenantResolver(dispatcher)
        self._fetcher = CollectionFetcher(dispatcher)

    @classmethod
    async def connect(
        cls,
        keypair: ApiKeyPair | None = None,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        resolver: CredentialResolver | None = None,
    ) -> "StormpathClient":
        """Open a session and resolve its tenant.

        Args:
            keypair: API key pair; resolved from the environment or the
                ``apiKey.properties`` file when omitted.
            settings: Connection settings; resolved from the environment when omitted.
            transport: Optional httpx transport override.
            resolver: Credential resolver used for the environment lookups.

        Raises:
            CredentialError: No key pair was given and none could be resolved.
            TenantDiscoveryError: The tenant could not be discovered.
        """
        if keypair is None or settings is None:
            resolver = resolver or CredentialResolver()
        if keypair is None:
            keypair = resolve_api_key_pair(resolver=resolver)
        if settings is None:
            settings = ClientSettings.from_environment(resolver=resolver)

        dispatcher = RequestDispatcher(keypair, settings=settings, transport=transport)
        try:
            tenant = await TenantResolver(dispatcher).resolve()
        except BaseException:
            await dispatcher.aclose()
            raise

        logger.info(f"Connected to Stormpath as API key {keypair.id}")
        return cls(keypair, dispatcher, tenant)

    async def __aenter__(self) -> "StormpathClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.dispatcher.aclose()

    @property
    def tenant(self) -> Tenant:
        """The tenant resolved when the session was opened."""
        return self._tenant

    async def request(
        self,
        method: str,
        path_or_url: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a raw authenticated request; the status is not checked."""
        return await self.dispatcher.dispatch(method, path_or_url, json=json, params=params)

    async def get_tenant(self) -> Tenant:
        """Look the current tenant up again. The session tenant is left untouched."""
        return await self._resolver.resolve()

    async def list_applications(self) -> list[Application]:
        return await self._list(APPLICATIONS, Application)

    async def list_directories(self) -> list[Directory]:
        return await self._list(DIRECTORIES, Directory)

    async def iter_application_pages(self) -> AsyncIterator[CollectionPage[Application]]:
        async for page in self._iter_pages(APPLICATIONS, Application):
            yield page

    async def iter_directory_pages(self) -> AsyncIterator[CollectionPage[Directory]]:
        async for page in self._iter_pages(DIRECTORIES, Directory):
            yield page

    async def create_application(self, application: Application, create_directory: bool = False) -> Application:
        """Create an application in the session tenant.

        Args:
            application: The application to create; ``href`` is usually unset.
            create_directory: Ask the service to create a directory for the
                application as well.

        Returns:
            The created application as returned by the service.

        Raises:
            ApplicationCreationError: The service did not answer 201 Created.
        """
        params = {"createDirectory": "true"} if create_directory else None
        response = await self.dispatcher.dispatch(
            "POST", self._tenant.collection_href(APPLICATIONS), json=application.to_dict(), params=params
        )
        raise_for_unexpected_status(response, 201, ApplicationCreationError)

        created = Application.from_dict(response.json())
        created.tenant = self._tenant
        logger.info(f"Created application {created.name!r} ({created.href})")
        return created

    async def _list(self, collection: str, resource_type: type[ResourceT]) -> list[ResourceT]:
        resources = await self._fetcher.fetch_all(self._tenant.collection_href(collection), resource_type)
        for resource in resources:
            resource.tenant = self._tenant
        return resources

    async def _iter_pages(self, collection: str, resource_type: type[ResourceT]) -> AsyncIterator[CollectionPage[ResourceT]]:
        async for page in self._fetcher.iter_pages(self._tenant.collection_href(collection), resource_type):
            for resource in page.items:
                resource.tenant = self._tenant
            yield page
