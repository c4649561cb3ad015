"""Stormpath Client - async client for the Stormpath identity-management API.

The client authenticates every request with an API key pair, discovers the
caller's tenant through the ``/tenants/current`` redirect, and pages through
tenant collections until they are exhausted.

Example:
    ```python
    from stormpath_client import StormpathClient
    from stormpath_client.auth import resolve_api_key_pair

    keypair = resolve_api_key_pair()  # STORMPATH_API_KEY_ID / _SECRET or apiKey.properties

    async with await StormpathClient.connect(keypair) as client:
        print(client.tenant.name)
        for application in await client.list_applications():
            print(application.name, application.status)
    ```
"""

__version__ = "0.1.0"

from stormpath_client.auth import ApiKeyPair  # noqa: E402
from stormpath_client.client import StormpathClient  # noqa: E402
from stormpath_client.config import ClientSettings  # noqa: E402
from stormpath_client.resources import Application, Directory, ResourceStatus, Tenant  # noqa: E402

__all__ = [
    "ApiKeyPair",
    "Application",
    "ClientSettings",
    "Directory",
    "ResourceStatus",
    "StormpathClient",
    "Tenant",
    "__version__",
]
