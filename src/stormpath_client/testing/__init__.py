"""Testing utilities for code built on the Stormpath client.

Example:
    ```python
    from stormpath_client import StormpathClient
    from stormpath_client.testing import FakeStormpathService, make_keypair


    async def test_lists_every_application():
        service = FakeStormpathService(applications=30, limit=25)
        client = await StormpathClient.connect(make_keypair(), transport=service.transport())
        assert len(await client.list_applications()) == 30
    ```
"""

from stormpath_client.testing.fakes import FakeStormpathService, make_keypair

__all__ = ["FakeStormpathService", "make_keypair"]
