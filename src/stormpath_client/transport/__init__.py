"""Transport layer for the Stormpath client.

The dispatcher wraps an ``httpx.AsyncClient`` so the TLS, connection pooling
and timeout handling all stay in httpx. Tests swap the network for an
``httpx.MockTransport``:

Example:
    ```python
    import httpx

    from stormpath_client.transport import RequestDispatcher

    dispatcher = RequestDispatcher(keypair, transport=httpx.MockTransport(handler))
    ```
"""

from stormpath_client.transport.dispatcher import JSON_MEDIA_TYPE, RequestDispatcher

__all__ = ["JSON_MEDIA_TYPE", "RequestDispatcher"]
