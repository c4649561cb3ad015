"""Offset pagination over Stormpath collections.

A collection answers ``GET <href>`` with its first page and the server's
page ``limit``. A page shorter than that limit is the last one; a full
page means the client has to probe ``<href>?offset=limit``,
``offset=2*limit`` and so on. When the total is an exact multiple of the
limit this costs one extra request that comes back empty, which ends the
iteration like any other short page.

Offsets always advance by the first page's limit.

Example:
    ```python
    fetcher = CollectionFetcher(dispatcher)

    applications = await fetcher.fetch_all(f"{tenant.href}/applications", Application)

    # or lazily, page by page
    async for page in fetcher.iter_pages(f"{tenant.href}/directories", Directory):
        print(page.offset, len(page.items))
    ```
"""

import logging
from collections.abc import AsyncIterator

from stormpath_client.errors.exceptions import ResponseDecodeError
from stormpath_client.errors.handler import raise_for_status
from stormpath_client.resources import CollectionPage, ResourceT
from stormpath_client.transport.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class CollectionFetcher:
    """Fetch every resource of a collection, one page at a time."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    async def fetch_page(
        self,
        href: str,
        resource_type: type[ResourceT],
        offset: int | None = None,
    ) -> CollectionPage[ResourceT]:
        """Fetch and decode a single page; ``offset=None`` leaves it to the server."""
        params = {"offset": offset} if offset is not None else None
        response = await self.dispatcher.dispatch("GET", href, params=params)
        raise_for_status(response)

        page = CollectionPage.from_dict(response.json(), resource_type)
        if page.limit <= 0:
            raise ResponseDecodeError(f"collection {href} reported a non-positive page limit {page.limit}")
        if len(page.items) > page.limit:
            raise ResponseDecodeError(
                f"collection page at offset {page.offset} holds {len(page.items)} items, more than its limit {page.limit}"
            )
        return page

    async def iter_pages(self, href: str, resource_type: type[ResourceT]) -> AsyncIterator[CollectionPage[ResourceT]]:
        """Yield pages in ascending offset order until a short page is seen.

        Each call starts again from the first page.

        Raises:
            ResponseDecodeError: A page reports a non-positive limit, holds
                more items than its limit, or is otherwise malformed.
            ServiceError: A page request answered with an error status.
            httpx.TransportError: A page request failed in transit.
        """
        page = await self.fetch_page(href, resource_type)
        limit = page.limit
        yield page

        offset = limit
        while len(page.items) >= limit:
            logger.debug(f"Full page of {limit} from {href}, probing offset {offset}")
            page = await self.fetch_page(href, resource_type, offset=offset)
            yield page
            offset += limit

    async def fetch_all(self, href: str, resource_type: type[ResourceT]) -> list[ResourceT]:
        """Return every resource of the collection in server order.

        Any failure on any page aborts the whole fetch; no partial list is
        returned.
        """
        items: list[ResourceT] = []
        pages = 0
        async for page in self.iter_pages(href, resource_type):
            items.extend(page.items)
            pages += 1

        logger.debug(f"Fetched {len(items)} {resource_type.kind} resources from {href} in {pages} page(s)")
        return items
