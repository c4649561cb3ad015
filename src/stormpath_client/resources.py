"""Stormpath resource shapes and their JSON mapping.

Only the wire fields are decoded. The ``tenant`` back-reference on
applications and directories is session state set by the client after
decoding; it is never read from or written to JSON and is ignored by
equality.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from stormpath_client.errors.exceptions import ResponseDecodeError


class ResourceStatus(str, Enum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


def _require_object(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"Expected a JSON object for {kind}, got {type(data).__name__}")
    return data


def _optional_str(data: dict[str, Any], key: str, kind: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ResponseDecodeError(f"{kind}.{key} must be a string, got {type(value).__name__}")
    return value


def _parse_status(value: str | None) -> "ResourceStatus | str | None":
    if value is None:
        return None
    try:
        return ResourceStatus(value.upper())
    except ValueError:
        return value


@dataclass(frozen=True)
class Tenant:
    """The top-level namespace that owns every other resource."""

    href: str
    name: str | None = None
    key: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Tenant":
        data = _require_object(data, "tenant")
        href = _optional_str(data, "href", "tenant")
        if not href:
            raise ResponseDecodeError("tenant has no href")
        return cls(href=href, name=_optional_str(data, "name", "tenant"), key=_optional_str(data, "key", "tenant"))

    def collection_href(self, collection: str) -> str:
        return f"{self.href.rstrip('/')}/{collection}"


@dataclass
class Resource:
    """Common shape of applications and directories."""

    kind: ClassVar[str] = "resource"

    name: str | None = None
    description: str | None = None
    status: ResourceStatus | str | None = None
    href: str | None = None
    tenant: Tenant | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Any):
        data = _require_object(data, cls.kind)
        return cls(
            href=_optional_str(data, "href", cls.kind),
            name=_optional_str(data, "name", cls.kind),
            description=_optional_str(data, "description", cls.kind),
            status=_parse_status(_optional_str(data, "status", cls.kind)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the fields that are set, for create and update bodies."""
        body: dict[str, Any] = {}
        if self.href is not None:
            body["href"] = self.href
        if self.name is not None:
            body["name"] = self.name
        if self.description is not None:
            body["description"] = self.description
        if self.status is not None:
            body["status"] = self.status.value if isinstance(self.status, ResourceStatus) else self.status
        return body

    @property
    def enabled(self) -> bool:
        return self.status == ResourceStatus.ENABLED


@dataclass
class Application(Resource):
    """A Stormpath application."""

    kind: ClassVar[str] = "application"


@dataclass
class Directory(Resource):
    """A Stormpath directory of accounts and groups."""

    kind: ClassVar[str] = "directory"


ResourceT = TypeVar("ResourceT", bound=Resource)


@dataclass
class CollectionPage(Generic[ResourceT]):
    """One page of a server-paginated collection.

    Wire format::

        {"href": "...", "offset": 0, "limit": 25, "items": [...]}
    """

    href: str | None
    offset: int
    limit: int
    items: list[ResourceT]

    @classmethod
    def from_dict(cls, data: Any, resource_type: type[ResourceT]) -> "CollectionPage[ResourceT]":
        data = _require_object(data, "collection")

        offset = data.get("offset", 0)
        limit = data.get("limit")
        for name, value in (("offset", offset), ("limit", limit)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ResponseDecodeError(f"collection.{name} must be an integer, got {value!r}")

        raw_items = data.get("items")
        if not isinstance(raw_items, list):
            raise ResponseDecodeError(f"collection.items must be a list, got {type(raw_items).__name__}")

        return cls(
            href=_optional_str(data, "href", "collection"),
            offset=offset,
            limit=limit,
            items=[resource_type.from_dict(item) for item in raw_items],
        )
