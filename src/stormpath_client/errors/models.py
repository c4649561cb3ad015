"""Stormpath error payload model."""

from dataclasses import dataclass
from typing import Any

import httpx

from stormpath_client.errors.exceptions import ResponseDecodeError

ERROR_FIELDS = frozenset({"status", "code", "message", "developerMessage", "moreInfo"})


@dataclass
class ErrorDetail:
    """Error body returned by the Stormpath API.

    Wire format::

        {"status": 400, "code": 2000, "message": "...",
         "developerMessage": "...", "moreInfo": "https://docs.stormpath.com/errors/2000"}
    """

    status: int | None = None
    code: int | None = None
    message: str | None = None
    developer_message: str | None = None
    more_info: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ErrorDetail":
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Expected a JSON object for an error body, got {type(data).__name__}")
        return cls(
            status=data.get("status"),
            code=data.get("code"),
            message=data.get("message"),
            developer_message=data.get("developerMessage"),
            more_info=data.get("moreInfo"),
        )

    @classmethod
    def decode(cls, response: httpx.Response) -> "ErrorDetail":
        """Decode the error body, letting JSON decode errors propagate."""
        return cls.from_dict(response.json())

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorDetail | None":
        """Parse the error body if the response carries one.

        Returns:
            ErrorDetail, or None when the body is not JSON or has none of the
            Stormpath error fields.
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            return None

        if not isinstance(data, dict) or not ERROR_FIELDS & data.keys():
            return None
        return cls.from_dict(data)

    def to_exception_message(self) -> str:
        """Render as ``"<developerMessage> More Info: <moreInfo>"``."""
        text = self.developer_message or self.message or "Unknown Stormpath error"
        if self.more_info:
            text += f" More Info: {self.more_info}"
        return text
