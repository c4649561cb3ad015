"""The API key pair used to authenticate every Stormpath request."""

from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True)
class ApiKeyPair:
    """Immutable Stormpath API key id and secret.

    The secret is kept out of ``repr`` so the pair can be logged safely.
    """

    id: str
    secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.id or not self.secret:
            raise ValueError("ApiKeyPair requires a non-empty id and secret")

    def to_auth(self) -> httpx.BasicAuth:
        """Build the HTTP Basic auth handler for this key pair."""
        return httpx.BasicAuth(self.id, self.secret)
