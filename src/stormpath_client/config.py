"""Client configuration resolved from arguments, the environment and .env files."""

import logging
from dataclasses import dataclass

from stormpath_client import __version__
from stormpath_client.auth.credentials import CredentialResolver

logger = logging.getLogger(__name__)

BASE_URL = "https://api.stormpath.com/v1"
USER_AGENT = f"stormpath-client/{__version__}"
DEFAULT_TIMEOUT = 30.0

BASE_URL_ENV = "STORMPATH_BASE_URL"
TIMEOUT_ENV = "STORMPATH_TIMEOUT"


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings shared by every request of a client session.

    Attributes:
        base_url: Versioned API origin that relative paths are resolved against.
        timeout: Per-request timeout in seconds.
        user_agent: Value of the User-Agent header.
    """

    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT

    @classmethod
    def from_environment(
        cls,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        resolver: CredentialResolver | None = None,
    ) -> "ClientSettings":
        """Resolve settings, explicit arguments first, then STORMPATH_* variables.

        Raises:
            ValueError: If STORMPATH_TIMEOUT is not a positive number.
        """
        resolver = resolver or CredentialResolver()

        resolved_url = resolver.resolve(value=base_url, env_var_name=BASE_URL_ENV, default=BASE_URL, mask_in_logs=False)

        if timeout is None:
            raw_timeout = resolver.resolve(env_var_name=TIMEOUT_ENV, default=str(DEFAULT_TIMEOUT), mask_in_logs=False)
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        settings = cls(base_url=resolved_url.rstrip("/"), timeout=timeout)
        logger.debug(f"Using Stormpath API at {settings.base_url} (timeout {settings.timeout}s)")
        return settings
