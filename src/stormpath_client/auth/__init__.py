"""Authentication components for the Stormpath client.

This module provides:
- The immutable API key pair used for HTTP Basic authentication
- Multi-source credential resolution (value → env → .env → apiKey.properties)

Example:
    ```python
    from stormpath_client.auth import resolve_api_key_pair

    keypair = resolve_api_key_pair()
    ```
"""

from stormpath_client.auth.credentials import CredentialResolver, parse_properties, resolve_api_key_pair
from stormpath_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from stormpath_client.auth.keypair import ApiKeyPair

__all__ = [
    "ApiKeyPair",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "parse_properties",
    "resolve_api_key_pair",
]
