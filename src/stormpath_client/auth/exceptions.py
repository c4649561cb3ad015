"""Exceptions raised while resolving Stormpath API key credentials.

Example:
    ```python
    from stormpath_client.auth.exceptions import CredentialNotFoundError

    if not key_id:
        raise CredentialNotFoundError("API key id not found", env_var_name="STORMPATH_API_KEY_ID")
    ```
"""

from stormpath_client.errors.exceptions import StormpathError


class CredentialError(StormpathError):
    """Base exception for credential-related errors.

    Catch this to handle every way an API key pair can fail to load.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).

    Example:
        ```python
        try:
            keypair = resolve_api_key_pair()
        except CredentialNotFoundError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when an ``apiKey.properties`` file exists but cannot be used.

    Covers unreadable files and files missing the ``apiKey.id`` or
    ``apiKey.secret`` entries.
    """

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(message)
        self.file_path = file_path
