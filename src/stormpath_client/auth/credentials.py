"""Multi-source resolution of Stormpath API key credentials.

Resolution order for each value (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. ``apiKey.properties`` file (key pair only)
5. Default value

Example:
    ```python
    from stormpath_client.auth import CredentialResolver, resolve_api_key_pair

    resolver = CredentialResolver()

    # STORMPATH_API_KEY_ID / STORMPATH_API_KEY_SECRET, or ~/.stormpath/apiKey.properties
    keypair = resolve_api_key_pair(resolver=resolver)

    # Plain settings go through the same resolver
    base_url = resolver.resolve(env_var_name="STORMPATH_BASE_URL", default=BASE_URL, mask_in_logs=False)
    ```

Security Considerations:
    - Credentials are never logged in full (masked with ***)
    - Only source information is logged (env var name, file path, etc.)
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from stormpath_client.auth.exceptions import CredentialFileError, CredentialNotFoundError
from stormpath_client.auth.keypair import ApiKeyPair

logger = logging.getLogger(__name__)

API_KEY_ID_ENV = "STORMPATH_API_KEY_ID"
API_KEY_SECRET_ENV = "STORMPATH_API_KEY_SECRET"
API_KEY_FILE_ENV = "STORMPATH_API_KEY_FILE"
DEFAULT_API_KEY_FILE = "~/.stormpath/apiKey.properties"

PROPERTIES_ID_KEY = "apiKey.id"
PROPERTIES_SECRET_KEY = "apiKey.secret"


class CredentialResolver:
    """Resolve credentials and settings from multiple sources with priority ordering.

    Explicitly provided values take precedence over environment variables,
    which take precedence over .env file values, which finally take
    precedence over defaults.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load the .env file at all. Tests pass
                False to keep the process environment authoritative.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except Exception as e:
                # Continue without .env
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a single value from explicit value, environment or default.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check. Values from the
                .env file are visible here once loaded.
            default: Default value if not found elsewhere.
            required: Raise CredentialNotFoundError when nothing resolves.
            mask_in_logs: Mask the resolved value in log messages.

        Returns:
            Resolved value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required=True and no source provides a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and os.environ.get(env_var_name):
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_properties_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = API_KEY_FILE_ENV,
        required: bool = False,
    ) -> ApiKeyPair | None:
        """Load an API key pair from a Stormpath ``apiKey.properties`` file.

        The file holds ``apiKey.id = ...`` and ``apiKey.secret = ...`` lines;
        blank lines and ``#``/``!`` comments are ignored. The path may contain
        ``~`` and ``$VAR`` references.

        Args:
            file_path: Explicit path to the properties file.
            env_var_name: Environment variable holding the path when
                ``file_path`` is not given. Falls back to
                ``~/.stormpath/apiKey.properties``.
            required: Raise CredentialFileError instead of returning None.

        Returns:
            The key pair, or None when the file does not exist and not required.

        Raises:
            CredentialFileError: If the file is unreadable, lacks an entry,
                or is missing while required.
        """
        if file_path is not None:
            path_to_use = str(file_path)
        else:
            path_to_use = self.resolve(env_var_name=env_var_name, default=DEFAULT_API_KEY_FILE, mask_in_logs=False)

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text()
        except FileNotFoundError:
            error_msg = f"API key file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg, file_path=str(path_obj)) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            raise CredentialFileError(
                f"Permission denied reading API key file: {path_obj}", file_path=str(path_obj)
            ) from None
        except OSError as e:
            raise CredentialFileError(f"Error reading API key file {path_obj}: {e}", file_path=str(path_obj)) from e

        properties = parse_properties(content)
        missing = [key for key in (PROPERTIES_ID_KEY, PROPERTIES_SECRET_KEY) if not properties.get(key)]
        if missing:
            raise CredentialFileError(
                f"API key file {path_obj} is missing {', '.join(missing)}", file_path=str(path_obj)
            )

        logger.debug(f"Resolved API key pair from file: {path_obj} (***)")
        return ApiKeyPair(id=properties[PROPERTIES_ID_KEY], secret=properties[PROPERTIES_SECRET_KEY])


def parse_properties(content: str) -> dict[str, str]:
    """Parse the simple ``key = value`` subset of the Java properties format."""
    properties: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        # The first "=" or ":" separates key from value
        positions = [index for index in (line.find("="), line.find(":")) if index != -1]
        if not positions:
            continue
        split_at = min(positions)
        properties[line[:split_at].strip()] = line[split_at + 1 :].strip()
    return properties


def resolve_api_key_pair(
    *,
    key_id: str | None = None,
    secret: str | None = None,
    file_path: str | Path | None = None,
    resolver: CredentialResolver | None = None,
) -> ApiKeyPair:
    """Resolve the Stormpath API key pair.

    Explicit values win, then ``STORMPATH_API_KEY_ID`` and
    ``STORMPATH_API_KEY_SECRET``, then an ``apiKey.properties`` file. The id
    and secret always come from the same source.

    Raises:
        CredentialNotFoundError: If no source yields both id and secret.
        CredentialFileError: If a properties file exists but is unusable.
    """
    resolver = resolver or CredentialResolver()

    found_id = resolver.resolve(value=key_id, env_var_name=API_KEY_ID_ENV, mask_in_logs=False)
    found_secret = resolver.resolve(value=secret, env_var_name=API_KEY_SECRET_ENV)
    if found_id and found_secret:
        return ApiKeyPair(id=found_id, secret=found_secret)
    if found_id or found_secret:
        logger.warning("Only one of the API key id and secret was provided; trying the API key file")

    keypair = resolver.resolve_properties_file(file_path=file_path)
    if keypair is not None:
        return keypair

    env_var_name = API_KEY_SECRET_ENV if found_id else API_KEY_ID_ENV
    raise CredentialNotFoundError(
        f"Stormpath API key pair not found (checked {API_KEY_ID_ENV}, {API_KEY_SECRET_ENV} and API key file)",
        env_var_name=env_var_name,
    )
