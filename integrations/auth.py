"""Credential lookup for authenticated backend requests."""

import logging
import os
from pathlib import Path

from schemas.errors import AuthorizationError

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "STARTERKIT_TOKEN"


class AuthHandler:
    """Resolves the bearer token used for backend requests.

    Lookup order: explicit token, ``STARTERKIT_TOKEN`` environment
    variable, then the ``STARTERKIT_TOKEN=`` line of the credentials file.

    Example:
        >>> auth = AuthHandler(credentials_file=Path("~/.starterkit/config.env"))
        >>> auth.headers()
        {'Authorization': 'Bearer ...'}
    """

    def __init__(
        self,
        token: str | None = None,
        credentials_file: Path | None = None,
    ):
        """Initialize the handler.

        Args:
            token: Explicit token, takes precedence over everything else.
            credentials_file: env-style file written by the login flow.
        """
        self.credentials_file = credentials_file
        self.token = token or os.environ.get(TOKEN_ENV_VAR) or self._load_token_from_file()

    def _load_token_from_file(self) -> str | None:
        """Load the token from the credentials file, if there is one."""
        if self.credentials_file is None or not self.credentials_file.exists():
            return None

        try:
            for line in self.credentials_file.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    if key.strip() == TOKEN_ENV_VAR:
                        return value.strip() or None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read credentials file %s: %s", self.credentials_file, e)
        return None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def headers(self) -> dict[str, str]:
        """Authorization headers, empty when no token is configured."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def require_token(self) -> dict[str, str]:
        """Authorization headers, raising when no token is configured.

        Raises:
            AuthorizationError: If no token could be found.
        """
        if not self.token:
            raise AuthorizationError(
                "Authentication required. "
                f"Set {TOKEN_ENV_VAR} or log in and try again."
            )
        return self.headers()
