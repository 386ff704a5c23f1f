"""Environment variable credentials provider.

This module provides the EnvironmentCredentialsProvider class for reading
access keys from environment variables, useful for development and testing.
"""

import os

from .base import Credentials

ACCESS_KEY_ID_VAR = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_VAR = "AWS_SECRET_ACCESS_KEY"  # noqa: S105
SESSION_TOKEN_VAR = "AWS_SESSION_TOKEN"  # noqa: S105


class EnvironmentCredentialsProvider:
    """Credentials provider that reads access keys from environment variables."""

    def __init__(self, prefix: str = "") -> None:
        """Initialize the environment credentials provider.

        Args:
            prefix: Optional prefix to add to environment variable names.
        """
        self.prefix = prefix

    @classmethod
    def create(cls) -> "EnvironmentCredentialsProvider":
        """Create a provider using CREDENTIALS_RESOLVER_ENV_PREFIX as prefix."""
        return cls(prefix=os.getenv("CREDENTIALS_RESOLVER_ENV_PREFIX", ""))

    def resolve_credentials(self) -> Credentials:
        """Read credentials from the environment.

        Returns:
            Credentials built from the prefixed AWS variables.

        Raises:
            ValueError: When a required environment variable is not set.
                The error message names every missing variable.
        """
        access_key_var = f"{self.prefix}{ACCESS_KEY_ID_VAR}"
        secret_key_var = f"{self.prefix}{SECRET_ACCESS_KEY_VAR}"

        access_key_id = os.getenv(access_key_var)
        secret_access_key = os.getenv(secret_key_var)

        if access_key_id is None or secret_access_key is None:
            missing_vars = [
                var
                for var in (access_key_var, secret_key_var)
                if os.getenv(var) is None
            ]
            error_msg = "Please set the following environment variables:\n"
            for var in missing_vars:
                error_msg += f"  {var}\n"
            raise ValueError(error_msg)

        return Credentials(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=os.getenv(f"{self.prefix}{SESSION_TOKEN_VAR}"),
        )
