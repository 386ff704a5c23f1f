"""Static credentials provider built through a fluent builder.

The builder starts from environment variables, so the provider can also be
resolved by class name with ``builder().build()``.

Environment Variables:
    CREDENTIALS_RESOLVER_STATIC_ACCESS_KEY_ID: Access key id. Default: None
    CREDENTIALS_RESOLVER_STATIC_SECRET_ACCESS_KEY: Secret access key. Default: None
    CREDENTIALS_RESOLVER_STATIC_SESSION_TOKEN: Session token. Default: None
"""

import os

from .base import Credentials


class StaticCredentialsProvider:
    """Credentials provider that always returns the same credentials."""

    def __init__(self, credentials: Credentials) -> None:
        """Initialize the provider with the credentials it returns."""
        self.credentials = credentials

    @staticmethod
    def builder() -> "StaticCredentialsProviderBuilder":
        """Start a builder, pre-filled from the environment."""
        return StaticCredentialsProviderBuilder()

    def resolve_credentials(self) -> Credentials:
        """Return the fixed credentials."""
        return self.credentials


class StaticCredentialsProviderBuilder:
    """Fluent builder for StaticCredentialsProvider."""

    def __init__(self) -> None:
        self._access_key_id = os.getenv("CREDENTIALS_RESOLVER_STATIC_ACCESS_KEY_ID")
        self._secret_access_key = os.getenv(
            "CREDENTIALS_RESOLVER_STATIC_SECRET_ACCESS_KEY"
        )
        self._session_token = os.getenv("CREDENTIALS_RESOLVER_STATIC_SESSION_TOKEN")

    def access_key_id(self, value: str) -> "StaticCredentialsProviderBuilder":
        """Set the access key id."""
        self._access_key_id = value
        return self

    def secret_access_key(self, value: str) -> "StaticCredentialsProviderBuilder":
        """Set the secret access key."""
        self._secret_access_key = value
        return self

    def session_token(self, value: str) -> "StaticCredentialsProviderBuilder":
        """Set the optional session token."""
        self._session_token = value
        return self

    def build(self) -> StaticCredentialsProvider:
        """Build the provider.

        Raises:
            ValueError: When the access key id or secret access key is unset.
        """
        if not self._access_key_id or not self._secret_access_key:
            raise ValueError(  # noqa: TRY003
                "access_key_id and secret_access_key are required"
            )
        return StaticCredentialsProvider(
            Credentials(
                access_key_id=self._access_key_id,
                secret_access_key=self._secret_access_key,
                session_token=self._session_token,
            )
        )
