"""Base credentials provider interface and credentials value type.

This module defines the CredentialsProvider protocol that every resolved
provider must satisfy, and the Credentials value it hands out.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Credentials:
    """Access key material for a storage or network client."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)


@runtime_checkable
class CredentialsProvider(Protocol):
    """Interface for credentials providers."""

    def resolve_credentials(self) -> Credentials:
        """Get the current credentials.

        Returns:
            The credentials to authenticate with.
        """
        ...
