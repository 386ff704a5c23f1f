"""boto3 session credentials provider.

This is the default provider. It defers to boto3's own credential chain
(environment, shared config files, container and instance metadata).
"""

import os

import boto3

from .base import Credentials


class BotoSessionCredentialsProvider:
    """Credentials provider backed by a boto3 session's credential chain."""

    def __init__(self, profile_name: str | None = None) -> None:
        """Initialize the provider.

        Args:
            profile_name: Optional AWS profile for the boto3 session.
        """
        self.profile_name = profile_name

    @classmethod
    def create(cls) -> "BotoSessionCredentialsProvider":
        """Create a provider, respecting AWS profile overrides."""
        return cls(
            profile_name=os.getenv(
                "CREDENTIALS_RESOLVER_AWS_PROFILE", os.getenv("AWS_PROFILE")
            )
        )

    def resolve_credentials(self) -> Credentials:
        """Resolve credentials through the boto3 credential chain.

        Raises:
            ValueError: When boto3 finds no credentials.
        """
        if self.profile_name:
            session = boto3.session.Session(profile_name=self.profile_name)
        else:
            session = boto3.session.Session()

        found = session.get_credentials()
        if found is None:
            raise ValueError("No AWS credentials found in the boto3 credential chain")  # noqa: TRY003

        frozen = found.get_frozen_credentials()
        return Credentials(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            session_token=frozen.token,
        )
