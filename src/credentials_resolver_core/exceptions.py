"""Standardized exceptions for the credentials resolver.

This module provides the exception types raised while resolving a
credentials provider class name into a provider instance.
"""


class CredentialsResolverError(Exception):
    """Base exception for all credentials resolver errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize the error with a message and optional error code.

        Args:
            message: Human-readable error message.
            error_code: Optional error code for programmatic handling.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class TypeNotFoundError(CredentialsResolverError):
    """Raised when the named provider class cannot be imported."""

    def __init__(self, class_name: str, reason: str | None = None) -> None:
        """Initialize type not found error.

        Args:
            class_name: The class name that could not be located.
            reason: Optional detail on why the lookup failed.
        """
        message = f"Credentials provider class not found: {class_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, "TYPE_NOT_FOUND")
        self.class_name = class_name


class NoMatchingConstructionStrategyError(CredentialsResolverError):
    """Raised when a class exposes none of the supported construction protocols."""

    def __init__(self, class_name: str) -> None:
        """Initialize no matching strategy error.

        Args:
            class_name: The class name that could not be constructed.
        """
        super().__init__(
            f"Credentials provider class {class_name} has neither a constructor "
            "taking only a Configuration, nor builder()/build(), nor create()",
            "NO_MATCHING_STRATEGY",
        )
        self.class_name = class_name


class InvocationFailureError(CredentialsResolverError):
    """Raised when a matched constructor or factory method raises."""

    def __init__(self, class_name: str, strategy: str, cause: BaseException) -> None:
        """Initialize invocation failure error.

        Args:
            class_name: The class name being constructed.
            strategy: Name of the construction strategy that was invoked.
            cause: The exception raised by the invoked entry point.
        """
        super().__init__(
            f"Failed to construct {class_name} using {strategy} strategy: {cause}",
            "INVOCATION_FAILURE",
        )
        self.class_name = class_name
        self.strategy = strategy
        self.cause = cause


class ProviderContractError(CredentialsResolverError):
    """Raised when the constructed object is not a credentials provider."""

    def __init__(self, class_name: str, produced_type: str) -> None:
        """Initialize provider contract error.

        Args:
            class_name: The class name that was resolved.
            produced_type: Name of the type of the object actually produced.
        """
        super().__init__(
            f"Object of type {produced_type} built from {class_name} "
            "does not provide resolve_credentials()",
            "PROVIDER_CONTRACT",
        )
        self.class_name = class_name
