"""Credentials provider resolution by class name.

This module turns the fully-qualified name of a credentials provider class
into a ready-to-use provider instance. The class is imported by name and
constructed with the first protocol it supports, in priority order:

1. ``Provider(configuration)``: a constructor taking exactly one parameter
   annotated as Configuration. Always wins when present.
2. ``Provider.builder().build()``: zero-argument ``builder`` on the class and
   zero-argument ``build`` on the object it returns. If ``build`` is missing
   the next strategy is tried.
3. ``Provider.create()``: zero-argument ``create`` on the class.

Exactly one strategy is invoked successfully per call. Errors raised by an
invoked entry point are wrapped in InvocationFailureError and never cause a
fall through to a lower-priority strategy.
"""

import importlib
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from credentials_resolver_core.configuration import Configuration
from credentials_resolver_core.credentials.base import CredentialsProvider
from credentials_resolver_core.exceptions import (
    InvocationFailureError,
    NoMatchingConstructionStrategyError,
    ProviderContractError,
    TypeNotFoundError,
)

# Get logger for this module
logger = structlog.get_logger(__name__)

CONFIGURATION_STRATEGY = "configuration"
BUILDER_STRATEGY = "builder"
CREATE_STRATEGY = "create"

_CONFIGURATION_ANNOTATIONS = frozenset(
    {Configuration.__name__, f"{Configuration.__module__}.{Configuration.__name__}"}
)
_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)
_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class _StrategyNotApplicable(Exception):  # noqa: N818
    """Raised inside a strategy when it turns out not to match after all."""


@dataclass(frozen=True)
class ConstructionStrategy:
    """One entry of the strategy table: a shape check and its invocation."""

    name: str
    matches: Callable[[type], bool]
    construct: Callable[[type, Configuration], object]


@dataclass(frozen=True)
class ResolvedProvider:
    """A constructed provider together with how it was built."""

    provider: CredentialsProvider
    provider_class: type
    strategy: str


def load_provider_class(class_name: str) -> type:
    """Import a class by its fully-qualified name.

    Accepts ``package.module.Class``, ``package.module.Outer.Inner`` and
    ``package.module:Class``. The longest importable module prefix is used.

    Args:
        class_name: Fully-qualified class name.

    Returns:
        The class object.

    Raises:
        ValueError: If class_name is empty.
        TypeNotFoundError: If the class cannot be imported.
    """
    class_name = class_name.strip() if class_name else ""
    if not class_name:
        raise ValueError("class_name must not be empty")  # noqa: TRY003

    if ":" in class_name:
        module_name, _, attr_path = class_name.partition(":")
        candidates = [(module_name, attr_path.split("."))]
    else:
        parts = class_name.split(".")
        candidates = [
            (".".join(parts[:i]), parts[i:]) for i in range(len(parts) - 1, 0, -1)
        ]

    for module_name, attrs in candidates:
        if not module_name or not all(attrs):
            continue
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # The prefix itself is not a module; try a shorter one
            if e.name is not None and (
                module_name == e.name or module_name.startswith(f"{e.name}.")
            ):
                continue
            raise TypeNotFoundError(
                class_name, f"importing {module_name} failed: {e}"
            ) from e
        except Exception as e:
            raise TypeNotFoundError(
                class_name, f"importing {module_name} failed: {e}"
            ) from e

        obj: Any = module
        for attr in attrs:
            try:
                obj = getattr(obj, attr)
            except AttributeError as e:
                raise TypeNotFoundError(
                    class_name, f"{attr} not found in {module_name}"
                ) from e

        if not inspect.isclass(obj):
            raise TypeNotFoundError(class_name, "not a class")
        return obj

    raise TypeNotFoundError(class_name)


def _signature(obj: Any, *, evaluate: bool = False) -> inspect.Signature | None:
    """Get a callable's signature, or None when it has none.

    With evaluate set, string annotations are evaluated where they can be;
    any failure to evaluate falls back to the raw annotations.
    """
    if evaluate:
        try:
            return inspect.signature(obj, eval_str=True)
        except Exception:  # noqa: BLE001
            logger.debug("Annotations not evaluated", target=repr(obj))
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def _accepts_no_arguments(func: Any) -> bool:
    """Check that a callable can be invoked without any arguments."""
    if not callable(func):
        return False
    signature = _signature(func)
    if signature is None:
        return False
    return all(
        param.kind in _VARIADIC_KINDS or param.default is not inspect.Parameter.empty
        for param in signature.parameters.values()
    )


def _is_configuration_annotation(annotation: Any) -> bool:
    if annotation is Configuration:
        return True
    return isinstance(annotation, str) and annotation in _CONFIGURATION_ANNOTATIONS


def reads_configuration(provider_class: type) -> bool:
    """Check whether a class is constructed as ``provider_class(configuration)``."""
    signature = _signature(provider_class, evaluate=True)
    if signature is None:
        return False
    params = list(signature.parameters.values())
    return (
        len(params) == 1
        and params[0].kind in _POSITIONAL_KINDS
        and _is_configuration_annotation(params[0].annotation)
    )


def _has_builder(provider_class: type) -> bool:
    return _accepts_no_arguments(getattr(provider_class, "builder", None))


def _has_create(provider_class: type) -> bool:
    return _accepts_no_arguments(getattr(provider_class, "create", None))


def _invoke(
    provider_class: type, strategy: str, func: Callable[..., Any], *args: Any
) -> Any:
    """Call an entry point, wrapping anything it raises."""
    try:
        return func(*args)
    except Exception as e:
        raise InvocationFailureError(
            _qualified_name(provider_class), strategy, e
        ) from e


def _construct_with_configuration(
    provider_class: type, configuration: Configuration
) -> object:
    return _invoke(provider_class, CONFIGURATION_STRATEGY, provider_class, configuration)


def _construct_with_builder(provider_class: type, _configuration: Configuration) -> object:
    builder = _invoke(provider_class, BUILDER_STRATEGY, provider_class.builder)  # type: ignore[attr-defined]
    build = getattr(builder, "build", None)
    if not _accepts_no_arguments(build):
        raise _StrategyNotApplicable(
            f"{type(builder).__name__} returned by builder() has no build()"
        )
    return _invoke(provider_class, BUILDER_STRATEGY, build)


def _construct_with_create(provider_class: type, _configuration: Configuration) -> object:
    return _invoke(provider_class, CREATE_STRATEGY, provider_class.create)  # type: ignore[attr-defined]


STRATEGIES: tuple[ConstructionStrategy, ...] = (
    ConstructionStrategy(
        CONFIGURATION_STRATEGY, reads_configuration, _construct_with_configuration
    ),
    ConstructionStrategy(BUILDER_STRATEGY, _has_builder, _construct_with_builder),
    ConstructionStrategy(CREATE_STRATEGY, _has_create, _construct_with_create),
)


def _qualified_name(provider_class: type) -> str:
    return f"{provider_class.__module__}.{provider_class.__qualname__}"


def resolve_with_strategy(
    class_name: str, configuration: Configuration
) -> ResolvedProvider:
    """Resolve a provider and report which construction strategy built it.

    Args:
        class_name: Fully-qualified name of the credentials provider class.
        configuration: Configuration passed to configuration-aware constructors.

    Returns:
        The provider, its class and the name of the strategy used.

    Raises:
        ValueError: If class_name is empty.
        TypeNotFoundError: If the class cannot be imported.
        NoMatchingConstructionStrategyError: If no construction protocol applies.
        InvocationFailureError: If the matched constructor or factory raises.
        ProviderContractError: If the built object is not a credentials provider.
    """
    provider_class = load_provider_class(class_name)

    for strategy in STRATEGIES:
        if not strategy.matches(provider_class):
            continue

        logger.debug(
            "Construction strategy selected",
            class_name=class_name,
            strategy=strategy.name,
        )
        try:
            provider = strategy.construct(provider_class, configuration)
        except _StrategyNotApplicable as e:
            logger.debug(
                "Construction strategy not applicable",
                class_name=class_name,
                strategy=strategy.name,
                reason=str(e),
            )
            continue
        except InvocationFailureError as e:
            logger.warning(
                "Credentials provider construction failed",
                class_name=class_name,
                strategy=strategy.name,
                error=str(e.cause),
            )
            raise

        if not isinstance(provider, CredentialsProvider):
            logger.warning(
                "Constructed object is not a credentials provider",
                class_name=class_name,
                strategy=strategy.name,
                produced_type=type(provider).__name__,
            )
            raise ProviderContractError(class_name, type(provider).__name__)

        logger.info(
            "Credentials provider resolved",
            class_name=class_name,
            strategy=strategy.name,
        )
        return ResolvedProvider(
            provider=provider, provider_class=provider_class, strategy=strategy.name
        )

    logger.warning("No construction strategy matched", class_name=class_name)
    raise NoMatchingConstructionStrategyError(class_name)


def resolve_credentials_provider(
    class_name: str, configuration: Configuration
) -> CredentialsProvider:
    """Create a credentials provider from its class name and a configuration.

    See resolve_with_strategy for the construction order and errors raised.
    """
    return resolve_with_strategy(class_name, configuration).provider
