"""Unit tests for credentials provider resolution.

This module tests class lookup by name and the priority order of the
configuration constructor, builder()/build() and create() protocols.
"""

import os
from unittest.mock import Mock, patch

import pytest

from credentials_resolver_core.configuration import Configuration
from credentials_resolver_core.credentials import (
    AWSSecretsCredentialsProvider,
    BotoSessionCredentialsProvider,
    ConfigurationCredentialsProvider,
    Credentials,
    EnvironmentCredentialsProvider,
    StaticCredentialsProvider,
)
from credentials_resolver_core.exceptions import (
    InvocationFailureError,
    NoMatchingConstructionStrategyError,
    ProviderContractError,
    TypeNotFoundError,
)
from credentials_resolver_core.resolver import (
    BUILDER_STRATEGY,
    CONFIGURATION_STRATEGY,
    CREATE_STRATEGY,
    load_provider_class,
    reads_configuration,
    resolve_credentials_provider,
    resolve_with_strategy,
)

_CREDENTIALS = Credentials(access_key_id="AKIATEST", secret_access_key="secret")


class _FakeProvider:
    def resolve_credentials(self) -> Credentials:
        return _CREDENTIALS


class ConfigurationOnlyProvider(_FakeProvider):
    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration


class ConfigurationProviderWithFactories(_FakeProvider):
    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration

    @staticmethod
    def builder() -> "_FailingBuilder":
        raise RuntimeError("builder must not be called")

    @classmethod
    def create(cls) -> "ConfigurationProviderWithFactories":
        raise RuntimeError("create must not be called")


class StringAnnotatedProvider(_FakeProvider):
    def __init__(self, configuration: "Configuration") -> None:
        self.configuration = configuration


class KeywordOnlyConfigurationProvider(_FakeProvider):
    def __init__(self, *, configuration: Configuration) -> None:
        self.configuration = configuration


class BuilderProvider(_FakeProvider):
    def __init__(self, source: str) -> None:
        self.source = source

    @staticmethod
    def builder() -> "_Builder":
        return _Builder()

    @classmethod
    def create(cls) -> "BuilderProvider":
        raise RuntimeError("create must not be called")


class _Builder:
    def build(self) -> BuilderProvider:
        return BuilderProvider("builder")


class ClassmethodBuilderProvider(_FakeProvider):
    @classmethod
    def builder(cls, region: str = "eu-west-2") -> "_ClassmethodBuilder":
        return _ClassmethodBuilder(region)


class _ClassmethodBuilder:
    def __init__(self, region: str) -> None:
        self.region = region

    def build(self) -> ClassmethodBuilderProvider:
        provider = ClassmethodBuilderProvider()
        provider.region = self.region  # type: ignore[attr-defined]
        return provider


class BuilderWithoutBuildProvider(_FakeProvider):
    @staticmethod
    def builder() -> object:
        return object()

    @classmethod
    def create(cls) -> "BuilderWithoutBuildProvider":
        return cls()


class BuilderWithoutBuildOrCreateProvider(_FakeProvider):
    @staticmethod
    def builder() -> object:
        return object()


class CreateOnlyProvider(_FakeProvider):
    @classmethod
    def create(cls) -> "CreateOnlyProvider":
        return cls()


class NoProtocolProvider(_FakeProvider):
    def __init__(self, region: str) -> None:
        self.region = region


class InstanceMethodFactoriesProvider(_FakeProvider):
    def builder(self) -> "_Builder":
        return _Builder()

    def create(self) -> "InstanceMethodFactoriesProvider":
        return self


class RequiredArgumentCreateProvider(_FakeProvider):
    @classmethod
    def create(cls, region: str) -> "RequiredArgumentCreateProvider":
        return cls()


class FailingConstructorProvider(_FakeProvider):
    def __init__(self, configuration: Configuration) -> None:
        raise RuntimeError("constructor exploded")

    @classmethod
    def create(cls) -> CreateOnlyProvider:
        return CreateOnlyProvider()


class _FailingBuilder:
    def build(self) -> object:
        raise ValueError("build exploded")


class FailingBuilderProvider(_FakeProvider):
    @staticmethod
    def builder() -> object:
        raise ValueError("builder exploded")

    @classmethod
    def create(cls) -> "FailingBuilderProvider":
        return cls()


class FailingBuildProvider(_FakeProvider):
    @staticmethod
    def builder() -> _FailingBuilder:
        return _FailingBuilder()

    @classmethod
    def create(cls) -> "FailingBuildProvider":
        return cls()


class FailingCreateProvider(_FakeProvider):
    @classmethod
    def create(cls) -> "FailingCreateProvider":
        raise KeyError("create exploded")


class NotAProvider:
    @classmethod
    def create(cls) -> object:
        return object()


class Outer:
    class Inner(_FakeProvider):
        @classmethod
        def create(cls) -> "Outer.Inner":
            return cls()


NOT_A_CLASS = 42


def _name(cls: type) -> str:
    return f"{__name__}.{cls.__qualname__}"


class TestLoadProviderClass:
    """Test class lookup by name."""

    def test_load_module_level_class(self) -> None:
        """Test loading a class by dotted name."""
        assert load_provider_class(_name(CreateOnlyProvider)) is CreateOnlyProvider

    def test_load_nested_class(self) -> None:
        """Test loading a nested class by dotted name."""
        assert load_provider_class(_name(Outer.Inner)) is Outer.Inner

    def test_load_with_colon_separator(self) -> None:
        """Test loading a class using module:Class syntax."""
        assert (
            load_provider_class(f"{__name__}:CreateOnlyProvider") is CreateOnlyProvider
        )

    def test_load_strips_whitespace(self) -> None:
        """Test surrounding whitespace is ignored."""
        assert (
            load_provider_class(f"  {_name(CreateOnlyProvider)}\n")
            is CreateOnlyProvider
        )

    def test_load_bundled_provider(self) -> None:
        """Test loading a provider shipped with the package."""
        assert (
            load_provider_class(
                "credentials_resolver_core.credentials.environment.EnvironmentCredentialsProvider"
            )
            is EnvironmentCredentialsProvider
        )

    @pytest.mark.parametrize("class_name", ["", "   "])
    def test_empty_class_name(self, class_name: str) -> None:
        """Test empty class names are rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            load_provider_class(class_name)

    def test_unknown_module(self) -> None:
        """Test a class in a module that does not exist."""
        with pytest.raises(TypeNotFoundError) as exc_info:
            load_provider_class("no_such_module_for_resolver_tests.Provider")
        assert exc_info.value.class_name == "no_such_module_for_resolver_tests.Provider"
        assert exc_info.value.error_code == "TYPE_NOT_FOUND"

    def test_unknown_attribute(self) -> None:
        """Test a missing class in an existing module."""
        with pytest.raises(TypeNotFoundError, match="MissingProvider not found"):
            load_provider_class(f"{__name__}.MissingProvider")

    def test_name_without_module(self) -> None:
        """Test a bare class name cannot be resolved."""
        with pytest.raises(TypeNotFoundError):
            load_provider_class("CreateOnlyProvider")

    def test_not_a_class(self) -> None:
        """Test a name that resolves to something other than a class."""
        with pytest.raises(TypeNotFoundError, match="not a class"):
            load_provider_class(f"{__name__}.NOT_A_CLASS")

    def test_module_with_missing_dependency(self) -> None:
        """Test a module whose own imports fail is reported as not found."""
        error = ModuleNotFoundError("No module named 'missing_dep'", name="missing_dep")
        with patch(
            "credentials_resolver_core.resolver.importlib.import_module",
            side_effect=error,
        ):
            with pytest.raises(TypeNotFoundError, match="missing_dep") as exc_info:
                load_provider_class("some_package.providers.Provider")
        assert exc_info.value.__cause__ is error

    def test_module_raising_on_import(self) -> None:
        """Test a module raising during import is reported as not found."""
        with patch(
            "credentials_resolver_core.resolver.importlib.import_module",
            side_effect=RuntimeError("import exploded"),
        ):
            with pytest.raises(TypeNotFoundError, match="import exploded"):
                load_provider_class("some_package.providers.Provider")


class TestReadsConfiguration:
    """Test detection of the configuration constructor shape."""

    def test_configuration_constructor(self) -> None:
        assert reads_configuration(ConfigurationOnlyProvider)

    def test_string_annotation(self) -> None:
        assert reads_configuration(StringAnnotatedProvider)

    def test_keyword_only_parameter(self) -> None:
        assert not reads_configuration(KeywordOnlyConfigurationProvider)

    def test_other_parameter_type(self) -> None:
        assert not reads_configuration(NoProtocolProvider)

    def test_no_constructor(self) -> None:
        assert not reads_configuration(CreateOnlyProvider)


class TestResolveCredentialsProvider:
    """Test construction strategy selection and invocation."""

    def test_configuration_constructor_receives_same_configuration(self) -> None:
        """Test the configuration reference is passed through unmodified."""
        configuration = Configuration({"fs.s3a.endpoint": "http://localhost:4566"})
        resolved = resolve_with_strategy(
            _name(ConfigurationOnlyProvider), configuration
        )
        assert resolved.strategy == CONFIGURATION_STRATEGY
        assert isinstance(resolved.provider, ConfigurationOnlyProvider)
        assert resolved.provider.configuration is configuration
        assert dict(configuration) == {"fs.s3a.endpoint": "http://localhost:4566"}

    def test_configuration_constructor_wins_over_factories(self) -> None:
        """Test the configuration constructor takes priority over builder and create."""
        configuration = Configuration()
        resolved = resolve_with_strategy(
            _name(ConfigurationProviderWithFactories), configuration
        )
        assert resolved.strategy == CONFIGURATION_STRATEGY
        assert resolved.provider.configuration is configuration  # type: ignore[attr-defined]

    def test_string_annotated_configuration_constructor(self) -> None:
        """Test a string annotation still selects the configuration constructor."""
        configuration = Configuration()
        provider = resolve_credentials_provider(
            _name(StringAnnotatedProvider), configuration
        )
        assert provider.configuration is configuration  # type: ignore[attr-defined]

    def test_builder_then_build(self) -> None:
        """Test builder().build() is used when there is no configuration constructor."""
        resolved = resolve_with_strategy(_name(BuilderProvider), Configuration())
        assert resolved.strategy == BUILDER_STRATEGY
        assert isinstance(resolved.provider, BuilderProvider)
        assert resolved.provider.source == "builder"

    def test_classmethod_builder_with_defaults(self) -> None:
        """Test a classmethod builder whose parameters all have defaults."""
        provider = resolve_credentials_provider(
            _name(ClassmethodBuilderProvider), Configuration()
        )
        assert provider.region == "eu-west-2"  # type: ignore[attr-defined]

    def test_builder_without_build_falls_through_to_create(self) -> None:
        """Test a builder result with no build() falls through to create()."""
        resolved = resolve_with_strategy(
            _name(BuilderWithoutBuildProvider), Configuration()
        )
        assert resolved.strategy == CREATE_STRATEGY
        assert isinstance(resolved.provider, BuilderWithoutBuildProvider)

    def test_builder_without_build_or_create(self) -> None:
        """Test falling through from builder with no create() left."""
        with pytest.raises(NoMatchingConstructionStrategyError):
            resolve_credentials_provider(
                _name(BuilderWithoutBuildOrCreateProvider), Configuration()
            )

    def test_create(self) -> None:
        """Test create() is used when nothing else matches."""
        resolved = resolve_with_strategy(_name(CreateOnlyProvider), Configuration())
        assert resolved.strategy == CREATE_STRATEGY
        assert resolved.provider_class is CreateOnlyProvider
        assert resolved.provider.resolve_credentials() == _CREDENTIALS

    def test_nested_class_create(self) -> None:
        """Test resolving a nested provider class."""
        provider = resolve_credentials_provider(_name(Outer.Inner), Configuration())
        assert isinstance(provider, Outer.Inner)

    @pytest.mark.parametrize(
        "provider_class",
        [
            NoProtocolProvider,
            KeywordOnlyConfigurationProvider,
            InstanceMethodFactoriesProvider,
            RequiredArgumentCreateProvider,
        ],
    )
    def test_no_matching_strategy(self, provider_class: type) -> None:
        """Test classes exposing none of the protocols are rejected."""
        with pytest.raises(NoMatchingConstructionStrategyError) as exc_info:
            resolve_credentials_provider(_name(provider_class), Configuration())
        assert exc_info.value.class_name == _name(provider_class)
        assert exc_info.value.error_code == "NO_MATCHING_STRATEGY"

    def test_type_not_found_before_construction(self) -> None:
        """Test unknown class names fail before any strategy is tried."""
        strategy = Mock()
        with patch("credentials_resolver_core.resolver.STRATEGIES", (strategy,)):
            with pytest.raises(TypeNotFoundError):
                resolve_credentials_provider(
                    f"{__name__}.MissingProvider", Configuration()
                )
        strategy.matches.assert_not_called()
        strategy.construct.assert_not_called()

    def test_failing_constructor_does_not_fall_through(self) -> None:
        """Test a raising configuration constructor is reported, not skipped."""
        with pytest.raises(InvocationFailureError) as exc_info:
            resolve_credentials_provider(
                _name(FailingConstructorProvider), Configuration()
            )
        error = exc_info.value
        assert error.strategy == CONFIGURATION_STRATEGY
        assert isinstance(error.cause, RuntimeError)
        assert error.__cause__ is error.cause
        assert "constructor exploded" in str(error)

    def test_failing_builder_does_not_fall_through(self) -> None:
        """Test a raising builder() is reported, not skipped."""
        with pytest.raises(InvocationFailureError) as exc_info:
            resolve_credentials_provider(_name(FailingBuilderProvider), Configuration())
        assert exc_info.value.strategy == BUILDER_STRATEGY
        assert isinstance(exc_info.value.cause, ValueError)

    def test_failing_build_does_not_fall_through(self) -> None:
        """Test a raising build() is reported, not skipped."""
        with pytest.raises(InvocationFailureError, match="build exploded") as exc_info:
            resolve_credentials_provider(_name(FailingBuildProvider), Configuration())
        assert exc_info.value.strategy == BUILDER_STRATEGY

    def test_failing_create(self) -> None:
        """Test a raising create() is wrapped."""
        with pytest.raises(InvocationFailureError) as exc_info:
            resolve_credentials_provider(_name(FailingCreateProvider), Configuration())
        assert exc_info.value.strategy == CREATE_STRATEGY
        assert isinstance(exc_info.value.cause, KeyError)
        assert exc_info.value.error_code == "INVOCATION_FAILURE"

    def test_result_must_be_a_provider(self) -> None:
        """Test objects without resolve_credentials() are rejected."""
        with pytest.raises(ProviderContractError) as exc_info:
            resolve_credentials_provider(_name(NotAProvider), Configuration())
        assert exc_info.value.error_code == "PROVIDER_CONTRACT"

    def test_independent_instances(self) -> None:
        """Test two resolutions produce two independent providers."""
        configuration = Configuration()
        first = resolve_credentials_provider(_name(BuilderProvider), configuration)
        second = resolve_credentials_provider(_name(BuilderProvider), configuration)
        assert first is not second
        assert type(first) is type(second)
        assert first.resolve_credentials() == second.resolve_credentials()


class TestResolveBundledProviders:
    """Test each bundled provider resolves with the expected strategy."""

    def test_configuration_provider(self) -> None:
        configuration = Configuration(
            {"fs.s3a.access.key": "AKIACONF", "fs.s3a.secret.key": "conf-secret"}
        )
        resolved = resolve_with_strategy(
            "credentials_resolver_core.credentials.conf.ConfigurationCredentialsProvider",
            configuration,
        )
        assert resolved.strategy == CONFIGURATION_STRATEGY
        assert isinstance(resolved.provider, ConfigurationCredentialsProvider)
        assert resolved.provider.resolve_credentials().access_key_id == "AKIACONF"

    def test_environment_provider(self) -> None:
        resolved = resolve_with_strategy(
            "credentials_resolver_core.credentials.environment.EnvironmentCredentialsProvider",
            Configuration(),
        )
        assert resolved.strategy == CREATE_STRATEGY
        assert isinstance(resolved.provider, EnvironmentCredentialsProvider)

    def test_aws_secrets_provider_prefers_builder(self) -> None:
        resolved = resolve_with_strategy(
            "credentials_resolver_core.credentials.aws.AWSSecretsCredentialsProvider",
            Configuration(),
        )
        assert resolved.strategy == BUILDER_STRATEGY
        assert isinstance(resolved.provider, AWSSecretsCredentialsProvider)

    def test_boto_session_provider(self) -> None:
        resolved = resolve_with_strategy(
            "credentials_resolver_core.credentials.boto.BotoSessionCredentialsProvider",
            Configuration(),
        )
        assert resolved.strategy == CREATE_STRATEGY
        assert isinstance(resolved.provider, BotoSessionCredentialsProvider)

    def test_static_provider_without_keys_fails_in_build(self) -> None:
        with pytest.raises(InvocationFailureError) as exc_info:
            resolve_credentials_provider(
                "credentials_resolver_core.credentials.static.StaticCredentialsProvider",
                Configuration(),
            )
        assert exc_info.value.strategy == BUILDER_STRATEGY
        assert isinstance(exc_info.value.cause, ValueError)

    def test_static_provider_from_environment(self) -> None:
        environ_vars = {
            "CREDENTIALS_RESOLVER_STATIC_ACCESS_KEY_ID": "AKIASTATIC",
            "CREDENTIALS_RESOLVER_STATIC_SECRET_ACCESS_KEY": "static-secret",
        }
        with patch.dict(os.environ, environ_vars):
            resolved = resolve_with_strategy(
                "credentials_resolver_core.credentials.static.StaticCredentialsProvider",
                Configuration(),
            )
        assert resolved.strategy == BUILDER_STRATEGY
        assert isinstance(resolved.provider, StaticCredentialsProvider)
        assert resolved.provider.resolve_credentials().access_key_id == "AKIASTATIC"
