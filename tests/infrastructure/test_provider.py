"""Tests for ToolchainProvider."""

import pytest

from devflake.config.models import DEFAULT_PLATFORMS, PlatformBuild, ProviderConfig
from devflake.domain.errors import PlatformUnsupportedError
from devflake.domain.toolchain import ToolchainSpec
from devflake.infrastructure.provider import ToolchainProvider


class TestPlatforms:
    def test_default_platforms(self) -> None:
        assert ToolchainProvider().platforms() == DEFAULT_PLATFORMS

    def test_from_config(self) -> None:
        config = ProviderConfig(
            name="custom",
            store_dir="/opt/store/",
            platforms={"x86_64-linux": PlatformBuild()},
        )
        provider = ToolchainProvider.from_config(config)
        assert provider.name == "custom"
        assert provider.store_dir == "/opt/store"
        assert provider.platforms() == ("x86_64-linux",)

    def test_empty_provider(self) -> None:
        provider = ToolchainProvider(platforms={})
        assert provider.platforms() == ()
        assert not provider.supports("x86_64-linux")


class TestStorePaths:
    def test_deterministic(self, provider: ToolchainProvider) -> None:
        a = provider.tool("lld", "16", "x86_64-linux")
        b = provider.tool("lld", "16", "x86_64-linux")
        assert a == b
        assert a.path.startswith("/nix/store/")
        assert a.path.endswith("-lld-16")

    def test_platform_aware(self, provider: ToolchainProvider) -> None:
        linux = provider.tool("lld", "16", "x86_64-linux")
        arm = provider.tool("lld", "16", "aarch64-linux")
        assert linux.path != arm.path


class TestResolve:
    def test_resolves_supported(self, provider: ToolchainProvider, toolchain: ToolchainSpec) -> None:
        ref = provider.resolve(toolchain, "x86_64-linux")
        assert ref.name == "rust-stable"
        assert ref.version == "1.70"
        assert ref.platform == "x86_64-linux"

    def test_components_change_path(self, provider: ToolchainProvider) -> None:
        plain = provider.resolve(ToolchainSpec.from_channel("1.70"), "x86_64-linux")
        with_fmt = provider.resolve(ToolchainSpec.from_channel("1.70", components=["rustfmt"]), "x86_64-linux")
        assert plain.path != with_fmt.path

    def test_unadvertised_platform(self, provider: ToolchainProvider, toolchain: ToolchainSpec) -> None:
        with pytest.raises(PlatformUnsupportedError) as excinfo:
            provider.resolve(toolchain, "aarch64-darwin")
        assert excinfo.value.platform == "aarch64-darwin"
        assert excinfo.value.component is None

    def test_missing_component(self, provider: ToolchainProvider) -> None:
        spec = ToolchainSpec.from_channel("1.70", components=["rustfmt", "clippy"])
        with pytest.raises(PlatformUnsupportedError) as excinfo:
            provider.resolve(spec, "aarch64-linux")
        assert excinfo.value.component == "clippy"
        assert "aarch64-linux" in str(excinfo.value)
