"""Tests for PlatformMatrix."""

from devflake.config.models import PlatformBuild
from devflake.infrastructure.provider import ToolchainProvider
from devflake.services.matrix import PlatformMatrix


class _CountingProvider(ToolchainProvider):
    def __init__(self, platforms: list[str]) -> None:
        super().__init__(platforms={p: PlatformBuild() for p in platforms})
        self.calls = 0

    def platforms(self) -> tuple[str, ...]:
        self.calls += 1
        return super().platforms()


class TestPlatformMatrix:
    def test_sorted_provider_keys(self) -> None:
        matrix = PlatformMatrix(_CountingProvider(["x86_64-linux", "aarch64-darwin"]))
        assert matrix.platforms() == ("aarch64-darwin", "x86_64-linux")
        assert list(matrix) == ["aarch64-darwin", "x86_64-linux"]

    def test_provider_queried_once(self) -> None:
        provider = _CountingProvider(["x86_64-linux"])
        matrix = PlatformMatrix(provider)
        matrix.platforms()
        matrix.platforms()
        assert len(matrix) == 1
        assert provider.calls == 1

    def test_empty_is_legal(self) -> None:
        matrix = PlatformMatrix(_CountingProvider([]))
        assert matrix.platforms() == ()
        assert len(matrix) == 0

    def test_never_invents_platforms(self) -> None:
        provider = _CountingProvider(["x86_64-linux"])
        assert set(PlatformMatrix(provider).platforms()) <= set(provider.platforms())
