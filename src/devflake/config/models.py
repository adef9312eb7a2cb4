"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, devflake.toml only contains
overrides. With no config file at all, devflake resolves the ``glif``
editor in the current directory against the rust-overlay platform set.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from devflake.domain.environment import AuxTool

# Same systems rust-overlay publishes binaries for.
DEFAULT_PLATFORMS: tuple[str, ...] = (
    "aarch64-darwin",
    "aarch64-linux",
    "armv7l-linux",
    "i686-linux",
    "x86_64-darwin",
    "x86_64-linux",
)

DEFAULT_ALLOWED_LINTS: tuple[str, ...] = ("dead_code", "unused_imports", "unused_variables")


class ProjectConfig(BaseModel):
    """[project] section."""

    model_config = {"frozen": True}

    name: str = "glif"
    description: str = "glyph editor"
    source_root: str = "."


class ToolchainConfig(BaseModel):
    """[toolchain] section."""

    model_config = {"frozen": True}

    file: str = "rust-toolchain"


class PlatformBuild(BaseModel):
    """One entry of [provider.platforms]. ``components=None`` means all."""

    model_config = {"frozen": True}

    components: list[str] | None = None


def _default_platform_builds() -> dict[str, PlatformBuild]:
    return {platform: PlatformBuild() for platform in DEFAULT_PLATFORMS}


class ProviderConfig(BaseModel):
    """[provider] section."""

    model_config = {"frozen": True}

    name: str = "rust-overlay"
    store_dir: str = "/nix/store"
    platforms: dict[str, PlatformBuild] = Field(default_factory=_default_platform_builds)


def _default_aux_tools() -> list[AuxTool]:
    return [
        AuxTool(name="lld"),
        AuxTool(name="pkg-config"),
        AuxTool(name="glibc", platforms=["*-linux"]),
    ]


class AuxConfig(BaseModel):
    """[aux] section."""

    model_config = {"frozen": True}

    tools: list[AuxTool] = Field(default_factory=_default_aux_tools)
    force_cross: bool = True


def _default_shell_tools() -> list[AuxTool]:
    return [AuxTool(name="rust-analyzer"), AuxTool(name="cargo")]


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    out_dir: str = "./target"
    allowed_lints: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_LINTS))
    extra_tools: list[AuxTool] = Field(default_factory=_default_shell_tools)


class ResolveConfig(BaseModel):
    """[resolve] section."""

    model_config = {"frozen": True}

    max_workers: int = Field(default=1, ge=1)

