"""Resolution outputs — descriptors, per-platform failures, and the OutputSet.

The legacy singular shell name (``devShell``) is a lookup into the OutputSet,
never a second copy of the descriptor: :func:`legacy_shell` returns the same
instance stored under ``devShells.<platform>.default``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from devflake.domain.environment import EnvironmentConfig
from devflake.domain.types import FailureKind, PlatformId

DEFAULT_SHELL_NAME = "default"
LEGACY_SHELL_NAME = "devShell"


class PackageDescriptor(BaseModel):
    """A build derivation: source root plus the environment to build it in."""

    model_config = {"frozen": True}

    name: str
    platform: PlatformId
    root: str
    env: EnvironmentConfig


class DevShellDescriptor(BaseModel):
    """An interactive shell configured like the package build, plus dev extras."""

    model_config = {"frozen": True}

    name: str
    description: str
    platform: PlatformId
    env: EnvironmentConfig

    @property
    def qualified_name(self) -> str:
        return f"devShells.{self.platform}.{DEFAULT_SHELL_NAME}"


class PlatformFailure(BaseModel):
    """A per-platform error reported next to (not instead of) the OutputSet."""

    model_config = {"frozen": True}

    platform: PlatformId
    kind: FailureKind
    message: str
    component: str | None = None


class PlatformOutputs(BaseModel):
    """Package and dev shell for one platform. ``package`` is None on InputError."""

    model_config = {"frozen": True}

    package: PackageDescriptor | None
    dev_shell: DevShellDescriptor


class OutputSet(BaseModel):
    """Final mapping from platform to its outputs, plus collected failures."""

    model_config = {"frozen": True}

    outputs: dict[PlatformId, PlatformOutputs] = Field(default_factory=dict)
    failures: tuple[PlatformFailure, ...] = ()

    def __contains__(self, platform: object) -> bool:
        return platform in self.outputs

    def __len__(self) -> int:
        return len(self.outputs)

    @property
    def platforms(self) -> list[PlatformId]:
        return list(self.outputs)

    def shell(self, platform: PlatformId) -> DevShellDescriptor:
        """Platform-qualified dev shell (``devShells.<platform>.default``).

        Raises:
            KeyError: If *platform* was not resolved.
        """
        return self.outputs[platform].dev_shell

    def package(self, platform: PlatformId) -> PackageDescriptor | None:
        return self.outputs[platform].package

    def legacy_alias(self, current_platform: PlatformId) -> DevShellDescriptor | None:
        """The shell the ``devShell`` alias points at, or None if *current_platform* did not resolve."""
        out = self.outputs.get(current_platform)
        return out.dev_shell if out is not None else None

    def failures_for(self, platform: PlatformId) -> list[PlatformFailure]:
        return [f for f in self.failures if f.platform == platform]

    def summary(self) -> dict[str, Any]:
        """JSON-ready view used by the CLI."""
        platforms: dict[str, Any] = {}
        for platform, out in self.outputs.items():
            platforms[platform] = {
                "package": out.package.model_dump(mode="json") if out.package else None,
                "dev_shell": out.dev_shell.model_dump(mode="json"),
            }
        return {
            "platforms": platforms,
            "failures": [f.model_dump(mode="json") for f in self.failures],
        }


def legacy_shell(outputs: OutputSet, current_platform: PlatformId) -> DevShellDescriptor:
    """Resolve the legacy ``devShell`` alias for *current_platform*.

    Raises:
        KeyError: If *current_platform* has no resolved dev shell.
    """
    return outputs.shell(current_platform)
