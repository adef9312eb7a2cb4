"""EnvironmentConfig — variables, append-semantics search paths, and tool refs.

Two kinds of variables live in an environment:

- ``variables``: plain ``NAME=value`` pairs. On merge, the later value wins.
- ``search_path``: path-list variables such as ``LD_LIBRARY_PATH``. These are
  never overwritten, only extended, and the ambient value of the same name is
  appended at consumption time (see :meth:`EnvironmentConfig.materialize`).

``tools`` is ordered: earlier entries shadow later ones on ``PATH``.
"""

from __future__ import annotations

import fnmatch
import shlex
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from devflake.domain.types import PlatformId

LIBRARY_PATH_VAR = "LD_LIBRARY_PATH"
PATH_VAR = "PATH"


class ToolRef(BaseModel):
    """A tool build resolved for one platform."""

    model_config = {"frozen": True}

    name: str
    version: str
    platform: PlatformId
    path: str

    @property
    def bin_dir(self) -> str:
        return f"{self.path}/bin"

    @property
    def lib_dir(self) -> str:
        return f"{self.path}/lib"


class AuxTool(BaseModel):
    """Declaration of an auxiliary tool (linker, pkg-config, runtime library)."""

    model_config = {"frozen": True}

    name: str
    version: str = "latest"
    platforms: list[str] | None = Field(
        default=None,
        description="fnmatch patterns restricting the tool to some platforms.",
    )

    def applies_to(self, platform: PlatformId) -> bool:
        if self.platforms is None:
            return True
        return any(fnmatch.fnmatchcase(platform, pattern) for pattern in self.platforms)


def _extend_unique(target: list[str], entries: Iterable[str]) -> None:
    for entry in entries:
        if entry not in target:
            target.append(entry)


class EnvironmentConfig(BaseModel):
    """Immutable environment shared by a platform's package and dev shell."""

    model_config = {"frozen": True}

    variables: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    search_path: Mapping[str, tuple[str, ...]] = Field(default_factory=lambda: MappingProxyType({}))
    tools: tuple[ToolRef, ...] = ()

    @field_validator("variables", "search_path", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("variables", "search_path")
    def _as_dict(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    def merge(self, other: EnvironmentConfig) -> EnvironmentConfig:
        """Return a new environment with *other* layered on top.

        Plain variables: later wins. Search-path variables: concatenated,
        never replaced. A plain value whose name is a search-path variable
        is appended to that path list.
        """
        variables = dict(self.variables)
        search_path = {name: list(entries) for name, entries in self.search_path.items()}

        for name, entries in other.search_path.items():
            if name not in search_path:
                seed = variables.pop(name, None)
                search_path[name] = [seed] if seed else []
            _extend_unique(search_path[name], entries)

        for name, value in other.variables.items():
            if name in search_path:
                _extend_unique(search_path[name], [value])
            else:
                variables[name] = value

        tools = list(self.tools)
        for tool in other.tools:
            if tool not in tools:
                tools.append(tool)

        return EnvironmentConfig(
            variables=variables,
            search_path={name: tuple(entries) for name, entries in search_path.items()},
            tools=tuple(tools),
        )

    def with_variables(self, values: Mapping[str, str]) -> EnvironmentConfig:
        return self.merge(EnvironmentConfig(variables=dict(values)))

    def names(self) -> set[str]:
        """All variable names this environment sets."""
        return set(self.variables) | set(self.search_path)

    def materialize(self, ambient: Mapping[str, str] | None = None) -> dict[str, str]:
        """Render concrete variables against an ambient process environment.

        The ambient value of every search-path variable (and ``PATH``) is
        appended after the composed entries, never replaced.
        """
        ambient = ambient or {}
        result = dict(self.variables)
        for name, entries in self.search_path.items():
            result[name] = _join(entries, ambient.get(name))
        if self.tools:
            result[PATH_VAR] = _join([t.bin_dir for t in self.tools], ambient.get(PATH_VAR))
        return result

    def render_exports(self) -> str:
        """Render a POSIX shell snippet that applies this environment.

        Search-path variables expand their ambient value when the snippet
        is sourced, not when it is rendered.
        """
        lines = [f"export {name}={shlex.quote(value)}" for name, value in sorted(self.variables.items())]
        paths = dict(self.search_path)
        if self.tools:
            paths[PATH_VAR] = tuple(t.bin_dir for t in self.tools)
        for name, entries in sorted(paths.items()):
            inherited = f'"${{{name}:+:${name}}}"'
            lines.append(f"export {name}={shlex.quote(':'.join(entries))}{inherited}")
        return "\n".join(lines)


def _join(entries: Iterable[str], inherited: str | None) -> str:
    parts = list(entries)
    if inherited:
        parts.append(inherited)
    return ":".join(parts)
