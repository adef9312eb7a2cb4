"""Pluggy hook specifications for devflake.

One composition hook lets plugins add developer tools to the dev shell;
one notification hook fires after every resolution.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("devflake")


class DevflakeHookSpec:
    """Hook specifications for the devflake plugin system."""

    @hookspec
    def devflake_shell_tools(self, platform: str) -> list[dict[str, Any]] | None:
        """Return extra dev-shell tools for *platform*.

        Each entry is an ``AuxTool`` mapping: ``{"name": ..., "version": ...,
        "platforms": [...]}``; ``version`` and ``platforms`` are optional.
        """

    @hookspec
    def post_resolve(
        self,
        platforms: list[str],
        failures: list[dict[str, Any]],
    ) -> None:
        """Called after the OutputSet has been aggregated."""
