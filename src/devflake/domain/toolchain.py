"""ToolchainSpec — the pinned toolchain descriptor.

A channel string is split into a channel ``name`` and a ``version``:

- ``stable`` / ``beta`` / ``nightly``        → version ``latest``
- ``nightly-2022-05-01``                     → (``nightly``, ``2022-05-01``)
- ``1.70`` / ``1.70.0``                      → (``stable``, ``1.70.0``-style)
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from devflake.domain.types import Channel

LATEST = "latest"

_DATED_RE = re.compile(r"^(stable|beta|nightly)-(\d{4}-\d{2}-\d{2})$")
_VERSION_RE = re.compile(r"^\d+\.\d+(\.\d+)?$")


def parse_channel(channel: str) -> tuple[str, str]:
    """Split a rustup channel string into ``(name, version)``.

    Raises:
        ValueError: If *channel* matches none of the accepted forms.
    """
    value = channel.strip()
    if value in {c.value for c in Channel}:
        return value, LATEST
    m = _DATED_RE.match(value)
    if m:
        return m.group(1), m.group(2)
    if _VERSION_RE.match(value):
        return Channel.STABLE.value, value
    msg = f"Unrecognized toolchain channel: {channel!r}"
    raise ValueError(msg)


class ToolchainSpec(BaseModel):
    """Pinned toolchain, loaded once and shared read-only by all platforms."""

    model_config = {"frozen": True}

    name: str
    version: str
    components: tuple[str, ...] = ()
    targets: tuple[str, ...] = ()
    profile: str = "default"
    channel: str = ""

    @classmethod
    def from_channel(
        cls,
        channel: str,
        *,
        components: list[str] | tuple[str, ...] = (),
        targets: list[str] | tuple[str, ...] = (),
        profile: str = "default",
    ) -> ToolchainSpec:
        """Build a spec from a raw channel string (see :func:`parse_channel`)."""
        name, version = parse_channel(channel)
        return cls(
            name=name,
            version=version,
            components=tuple(components),
            targets=tuple(targets),
            profile=profile,
            channel=channel.strip(),
        )

    @property
    def label(self) -> str:
        """``name-version`` label used in store paths and output."""
        return f"{self.name}-{self.version}"

