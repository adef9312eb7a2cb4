"""Toolchain descriptor loader.

Reads the rustup-style toolchain file at a fixed path relative to the
project root. Two formats are accepted:

- legacy single line: ``stable``, ``1.70.0``, ``nightly-2022-05-01``
- TOML::

      [toolchain]
      channel = "1.70.0"
      components = ["rustfmt", "clippy"]
      targets = ["wasm32-unknown-unknown"]
      profile = "minimal"

Any failure to find or parse the file is a :class:`ConfigError`; without a
toolchain no platform can be resolved.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ValidationError

from devflake.domain.errors import ConfigError
from devflake.domain.toolchain import ToolchainSpec

logger = logging.getLogger(__name__)

DEFAULT_TOOLCHAIN_FILE = "rust-toolchain"
TOML_SUFFIX = ".toml"


class _ToolchainTable(BaseModel):
    """Shape of the ``[toolchain]`` table."""

    model_config = {"extra": "ignore"}

    channel: str
    components: list[str] = []
    targets: list[str] = []
    profile: str = "default"


def find_toolchain_file(project_root: Path, filename: str = DEFAULT_TOOLCHAIN_FILE) -> Path | None:
    """Return the descriptor path, trying ``<filename>`` then ``<filename>.toml``."""
    candidates = [project_root / filename]
    if not filename.endswith(TOML_SUFFIX):
        candidates.append(project_root / f"{filename}{TOML_SUFFIX}")
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def parse_toolchain(text: str, *, source: str = "<string>") -> ToolchainSpec:
    """Parse descriptor *text* into a ToolchainSpec.

    Raises:
        ConfigError: If the text is empty or malformed.
    """
    lines = [ln.strip() for ln in text.splitlines() if ln.strip() and not ln.strip().startswith("#")]
    if not lines:
        raise ConfigError(f"Toolchain descriptor {source} is empty", path=source)

    if len(lines) == 1 and "=" not in lines[0] and not lines[0].startswith("["):
        return _from_channel(lines[0], source=source)

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in toolchain descriptor {source}: {exc}", path=source) from exc

    table = data.get("toolchain")
    if not isinstance(table, dict):
        raise ConfigError(f"Toolchain descriptor {source} has no [toolchain] table", path=source)
    try:
        parsed = _ToolchainTable.model_validate(table)
    except ValidationError as exc:
        raise ConfigError(f"Malformed [toolchain] table in {source}: {exc}", path=source) from exc

    return _from_channel(
        parsed.channel,
        source=source,
        components=parsed.components,
        targets=parsed.targets,
        profile=parsed.profile,
    )


def _from_channel(channel: str, *, source: str, **kwargs: object) -> ToolchainSpec:
    try:
        return ToolchainSpec.from_channel(channel, **kwargs)  # type: ignore[arg-type]
    except ValueError as exc:
        raise ConfigError(f"{exc} in {source}", path=source) from exc


def load_toolchain(project_root: Path, filename: str = DEFAULT_TOOLCHAIN_FILE) -> ToolchainSpec:
    """Load the pinned toolchain for the project at *project_root*.

    Raises:
        ConfigError: If the descriptor is missing or malformed.
    """
    path = find_toolchain_file(project_root, filename)
    if path is None:
        msg = f"Toolchain descriptor not found: {project_root / filename}"
        raise ConfigError(msg, path=str(project_root / filename))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read toolchain descriptor {path}: {exc}", path=str(path)) from exc

    spec = parse_toolchain(text, source=str(path))
    logger.debug("Loaded toolchain %s from %s", spec.label, path)
    return spec
