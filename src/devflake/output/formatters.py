"""Output mode dispatch.

The CLI renders ServiceResult for humans (Rich tables and colors),
for scripts (``--quiet``), or for machines (``--json``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from devflake.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from devflake.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-related CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    *settings* takes precedence over the ``json_output`` keyword.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
