"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from devflake.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from devflake.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    if result.ok and result.op == "shell":
        # The script is meant to be eval'd; no decoration.
        return str(result.data.get("script", ""))

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "shell":
        return str(result.data.get("script", ""))
    if result.op == "resolve":
        return "\n".join(result.data.get("platforms", {}))
    if result.op == "platforms":
        return "\n".join(result.data.get("platforms", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="df.ok")
    op = Text(f"  {result.op}", style="df.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="df.key")
    if key == "platform":
        v = Text(str(value), style="df.platform")
    elif key in {"root", "path"}:
        v = Text(str(value), style="df.path")
    elif key in {"name", "package"}:
        v = Text(str(value), style="df.name")
    elif isinstance(value, (list, tuple)):
        v = Text(" ".join(str(item) for item in value))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Operation renderers ───────────────────────────────────────────────


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "toolchain", data.get("toolchain", ""))
    _field(console, "platforms", f"{data.get('count', 0)} resolved, {data.get('failure_count', 0)} failed")
    alias = data.get("legacy_alias")
    if alias:
        _field(console, alias["name"], alias["target"])

    platforms: dict[str, Any] = data.get("platforms", {})
    if platforms:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Platform", style="df.platform", no_wrap=True)
        table.add_column("Package")
        table.add_column("Dev shell")
        table.add_column("Tools", justify="right")
        if verbose:
            table.add_column("Variables", style="dim")
        for platform, out in platforms.items():
            package = out.get("package")
            shell = out["dev_shell"]
            env = shell["env"]
            row = [
                platform,
                package["name"] if package else Text("missing", style="df.missing"),
                f"devShells.{platform}.default",
                str(len(env.get("tools", []))),
            ]
            if verbose:
                row.append(", ".join(sorted([*env.get("variables", {}), *env.get("search_path", {})])))
            table.add_row(*row)
        console.print(table)

    failures: list[dict[str, Any]] = data.get("failures", [])
    if failures:
        console.print(Text("  failures:", style="df.warning"))
        for failure in failures:
            console.print(f"    {failure['platform']}: {failure['message']}")


def _render_platforms(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "provider", result.data.get("provider", ""))
    for platform in result.data.get("platforms", []):
        console.print(Text(f"  {platform}", style="df.platform"))


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("platform", "package", "root", "command"):
        _field(console, key, data.get(key, ""))
    if data.get("dry_run") or verbose:
        console.print(Text("  env:", style="df.key"))
        for name, value in sorted(data.get("env", {}).items()):
            console.print(f"    {name}={value}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="df.error")
    op = Text(f"  {result.op}", style="df.op")
    console.print(label, op, Text(" — "), msg)
    if verbose and err and err.detail:
        for k, v in err.detail.items():
            _field(console, k, v)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "resolve": _render_resolve,
    "platforms": _render_platforms,
    "build": _render_build,
}
