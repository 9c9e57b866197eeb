"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from spacectl.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from spacectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: names only where that makes sense."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "show_space":
        return str(result.data.get("name", ""))
    if result.op == "list_spaces":
        return "\n".join(str(item["name"]) for item in result.data.get("items", []))
    if result.op == "delete_space":
        return "\n".join(result.data.get("deleted", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _names(values: list[Any]) -> str:
    names = [v["name"] if isinstance(v, dict) else str(v) for v in values]
    return ", ".join(names) or "none"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="sc.ok"), Text(f"  {result.op}", style="sc.op"))


def _field(console: Console, key: str, value: Any, *, indent: int = 2) -> None:
    k = Text(f"{' ' * indent}{key}: ", style="sc.key")
    style = "sc.name" if key in ("name", "organization", "space") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations")
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="sc.error"), Text(f"  {result.op}", style="sc.op"), " — ", Text(msg)
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Space renderers ───────────────────────────────────────────────────


def _render_space_block(console: Console, space: dict[str, Any]) -> None:
    """One space as a heading followed by indented fields."""
    console.print(Text(f"{space['name']}:", style="sc.name"))
    _field(console, "organization", space.get("organization", ""))

    apps = space.get("apps", [])
    services = space.get("services", [])
    if apps and isinstance(apps[0], dict):
        console.print()
        console.print(Text("  apps:", style="sc.key"))
        for app in apps:
            state = str(app.get("state", ""))
            console.print(
                Text(f"    {app['name']}: ", style="sc.name"),
                Text(state.lower(), style=style_for_state(state)),
                sep="",
            )
            _field(console, "instances", app.get("instances", 0), indent=6)
            _field(console, "urls", ", ".join(app.get("urls", [])) or "none", indent=6)
    else:
        _field(console, "apps", _names(apps))

    if services and isinstance(services[0], dict):
        console.print()
        console.print(Text("  services:", style="sc.key"))
        for instance in services:
            console.print(Text(f"    {instance['name']}:", style="sc.name"))
            _field(console, "service", instance.get("service") or "none", indent=6)
            _field(console, "plan", instance.get("plan") or "none", indent=6)
    else:
        _field(console, "services", _names(services))

    _field(console, "domains", _names(space.get("domains", [])))


def _render_show_space(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.data:
        _render_space_block(console, result.data)
    if verbose:
        _render_meta(console, result)


def _render_list_spaces(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(f"No spaces in {result.data.get('organization', '?')}.")
    elif result.data.get("one_line"):
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Name", style="sc.name", no_wrap=True)
        table.add_column("Apps")
        table.add_column("Services")
        for item in items:
            table.add_row(item["name"], _names(item["apps"]), _names(item["services"]))
        console.print(table)
    else:
        for index, item in enumerate(items):
            if index:
                console.print()
            _render_space_block(console, item)
    if verbose:
        _render_meta(console, result)


def _render_create(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for key in ("name", "organization"):
        if key in data:
            _field(console, key, data[key])
    if "created" in data:
        _field(console, "created", "yes" if data["created"] else "no (already exists)")
    if "roles_granted" in data:
        _field(console, "roles", ", ".join(data["roles_granted"]) or "none")
    for failure in data.get("roles_failed", []):
        role, message = failure["role"], escape(failure["message"])
        console.print(f"  [sc.error]failed[/sc.error] {role}: {message}")
    if data.get("targeted") or "space" in data:
        _field(console, "targeted", "yes")
    if verbose:
        _render_meta(console, result)


def _render_delete(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "organization", data.get("organization", ""))
    _field(console, "deleted", _names(data.get("deleted", [])))
    if data.get("skipped"):
        _field(console, "skipped", _names(data["skipped"]))
    if data.get("aborted"):
        _field(console, "not emptied", _names(data["aborted"]))
    for err in data.get("errors", []):
        space, message = escape(err["space"]), escape(err["message"])
        console.print(f"  [sc.error]error[/sc.error] {space}: {message}")
    retarget = data.get("retarget")
    if retarget:
        space = retarget.get("space") or "none selected"
        _field(console, "switched to", f"{retarget['organization']} / {space}")
    if verbose:
        _render_meta(console, result)


def _render_target(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _field(console, "user", data.get("user") or "N/A", indent=0)
    _field(console, "organization", data.get("organization") or "none", indent=0)
    _field(console, "space", data.get("space") or "none", indent=0)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "show_space": _render_show_space,
    "list_spaces": _render_list_spaces,
    "create_space": _render_create,
    "take_space": _render_create,
    "delete_space": _render_delete,
    "target": _render_target,
}
