"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.

User-supplied text (field names, values like ``[0]``) is always wrapped in
``Text`` so Rich never parses it as markup.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from projctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from projctl.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, title: str = "") -> None:
    parts = [Text("OK", style="proj.ok"), Text(f"  {result.op}", style="proj.op")]
    if title:
        parts.append(Text(f"  {title}", style="proj.field"))
    console.print(*parts, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="proj.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="proj.id")
    elif key == "url":
        v = Text(str(value), style="proj.link")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="proj.error"),
        Text(f"  {result.op}", style="proj.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Update renderer ───────────────────────────────────────────────────


def _outcome_line(outcome: dict[str, Any]) -> Text:
    name = str(outcome.get("field_name", ""))
    status = outcome.get("status")
    if status == "resolved":
        line = Text.assemble(
            ("  ✓ ", "proj.ok"),
            (name, "proj.field"),
            " → ",
            (str(outcome.get("resolved_value", "")), "proj.value"),
        )
        if outcome.get("result_id"):
            line.append(f" ({outcome['result_id']})", style="dim")
        return line

    line = Text.assemble(("  ✗ ", "proj.error"), (name, "proj.field"), ": ")
    if status == "field_not_found":
        line.append("field not found")
    elif status == "value_unresolved":
        line.append(f"value {outcome.get('raw_value', '')!r} not resolved")
        line.append(f" ({outcome.get('reason', '')})", style="dim")
    else:
        error = outcome.get("error") or {}
        line.append(f"update failed for {outcome.get('resolved_value', '')!r}")
        line.append(f" ({error.get('code', '?')}: {error.get('message', '')})", style="dim")
    return line


def _render_update_item(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    project = d.get("project", {})
    title = str(project.get("title", ""))
    _status_line(console, result, title)
    if verbose:
        _field(console, "item_id", d.get("item_id", ""))
        _field(console, "project_id", project.get("id", ""))

    for outcome in d.get("outcomes", []):
        console.print(_outcome_line(outcome))

    counts = d.get("counts", {})
    console.print()
    console.print(
        Text(
            f"Updated {counts.get('updated', 0)} of {counts.get('total', 0)} "
            f'fields on project "{title}"'
        )
    )
    if project.get("url"):
        console.print(Text(str(project["url"]), style="proj.link"))


# ── Schema renderer ───────────────────────────────────────────────────


def _render_list_fields(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    project = d.get("project", {})
    _status_line(console, result, str(project.get("title", "")))
    _field(console, "count", d.get("count", 0))
    fields: list[dict[str, Any]] = d.get("fields", [])
    if not fields:
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if verbose:
        table.add_column("ID", style="proj.id", no_wrap=True)
    table.add_column("Name", style="proj.field")
    table.add_column("Kind")
    table.add_column("Choices")

    for field in fields:
        kind = str(field.get("kind", ""))
        choices = [f"[{i}] {c}" for i, c in enumerate(field.get("choices", []))]
        if verbose and field.get("completed"):
            choices.extend(f"(done) {c}" for c in field["completed"])
        row = [
            Text(str(field.get("name", ""))),
            Text(kind, style=style_for_kind(kind)),
            Text(", ".join(choices)),
        ]
        if verbose:
            row.insert(0, Text(str(field.get("id", ""))))
        table.add_row(*row)
    console.print(table)
    if project.get("url"):
        console.print(Text(str(project["url"]), style="proj.link"))


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "update_item": _render_update_item,
    "list_fields": _render_list_fields,
}
