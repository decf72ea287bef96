"""Rich renderers for ServiceResult, one per ``op``.

:func:`render_result` draws on a buffered console from
:mod:`subjectgraph.output.console` and returns the text. Ops without a
dedicated renderer get the generic key/value listing. In verbose mode the
``meta`` block (telemetry span tree) is appended after any renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from subjectgraph.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from subjectgraph.services.result import ServiceResult

type _Renderer = Callable[[ServiceResult, Console], None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Styled text for *result*; plain when the real stdout is not a TTY."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """``--quiet`` text: vertex ids one per line, or the export document."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "postman":
        return "\n".join(str(v) for v in data.get("tour", []))
    if result.op == "export_subgraph":
        if "output" in data:
            return str(data["output"])
        return str(data.get("content", "")).rstrip("\n")
    for key in ("items", "steps"):
        if key in data:
            return "\n".join(str(item["id"]) for item in data[key])
    return f"OK: {result.op}"


# ── building blocks ──────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, dict | list):
        value = json.dumps(value, separators=(",", ":"))
    style = "sg.id" if key.endswith("_id") else ""
    console.print(Text.assemble((f"  {key}: ", "sg.key"), (str(value), style)))


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    label = Text.assemble((f"{duration:8.2f}ms", style), "  ", str(span.get("name", "?")))
    notes = span.get("annotations")
    if notes:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")")
    return label


def _add_spans(tree: Tree, span: dict[str, Any]) -> None:
    branch = tree.add(_span_label(span))
    for child in span.get("children", []):
        _add_spans(branch, child)


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    tree = Tree(Text("meta", style="dim"), guide_style="dim")
    for key, value in meta.items():
        if key == "telemetry":
            _add_spans(tree, value)
        else:
            tree.add(Text(f"{key}: {value}"))
    console.print()
    console.print(tree)


def _vertex_table(items: list[dict[str, Any]], *, position: bool = False) -> Table:
    table = Table(pad_edge=False)
    if position:
        table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="sg.id", no_wrap=True)
    table.add_column("Label", style="sg.label")
    table.add_column("Course", style="sg.course")
    for item in items:
        cells = [Text(str(item.get(k, ""))) for k in ("id", "label", "course")]
        if position:
            cells.insert(0, Text(str(item.get("position", ""))))
        table.add_row(*cells)
    return table


def _chain(steps: list[dict[str, Any]]) -> str:
    parts = []
    for step in steps:
        part = f"[sg.id]{escape(str(step.get('id', '?')))}[/sg.id]"
        if step.get("label"):
            part += f" ({escape(str(step['label']))})"
        parts.append(part)
    return " → ".join(parts)


# ── per-op renderers ─────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    console.print(
        Text.assemble(
            ("ERROR", "sg.error"),
            (f"  {result.op}", "sg.op"),
            " — ",
            err.message if err else "Unknown error",
        )
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            _field(console, f"  {key}", value)


def _render_vertex_set(result: ServiceResult, console: Console) -> None:
    """relatives, traverse, isolated."""
    d = result.data
    items = d.get("items", [])
    if items:
        console.print(_vertex_table(items))
    source = d.get("source_id")
    if source is not None:
        heading = d.get("relation") or d.get("mode")
        console.print(f"\n{heading} of [sg.id]{escape(str(source))}[/sg.id]")
    console.print(f"{d.get('count', len(items))} vertices")


def _render_search(result: ServiceResult, console: Console) -> None:
    d = result.data
    items = d.get("items", [])
    console.print(_vertex_table(items, position=True))
    line = f"\n{d.get('strategy', 'search')} from [sg.id]{escape(str(d.get('source_id')))}[/sg.id]"
    if "target_id" in d:
        outcome = "reached" if d.get("reached") else "not reached"
        line += f" to [sg.id]{escape(str(d['target_id']))}[/sg.id] ({outcome})"
    elif d.get("depth") is not None:
        line += f", depth {d['depth']}"
    console.print(line)
    console.print(f"{d.get('count', len(items))} visited")


def _render_path(result: ServiceResult, console: Console) -> None:
    steps = result.data.get("steps", [])
    if not steps:
        console.print("No path found.")
        return
    console.print(_chain(steps))
    console.print(f"\nPath length: {result.data.get('length', len(steps) - 1)}")


def _render_postman(result: ServiceResult, console: Console) -> None:
    d = result.data
    odd = [escape(str(v)) for v in d.get("odd_vertices", [])]
    console.print(f"[bold]{len(odd)} odd-degree vertices[/bold]: {', '.join(odd)}")
    for route in d.get("routes", []):
        path = route.get("path") or []
        chain = " → ".join(escape(str(v)) for v in path) if path else "unreachable"
        ends = [escape(str(route[k])) for k in ("source", "target")]
        console.print(f"  [sg.id]{ends[0]}[/sg.id] ⇄ [sg.id]{ends[1]}[/sg.id]: {chain}")
    tour = d.get("tour", [])
    console.print(f"\nTour ({len(tour)} vertices): " + ", ".join(map(str, tour)), markup=False)


def _render_export(result: ServiceResult, console: Console) -> None:
    """The document itself, or a one-line summary when it went to a file."""
    d = result.data
    if "output" in d:
        summary = f"Wrote {d.get('node_count')} nodes and {d.get('edge_count')} links to "
        console.print(summary + escape(str(d["output"])), soft_wrap=True)
        return
    console.print(d.get("content", ""), end="", markup=False, soft_wrap=True)


def _render_generic(result: ServiceResult, console: Console) -> None:
    console.print(Text.assemble(("OK", "sg.ok"), (f"  {result.op}", "sg.op")))
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, _Renderer] = {
    "relatives": _render_vertex_set,
    "traverse": _render_vertex_set,
    "isolated": _render_vertex_set,
    "search": _render_search,
    "path": _render_path,
    "postman": _render_postman,
    "export_subgraph": _render_export,
}
