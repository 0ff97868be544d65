from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .render import RenderedDocument


def print_rendered_document(console: Console, rendered: RenderedDocument, *, line_numbers: bool = False) -> None:
    width = len(str(len(rendered.lines)))
    for index, line in enumerate(rendered.lines):
        if line_numbers:
            console.print(Text(f"{index:>{width}} ", style="dim").append_text(line))
        else:
            console.print(line)


def render_anchors(console: Console, rendered: RenderedDocument) -> None:
    table = Table(title=f"Anchors ({len(rendered.anchors)})", header_style="bold magenta")
    table.add_column("line", justify="right")
    table.add_column("file", style="cyan")
    table.add_column("original", justify="right")
    table.add_column("renamed to")
    for anchor in rendered.anchors:
        table.add_row(
            str(anchor.index),
            Text(anchor.filepath),
            "-" if anchor.lnum is None else str(anchor.lnum),
            Text(rendered.rename_map.get(anchor.filepath, "")),
        )
    console.print(table)


def render_warnings(console: Console, warnings: list[str]) -> None:
    if not warnings:
        return
    body = Text("\n".join(f"- {warning}" for warning in warnings))
    console.print(Panel(body, title=f"Warnings ({len(warnings)})", border_style="yellow"))
