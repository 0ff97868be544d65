from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import structlog
from rich.console import Console

from .config import InspectConfig, load_inspect_config
from .events import EventEmitter
from .model import EditState
from .navigation import NavigationController
from .paths import WorkspacePaths
from .render import RenderedDocument, render_edit_state
from .viewer_core import build_edit_state, load_json, resolve_input_path, validate_edit_state
from .viewer_render import print_rendered_document, render_anchors, render_warnings

logger = structlog.get_logger(__name__)


def configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def parse_view_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect a workspace edit as one navigable diff.")
    parser.add_argument("path", help="Path to the edit JSON (edit + changes/documents)")
    parser.add_argument("--cwd", type=Path, default=None, help="Directory paths are shown relative to (default: cwd)")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with style and key overrides")
    parser.add_argument(
        "--ui",
        choices=["textual", "print", "json"],
        default="textual",
        help="Output mode (default: textual).",
    )
    parser.add_argument("--line-numbers", action="store_true", help="Prefix rendered lines with their index (print mode)")
    parser.add_argument("--anchors", action="store_true", help="Show the anchor table after the rendering (print mode)")
    parser.add_argument("--goto", type=int, default=None, help="Resolve the target for a rendered line index and exit")
    parser.add_argument("--column", type=int, default=1, help="Column reported with --goto (default: 1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser.parse_args(argv)


def run_textual_view(
    state: EditState,
    rendered: RenderedDocument,
    paths: WorkspacePaths,
    config: InspectConfig,
) -> int:
    from .viewer_textual import SurfaceFactory

    app = SurfaceFactory().create(state, rendered, paths, config=config)
    target = app.run()
    if target is not None:
        print(target.format())
    return 0


def run_view(argv: list[str]) -> int:
    args = parse_view_args(argv)
    configure_logging(args.verbose)
    path = resolve_input_path(Path(args.path))
    console = Console()
    try:
        config = load_inspect_config(args.config)
        state = build_edit_state(load_json(path))
    except Exception as error:  # noqa: BLE001
        print(f"[error] {error}", file=sys.stderr)
        return 1

    warnings = validate_edit_state(state)
    for warning in warnings:
        logger.warning(warning)
    paths = WorkspacePaths(args.cwd or Path.cwd())
    rendered = render_edit_state(state, paths, config)

    if args.goto is not None:
        controller = NavigationController(state, rendered, paths, EventEmitter(), surface_id=0)
        try:
            target = controller.resolve(args.goto, column=args.column)
        finally:
            controller.dispose()
        if target is None:
            print(f"[error] No change at or before rendered line {args.goto}.", file=sys.stderr)
            return 2
        print(target.format())
        return 0

    if args.ui == "json":
        payload = {
            "warnings": warnings,
            "lines": rendered.plain_lines,
            "anchors": [asdict(anchor) for anchor in rendered.anchors],
            "renameMap": dict(rendered.rename_map),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    if args.ui == "print":
        render_warnings(console, warnings)
        print_rendered_document(console, rendered, line_numbers=args.line_numbers)
        if args.anchors:
            render_anchors(console, rendered)
        return 0

    return run_textual_view(state, rendered, paths, config)


def main() -> int:
    return run_view(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
