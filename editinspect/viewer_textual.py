from __future__ import annotations

import itertools
from collections.abc import Callable

import structlog
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Footer, Header, Static

from .config import InspectConfig
from .events import SURFACE_CLOSED, EventEmitter
from .model import EditState
from .navigation import NavigationController, NavigationTarget
from .paths import PathResolver
from .render import RenderedDocument

logger = structlog.get_logger(__name__)


class EditInspectApp(App[NavigationTarget | None]):
    """Read-only view of a rendered workspace edit.

    Navigating exits with the target unless ``on_navigate`` is given, in which
    case the view stays open. Dismissing exits with None.
    """

    CSS = """
    Screen { layout: vertical; }
    #topbar { height: 3; border: round #3a86ff; padding: 0 1; }
    #edits { height: 1fr; }
    """

    def __init__(
        self,
        state: EditState,
        rendered: RenderedDocument,
        paths: PathResolver,
        *,
        events_source: EventEmitter,
        surface_id: int,
        config: InspectConfig | None = None,
        on_navigate: Callable[[NavigationTarget], None] | None = None,
    ) -> None:
        super().__init__()
        self.rendered = rendered
        self.config = config or InspectConfig()
        self.surface_id = surface_id
        self.events_source = events_source
        self.on_navigate = on_navigate
        self.title = f"Workspace edit #{surface_id}"
        self.controller = NavigationController(state, rendered, paths, events_source, surface_id)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._hint_text(), id="topbar")
        yield DataTable(id="edits", cursor_type="row", show_header=False, zebra_stripes=False)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#edits", DataTable)
        table.add_column("edit", key="edit")
        for index, line in enumerate(self.rendered.lines):
            table.add_row(line, key=str(index))
        table.focus()

    def on_unmount(self) -> None:
        self.events_source.fire(SURFACE_CLOSED, self.surface_id)

    def _hint_text(self) -> str:
        navigate = "/".join(self.config.navigate_keys)
        dismiss = "/".join(self.config.dismiss_keys)
        return f"{navigate}: open file at change   {dismiss}: close   anchors: {len(self.rendered.anchors)}"

    def action_navigate(self) -> None:
        table = self.query_one("#edits", DataTable)
        self._navigate_to_row(table.cursor_coordinate.row)

    def action_dismiss(self) -> None:
        self.exit(None)

    def _navigate_to_row(self, row: int) -> None:
        if self.controller.disposed:
            return
        target = self.controller.resolve(row, column=1)
        if target is None:
            return
        if self.on_navigate is None:
            self.exit(target)
            return
        self.on_navigate(target)
        self.notify(f"Opened {target.format()}", timeout=1.5)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if "enter" not in self.config.navigate_keys:
            return
        self._navigate_to_row(event.cursor_row)

    def on_key(self, event: events.Key) -> None:
        # enter is consumed by the table and arrives as RowSelected
        if event.key in self.config.dismiss_keys:
            self.action_dismiss()
        elif event.key in self.config.navigate_keys and event.key != "enter":
            self.action_navigate()
        else:
            return
        event.prevent_default()
        event.stop()


class SurfaceFactory:
    """Creates edit views; owns the ids that tell their surfaces apart."""

    def __init__(self, events_source: EventEmitter | None = None) -> None:
        self.events_source = events_source or EventEmitter()
        self._ids = itertools.count()

    def create(
        self,
        state: EditState,
        rendered: RenderedDocument,
        paths: PathResolver,
        *,
        config: InspectConfig | None = None,
        on_navigate: Callable[[NavigationTarget], None] | None = None,
    ) -> EditInspectApp:
        surface_id = next(self._ids)
        logger.debug("Creating edit surface", surface_id=surface_id, lines=len(rendered.lines))
        return EditInspectApp(
            state,
            rendered,
            paths,
            events_source=self.events_source,
            surface_id=surface_id,
            config=config,
            on_navigate=on_navigate,
        )
