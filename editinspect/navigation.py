from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from .events import SURFACE_CLOSED, Disposable, EventEmitter, dispose_all
from .model import EditState, TextDocumentEdit
from .paths import PathResolver
from .render import Anchor, RenderedDocument
from .translate import merge_sort_edits, translate_line

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NavigationTarget:
    filepath: str
    line: int | None
    column: int

    def format(self) -> str:
        if self.line is None:
            return self.filepath
        return f"{self.filepath}:{self.line}:{self.column}"


def find_anchor(anchors: Sequence[Anchor], render_line: int) -> Anchor | None:
    for anchor in reversed(anchors):
        if render_line >= anchor.index:
            return anchor
    return None


def get_original_line(anchor: Anchor, change: TextDocumentEdit | None) -> int | None:
    """One-based line in the edited file for an anchor's pre-edit line."""
    if anchor.lnum is None:
        return None
    lnum = anchor.lnum
    if change is not None:
        line = translate_line(lnum - 1, merge_sort_edits(change.edits))
        lnum = line + 1
    return lnum


class NavigationController:
    """Maps cursor positions in a rendered edit back to files.

    The controller lives as long as its display surface: it listens for the
    surface being closed and releases its subscriptions then, or when
    ``dispose`` is called directly.
    """

    def __init__(
        self,
        state: EditState,
        rendered: RenderedDocument,
        paths: PathResolver,
        events: EventEmitter,
        surface_id: int,
    ) -> None:
        self.state = state
        self.rendered = rendered
        self.paths = paths
        self.surface_id = surface_id
        self.disposables: list[Disposable] = []
        self._disposed = False
        self._changes_by_path: dict[str, TextDocumentEdit] = {}
        for change in state.edit.document_changes:
            if isinstance(change, TextDocumentEdit):
                self._changes_by_path.setdefault(paths.relpath(change.uri), change)
        events.on(SURFACE_CLOSED, self._on_surface_closed, self.disposables)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _on_surface_closed(self, surface_id: int) -> None:
        if surface_id == self.surface_id:
            self.dispose()

    def change_for(self, filepath: str) -> TextDocumentEdit | None:
        return self._changes_by_path.get(filepath)

    def resolve(self, render_line: int, column: int = 1) -> NavigationTarget | None:
        anchor = find_anchor(self.rendered.anchors, render_line)
        if anchor is None:
            logger.debug("No anchor before render line", render_line=render_line)
            return None
        filepath = self.rendered.rename_map.get(anchor.filepath, anchor.filepath)
        line = get_original_line(anchor, self.change_for(anchor.filepath))
        target = NavigationTarget(filepath=self.paths.abspath(filepath), line=line, column=column)
        logger.debug("Resolved navigation target", render_line=render_line, target=target.format())
        return target

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        dispose_all(self.disposables)
        logger.debug("Navigation controller disposed", surface_id=self.surface_id)
