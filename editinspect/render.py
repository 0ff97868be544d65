from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog
from rich.text import Text

from .config import InspectConfig
from .grouping import group_by_annotation
from .line_diff import DiffOp, diff_text
from .model import CreateFile, DeleteFile, EditState, LinesChange, RenameFile, TextDocumentEdit
from .paths import PathResolver

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Anchor:
    index: int
    filepath: str
    lnum: int | None = None


@dataclass(frozen=True)
class RenderedDocument:
    lines: tuple[Text, ...]
    anchors: tuple[Anchor, ...]
    rename_map: Mapping[str, str]

    @property
    def plain_lines(self) -> list[str]:
        return [line.plain for line in self.lines]


class RenderBuilder:
    """Accumulates styled lines and navigation anchors for one render pass.

    Text is always appended to the last line; ``new_line`` starts a fresh one.
    Style arguments are highlight group names looked up in the config.
    """

    def __init__(self, config: InspectConfig | None = None) -> None:
        self.config = config or InspectConfig()
        self._lines: list[Text] = []
        self._anchors: list[Anchor] = []
        self._rename_map: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def _style(self, group: str | None) -> str | None:
        if not group:
            return None
        return self.config.style(group) or None

    def new_line(self) -> None:
        self._lines.append(Text())

    def add_line(self, text: str, group: str | None = None) -> None:
        for part in text.split("\n"):
            self._lines.append(Text().append(part, style=self._style(group)))

    def add_text(self, text: str, group: str | None = None) -> None:
        if not text:
            return
        if "\n" in text:
            first, *rest = text.split("\n")
            self.add_text(first, group)
            for part in rest:
                self.add_line(part, group)
            return
        if not self._lines:
            self.new_line()
        self._lines[-1].append(text, style=self._style(group))

    def add_texts(self, segments: Iterable[tuple[str, str | None]]) -> None:
        self.new_line()
        for text, group in segments:
            self.add_text(text, group)

    def add_anchor(self, filepath: str, lnum: int | None = None) -> Anchor:
        index = len(self._lines) - 1
        if index < 0 or (self._anchors and self._anchors[-1].index >= index):
            raise RuntimeError(f"Anchor must be placed on a new line (index={index})")
        anchor = Anchor(index=index, filepath=filepath, lnum=lnum)
        self._anchors.append(anchor)
        return anchor

    def add_rename(self, old_path: str, new_path: str) -> None:
        self._rename_map[old_path] = new_path

    def finish(self) -> RenderedDocument:
        return RenderedDocument(
            lines=tuple(line.copy() for line in self._lines),
            anchors=tuple(self._anchors),
            rename_map=MappingProxyType(dict(self._rename_map)),
        )


def add_change_header(builder: RenderBuilder, fs_path: str, lnum: int | None) -> None:
    segments: list[tuple[str, str | None]] = [("Change", "title"), (" ", None), (fs_path, "directory")]
    if lnum is not None:
        segments.append((f":{lnum}", "line_nr"))
    builder.add_texts(segments)
    builder.add_anchor(fs_path, lnum)


def add_changed_lines(builder: RenderBuilder, lines_change: LinesChange, fs_path: str) -> None:
    """Render the diff of one changed block.

    ``lnum`` follows the old document: deleted and unchanged text advance it,
    inserted text does not. Unchanged runs spanning line breaks are collapsed
    and a new header marks where the next change starts.
    """
    lnum = lines_change.lnum
    diffs = diff_text("\n".join(lines_change.old_lines), "\n".join(lines_change.new_lines))
    for op, text in diffs:
        if op == DiffOp.EQUAL:
            if "\n" not in text:
                builder.add_text(text)
            else:
                parts = text.split("\n")
                builder.add_text(parts[0])
                builder.new_line()
                add_change_header(builder, fs_path, lnum + len(parts) - 1)
                builder.new_line()
                builder.add_text(parts[-1])
            lnum += text.count("\n")
        elif op == DiffOp.DELETE:
            lnum += text.count("\n")
            builder.add_text(text, "removed")
        else:
            builder.add_text(text, "added")


def render_edit_state(
    state: EditState,
    paths: PathResolver,
    config: InspectConfig | None = None,
) -> RenderedDocument:
    builder = RenderBuilder(config)
    edit = state.edit
    groups = group_by_annotation(edit.document_changes, edit.change_annotations)
    for label, changes in groups.items():
        if label:
            builder.add_line(label, "label")
            builder.add_line("")
        for change in changes:
            if isinstance(change, TextDocumentEdit):
                fs_path = paths.relpath(change.uri)
                lines_change = state.changes.get(change.uri)
                if lines_change is None:
                    logger.warning("No lines change for text document edit", uri=change.uri)
                    add_change_header(builder, fs_path, None)
                else:
                    add_change_header(builder, fs_path, lines_change.lnum)
                    builder.new_line()
                    add_changed_lines(builder, lines_change, fs_path)
                builder.new_line()
            elif isinstance(change, (CreateFile, DeleteFile)):
                title = "Delete" if isinstance(change, DeleteFile) else "Create"
                fs_path = paths.relpath(change.uri)
                builder.add_texts([(title, "title"), (" ", None), (fs_path, "directory")])
                builder.add_anchor(fs_path)
                builder.new_line()
            elif isinstance(change, RenameFile):
                old_path = paths.relpath(change.old_uri)
                new_path = paths.relpath(change.new_uri)
                builder.add_texts(
                    [
                        ("Rename", "title"),
                        (" ", None),
                        (old_path, "directory"),
                        (" -> ", "comment"),
                        (new_path, "directory"),
                    ]
                )
                builder.add_rename(old_path, new_path)
                builder.add_anchor(new_path)
                builder.new_line()
    rendered = builder.finish()
    logger.debug(
        "Rendered workspace edit",
        groups=len(groups),
        lines=len(rendered.lines),
        anchors=len(rendered.anchors),
    )
    return rendered
