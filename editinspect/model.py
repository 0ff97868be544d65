from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True)
class TextEdit:
    range: Range
    new_text: str
    annotation_id: str | None = None


@dataclass(frozen=True)
class ChangeAnnotation:
    label: str
    needs_confirmation: bool = False
    description: str = ""


@dataclass(frozen=True)
class TextDocumentEdit:
    uri: str
    edits: tuple[TextEdit, ...]
    version: int | None = None
    annotation_id: str | None = None


@dataclass(frozen=True)
class CreateFile:
    uri: str
    options: dict[str, Any] = field(default_factory=dict)
    annotation_id: str | None = None


@dataclass(frozen=True)
class DeleteFile:
    uri: str
    options: dict[str, Any] = field(default_factory=dict)
    annotation_id: str | None = None


@dataclass(frozen=True)
class RenameFile:
    old_uri: str
    new_uri: str
    options: dict[str, Any] = field(default_factory=dict)
    annotation_id: str | None = None


DocumentChange = Union[TextDocumentEdit, CreateFile, DeleteFile, RenameFile]


@dataclass(frozen=True)
class WorkspaceEdit:
    document_changes: tuple[DocumentChange, ...] = ()
    change_annotations: dict[str, ChangeAnnotation] = field(default_factory=dict)


@dataclass(frozen=True)
class LinesChange:
    """Changed block of one document.

    ``lnum`` is the one-based line where the block starts in the unedited file.
    """

    old_lines: tuple[str, ...]
    new_lines: tuple[str, ...]
    lnum: int


@dataclass(frozen=True)
class EditState:
    edit: WorkspaceEdit
    changes: dict[str, LinesChange] = field(default_factory=dict)


def get_annotation_key(change: DocumentChange) -> str | None:
    if isinstance(change, TextDocumentEdit):
        if change.edits and change.edits[0].annotation_id:
            return change.edits[0].annotation_id
    return change.annotation_id


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def parse_position(data: Any) -> Position:
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid position: {data!r}")
    try:
        return Position(line=int(data["line"]), character=int(data["character"]))
    except (KeyError, TypeError, ValueError) as error:
        raise RuntimeError(f"Invalid position: {data!r}") from error


def parse_range(data: Any) -> Range:
    if not isinstance(data, dict) or "start" not in data or "end" not in data:
        raise RuntimeError(f"Invalid range: {data!r}")
    return Range(start=parse_position(data["start"]), end=parse_position(data["end"]))


def parse_text_edit(data: Any) -> TextEdit:
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid text edit: {data!r}")
    return TextEdit(
        range=parse_range(data.get("range")),
        new_text=str(data.get("newText", "")),
        annotation_id=_optional_str(data.get("annotationId")),
    )


def parse_document_change(data: Any) -> DocumentChange:
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid document change: {data!r}")
    kind = data.get("kind")
    if kind not in (None, "create", "delete", "rename"):
        raise RuntimeError(f"Unsupported document change kind: {kind}")
    annotation_id = _optional_str(data.get("annotationId"))
    options = data.get("options") if isinstance(data.get("options"), dict) else {}
    try:
        if kind is None:
            document = data["textDocument"]
            version = document.get("version")
            return TextDocumentEdit(
                uri=str(document["uri"]),
                edits=tuple(parse_text_edit(item) for item in list_field(data, "edits")),
                version=None if version is None else int(version),
                annotation_id=annotation_id,
            )
        if kind == "create":
            return CreateFile(uri=str(data["uri"]), options=options, annotation_id=annotation_id)
        if kind == "delete":
            return DeleteFile(uri=str(data["uri"]), options=options, annotation_id=annotation_id)
        return RenameFile(
            old_uri=str(data["oldUri"]),
            new_uri=str(data["newUri"]),
            options=options,
            annotation_id=annotation_id,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as error:
        raise RuntimeError(f"Invalid document change: {data!r}") from error


def object_field(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise RuntimeError(f"{key} must be a JSON object")
    return value


def list_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise RuntimeError(f"{key} must be a JSON array: {value!r}")
    return value


def parse_workspace_edit(data: Any) -> WorkspaceEdit:
    if not isinstance(data, dict):
        raise RuntimeError("Workspace edit must be a JSON object")
    annotations: dict[str, ChangeAnnotation] = {}
    for annotation_id, value in object_field(data, "changeAnnotations").items():
        if not isinstance(value, dict):
            continue
        annotations[str(annotation_id)] = ChangeAnnotation(
            label=str(value.get("label", "")),
            needs_confirmation=bool(value.get("needsConfirmation", False)),
            description=str(value.get("description", "")),
        )

    raw_changes = data.get("documentChanges")
    if raw_changes is None:
        # plain `changes` map: uri -> TextEdit[]
        changes: list[DocumentChange] = []
        for uri, edits in object_field(data, "changes").items():
            if not isinstance(edits, list):
                raise RuntimeError(f"Text edits for {uri} must be a JSON array")
            changes.append(TextDocumentEdit(uri=str(uri), edits=tuple(parse_text_edit(item) for item in edits)))
    else:
        if isinstance(raw_changes, dict):
            raw_changes = [raw_changes]
        if not isinstance(raw_changes, list):
            raise RuntimeError(f"documentChanges must be a JSON array: {raw_changes!r}")
        changes = [parse_document_change(item) for item in raw_changes]
    return WorkspaceEdit(document_changes=tuple(changes), change_annotations=annotations)


def parse_lines_change(data: Any) -> LinesChange:
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid lines change: {data!r}")
    try:
        lnum = int(data["lnum"])
    except (KeyError, TypeError, ValueError) as error:
        raise RuntimeError(f"Lines change must have an integer lnum: {data!r}") from error
    return LinesChange(
        old_lines=tuple(str(line) for line in list_field(data, "oldLines")),
        new_lines=tuple(str(line) for line in list_field(data, "newLines")),
        lnum=lnum,
    )
