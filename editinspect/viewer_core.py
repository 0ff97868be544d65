from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from .model import (
    EditState,
    LinesChange,
    TextDocumentEdit,
    object_field,
    get_annotation_key,
    parse_lines_change,
    parse_workspace_edit,
)
from .snapshot import lines_change_from_text

logger = structlog.get_logger(__name__)


def resolve_input_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def load_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise RuntimeError(f"File not found: {path}") from error
    except json.JSONDecodeError as error:
        raise RuntimeError(f"Invalid JSON: {error}") from error
    if not isinstance(data, dict):
        raise RuntimeError("Edit document must be a JSON object")
    return data


def build_edit_state(doc: dict[str, Any]) -> EditState:
    if "edit" not in doc:
        raise RuntimeError("Missing required key: edit")
    edit = parse_workspace_edit(doc["edit"])

    changes: dict[str, LinesChange] = {}
    documents = object_field(doc, "documents")
    for change in edit.document_changes:
        if not isinstance(change, TextDocumentEdit) or change.uri in changes:
            continue
        text = documents.get(change.uri)
        if text is None:
            continue
        lines_change = lines_change_from_text(str(text), change.edits)
        if lines_change is not None:
            changes[change.uri] = lines_change
    for uri, value in object_field(doc, "changes").items():
        changes[str(uri)] = parse_lines_change(value)

    logger.debug("Loaded edit state", changes=len(edit.document_changes), snapshots=len(changes))
    return EditState(edit=edit, changes=changes)


def validate_edit_state(state: EditState) -> list[str]:
    warnings: list[str] = []
    annotations = state.edit.change_annotations
    for change in state.edit.document_changes:
        key = get_annotation_key(change)
        if key and key not in annotations:
            warnings.append(f"Unknown annotation id: {key}")
        if isinstance(change, TextDocumentEdit):
            if change.uri not in state.changes:
                warnings.append(f"No lines change for text edit: {change.uri}")
            starts = [edit.range.start for edit in change.edits]
            if starts != sorted(starts):
                warnings.append(f"Text edits are not sorted by start: {change.uri}")
    for uri in state.changes:
        if not any(isinstance(change, TextDocumentEdit) and change.uri == uri for change in state.edit.document_changes):
            warnings.append(f"Lines change without text edit: {uri}")
    return warnings
