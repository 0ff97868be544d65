from __future__ import annotations

from collections.abc import Iterable, Mapping

from .model import ChangeAnnotation, DocumentChange, get_annotation_key


def annotation_label(change: DocumentChange, annotations: Mapping[str, ChangeAnnotation]) -> str | None:
    key = get_annotation_key(change)
    if not key:
        return None
    annotation = annotations.get(key)
    if annotation is None or not annotation.label:
        return None
    return annotation.label


def group_by_annotation(
    changes: Iterable[DocumentChange],
    annotations: Mapping[str, ChangeAnnotation],
) -> dict[str | None, list[DocumentChange]]:
    groups: dict[str | None, list[DocumentChange]] = {}
    for change in changes:
        groups.setdefault(annotation_label(change, annotations), []).append(change)
    return groups
