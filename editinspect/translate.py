from __future__ import annotations

from collections.abc import Sequence

from .model import Position, TextEdit


def merge_sort_edits(edits: Sequence[TextEdit]) -> list[TextEdit]:
    """Stable sort of edits by start position.

    Edits starting at the same position keep their input order, which is the
    order they must be applied in.
    """
    return sorted(edits, key=lambda edit: edit.range.start)


def changed_line_count(edit: TextEdit) -> int:
    return edit.new_text.count("\n") - (edit.range.end.line - edit.range.start.line)


def translate_line(line: int | None, edits: Sequence[TextEdit]) -> int | None:
    """Line number of ``line`` once ``edits`` have been applied.

    ``edits`` must be sorted by start and must not overlap; the result is
    undefined otherwise. An edit starting at or after the beginning of
    ``line`` does not move it, an edit spanning it does.
    """
    if line is None:
        return None
    position = Position(line, 0)
    delta = 0
    for edit in edits:
        if edit.range.start >= position:
            break
        delta += changed_line_count(edit)
    return line + delta
