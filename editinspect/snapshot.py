from __future__ import annotations

from collections.abc import Sequence

from .model import LinesChange, Position, TextEdit
from .translate import merge_sort_edits


def _offset_in_block(lines: Sequence[str], start_line: int, position: Position) -> int:
    line = min(max(position.line, start_line), start_line + len(lines) - 1)
    offset = sum(len(text) + 1 for text in lines[: line - start_line])
    if position.line > line:
        return offset + len(lines[line - start_line])
    return offset + min(position.character, len(lines[line - start_line]))


def lines_change_from_text(text: str, edits: Sequence[TextEdit]) -> LinesChange | None:
    """Changed block of ``text`` once ``edits`` are applied in memory.

    The block runs from the line of the first edit start to the line of the
    last edit end. Returns None when there are no edits.
    """
    if not edits:
        return None
    sorted_edits = merge_sort_edits(edits)
    document_lines = text.split("\n")
    last_line = len(document_lines) - 1
    start_line = min(sorted_edits[0].range.start.line, last_line)
    end_line = min(max(edit.range.end.line for edit in sorted_edits), last_line)
    old_lines = document_lines[start_line : end_line + 1]

    block = "\n".join(old_lines)
    for edit in reversed(sorted_edits):
        begin = _offset_in_block(old_lines, start_line, edit.range.start)
        end = _offset_in_block(old_lines, start_line, edit.range.end)
        block = block[:begin] + edit.new_text + block[end:]
    return LinesChange(old_lines=tuple(old_lines), new_lines=tuple(block.split("\n")), lnum=start_line + 1)
