from __future__ import annotations

from enum import IntEnum

from diff_match_patch import diff_match_patch


class DiffOp(IntEnum):
    DELETE = -1
    EQUAL = 0
    INSERT = 1


_dmp_engine = diff_match_patch()
# no deadline: the same inputs always give the same diff
_dmp_engine.Diff_Timeout = 0


def diff_text(old: str, new: str) -> list[tuple[DiffOp, str]]:
    """Character diff of ``old`` and ``new`` as ordered ``(op, text)`` spans.

    Spans may contain line breaks. Joining the non-DELETE spans gives ``new``,
    joining the non-INSERT spans gives ``old``.
    """
    diffs = _dmp_engine.diff_main(old, new, False)
    return [(DiffOp(op), text) for op, text in diffs if text]


def old_text(diffs: list[tuple[DiffOp, str]]) -> str:
    return "".join(text for op, text in diffs if op != DiffOp.INSERT)


def new_text(diffs: list[tuple[DiffOp, str]]) -> str:
    return "".join(text for op, text in diffs if op != DiffOp.DELETE)
