import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from editinspect.model import Position, Range, TextEdit
from editinspect.translate import changed_line_count, merge_sort_edits, translate_line


def edit(start_line: int, start_col: int, end_line: int, end_col: int, text: str) -> TextEdit:
    return TextEdit(range=Range(Position(start_line, start_col), Position(end_line, end_col)), new_text=text)


class TestTranslateLine(unittest.TestCase):
    def test_no_edits_is_identity(self):
        for line in (0, 1, 10, 1000):
            self.assertEqual(translate_line(line, []), line)

    def test_missing_line_stays_missing(self):
        self.assertIsNone(translate_line(None, [edit(0, 0, 0, 0, "a\n")]))

    def test_insertion_before_line_shifts_down(self):
        self.assertEqual(translate_line(10, [edit(0, 0, 0, 0, "a\nb\n")]), 12)

    def test_deletion_before_line_shifts_up(self):
        self.assertEqual(translate_line(10, [edit(2, 0, 5, 0, "only\n")]), 8)

    def test_edit_starting_at_line_does_not_move_it(self):
        self.assertEqual(translate_line(2, [edit(2, 0, 5, 0, "only\n")]), 2)
        self.assertEqual(translate_line(10, [edit(10, 0, 10, 0, "a\nb\n")]), 10)

    def test_edit_after_line_is_ignored(self):
        edits = [edit(1, 0, 1, 0, "a\n"), edit(20, 0, 25, 0, "")]
        self.assertEqual(translate_line(10, edits), 11)

    def test_edit_spanning_line_is_counted(self):
        self.assertEqual(translate_line(3, [edit(2, 0, 5, 0, "only\n")]), 1)

    def test_edit_later_on_previous_line_is_counted(self):
        self.assertEqual(translate_line(4, [edit(3, 7, 3, 7, "\n\n")]), 6)

    def test_multiple_edits_accumulate(self):
        edits = [
            edit(0, 0, 0, 0, "header\n"),
            edit(3, 0, 4, 0, ""),
            edit(6, 2, 6, 5, "x\ny\nz"),
        ]
        self.assertEqual(translate_line(8, edits), 10)

    def test_changed_line_count(self):
        self.assertEqual(changed_line_count(edit(1, 0, 1, 4, "abc")), 0)
        self.assertEqual(changed_line_count(edit(1, 0, 3, 0, "abc\n")), -1)
        self.assertEqual(changed_line_count(edit(1, 0, 1, 0, "a\nb\nc\n")), 3)


class TestMergeSortEdits(unittest.TestCase):
    def test_sorts_by_start_and_keeps_ties_stable(self):
        first = edit(2, 0, 2, 0, "first")
        second = edit(2, 0, 2, 0, "second")
        earlier = edit(0, 5, 1, 0, "earlier")
        self.assertEqual(merge_sort_edits([first, earlier, second]), [earlier, first, second])


if __name__ == "__main__":
    unittest.main()
