import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from editinspect.line_diff import DiffOp, diff_text, new_text, old_text


class TestDiffText(unittest.TestCase):
    def test_round_trip_reconstructs_both_sides(self):
        cases = [
            ("x\ny\nz", "x\nY\nY2\nz"),
            ("", "added\nlines"),
            ("removed\nlines", ""),
            ("def f():\n    return 1\n", "def f(x):\n    return x + 1\n"),
            ("same", "same"),
        ]
        for old, new in cases:
            with self.subTest(old=old, new=new):
                diffs = diff_text(old, new)
                self.assertEqual(new_text(diffs), new)
                self.assertEqual(old_text(diffs), old)

    def test_spans_may_carry_line_breaks(self):
        diffs = diff_text("x\ny\nz", "x\nY\nY2\nz")
        self.assertEqual(
            diffs,
            [
                (DiffOp.EQUAL, "x\n"),
                (DiffOp.DELETE, "y"),
                (DiffOp.INSERT, "Y\nY2"),
                (DiffOp.EQUAL, "\nz"),
            ],
        )

    def test_identical_inputs_give_single_equal_span(self):
        self.assertEqual(diff_text("a\nb", "a\nb"), [(DiffOp.EQUAL, "a\nb")])
        self.assertEqual(diff_text("", ""), [])

    def test_is_deterministic(self):
        old = "\n".join(f"line {index}" for index in range(200))
        new = "\n".join(f"line {index * 3}" for index in range(200))
        self.assertEqual(diff_text(old, new), diff_text(old, new))


if __name__ == "__main__":
    unittest.main()
