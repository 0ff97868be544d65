#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from editinspect.viewer_cli import parse_view_args, run_view  # noqa: E402


def parse_args(argv: list[str]):
    return parse_view_args(argv)


def main() -> int:
    return run_view(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
