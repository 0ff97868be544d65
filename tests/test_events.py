import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from editinspect.events import Disposable, EventEmitter, dispose_all


class TestEventEmitter(unittest.TestCase):
    def test_handlers_receive_arguments_until_disposed(self):
        emitter = EventEmitter()
        seen: list[int] = []
        handle = emitter.on("closed", seen.append)
        emitter.fire("closed", 1)
        handle.dispose()
        emitter.fire("closed", 2)
        self.assertEqual(seen, [1])
        self.assertTrue(handle.disposed)
        self.assertEqual(emitter.handler_count("closed"), 0)

    def test_handler_may_dispose_itself_while_firing(self):
        emitter = EventEmitter()
        seen: list[str] = []
        disposables: list[Disposable] = []

        def _once(value: str) -> None:
            seen.append(value)
            dispose_all(disposables)

        emitter.on("closed", _once, disposables)
        emitter.on("closed", lambda value: seen.append(value.upper()))
        emitter.fire("closed", "a")
        emitter.fire("closed", "b")
        self.assertEqual(seen, ["a", "A", "B"])

    def test_dispose_all_runs_each_callback_once(self):
        calls: list[str] = []
        disposables = [Disposable(lambda: calls.append("one")), Disposable(lambda: calls.append("two"))]
        dispose_all(disposables)
        dispose_all(disposables)
        self.assertEqual(sorted(calls), ["one", "two"])
        self.assertEqual(disposables, [])


if __name__ == "__main__":
    unittest.main()
