import os
import shutil
import tempfile
import unittest
from contextlib import ExitStack
from pathlib import Path
from unittest.mock import patch

from cluttercut.contracts import ConditionType, ExecuteRequest, Rule
from cluttercut.engine import execute

DESTRUCTIVE_CALLS = [
    "os.remove",
    "os.unlink",
    "os.rmdir",
    "os.removedirs",
    "shutil.rmtree",
    "shutil.move",
]

RULES = (
    Rule(ConditionType.EXTENSION, "pdf", "Documents"),
    Rule(ConditionType.NAME_CONTAINS, "photo", "Photos"),
    Rule(ConditionType.EXTENSION, "txt", "blocked"),
)


class TestNoDestructiveCalls(unittest.TestCase):
    """The engine must get by with mkdir, existence checks and rename only."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def run_instrumented(self, folder, rules=RULES, rename_side_effect=None, **kwargs):
        with ExitStack() as stack:
            mocks = {name: stack.enter_context(patch(name)) for name in DESTRUCTIVE_CALLS}
            if rename_side_effect is not None:
                stack.enter_context(patch("cluttercut.engine.os.rename", side_effect=rename_side_effect))
            result = execute(ExecuteRequest(str(folder), rules), **kwargs)

        for name, mock in mocks.items():
            with self.subTest(call=name):
                mock.assert_not_called()
        return result

    def populate(self):
        (self.test_dir / "Documents").mkdir()
        (self.test_dir / "Documents" / "a.pdf").touch()
        (self.test_dir / "blocked").touch()
        for name in ("a.pdf", "b.pdf", "photo_1.jpg", "notes.txt", "keep.md", ".hidden.pdf"):
            (self.test_dir / name).touch()
        (self.test_dir / "Archive").mkdir()

    def test_success_and_conflict_paths(self):
        self.populate()
        result = self.run_instrumented(self.test_dir)
        self.assertEqual(result.moved_count, 3)
        # "blocked" is a file, so notes.txt cannot get its folder
        self.assertEqual(result.failed_count, 1)

    def test_parallel_path(self):
        self.populate()
        result = self.run_instrumented(self.test_dir, max_workers=4)
        self.assertEqual(result.moved_count, 3)

    def test_failing_rename_path(self):
        self.populate()

        def always_fail(src, dst):
            raise OSError(18, "Invalid cross-device link", src)

        result = self.run_instrumented(self.test_dir, rename_side_effect=always_fail)
        self.assertEqual(result.moved_count, 0)
        self.assertEqual(result.failed_count, 4)
        self.assertTrue(all(p.exists() for p in (self.test_dir / "a.pdf", self.test_dir / "b.pdf")))

    def test_scan_failure_path(self):
        result = self.run_instrumented(self.test_dir / "missing")
        self.assertFalse(result.success)

    def test_source_vanishes_path(self):
        self.populate()
        real_rename = os.rename

        def vanish_then_rename(src, dst):
            if os.path.basename(src) == "b.pdf":
                raise FileNotFoundError(2, "No such file or directory", src)
            return real_rename(src, dst)

        result = self.run_instrumented(self.test_dir, rename_side_effect=vanish_then_rename)
        self.assertIn("b.pdf", [e.file_name for e in result.errors])


if __name__ == "__main__":
    unittest.main()
