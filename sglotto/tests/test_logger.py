import os
import tempfile
import time
import unittest
from pathlib import Path

from sglotto.logger import clean_old_logs

DAY = 24 * 60 * 60


class CleanOldLogsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.log_dir = Path(self._tmpdir.name)

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _touch(self, name: str, age_days: float) -> Path:
        path = self.log_dir / name
        path.write_text("entry\n", encoding="utf-8")
        stamp = time.time() - age_days * DAY
        os.utime(path, (stamp, stamp))
        return path

    def test_removes_only_expired_rotated_files(self):
        live = self._touch("debug.log", 30)
        expired = self._touch("debug.log.1", 20)
        recent = self._touch("debug.log.2", 3)
        unrelated = self._touch("other.log", 40)

        removed = clean_old_logs(str(self.log_dir), retention_days=14)

        self.assertEqual(removed, ["debug.log.1"])
        self.assertTrue(live.exists())
        self.assertFalse(expired.exists())
        self.assertTrue(recent.exists())
        self.assertTrue(unrelated.exists())

    def test_missing_directory_is_ignored(self):
        self.assertEqual(clean_old_logs(str(self.log_dir / "missing")), [])


if __name__ == "__main__":
    unittest.main()
