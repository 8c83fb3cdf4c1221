import io
import json
import os
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock

import sglotto.config as config_module
from sglotto import cli
from sglotto.types import LotteryType, Timeframe


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self._env = mock.patch.dict(os.environ, {"LOG_DIR": self._tmpdir.name})
        self._env.start()
        config_module.load_settings.cache_clear()
        cli.load_settings.cache_clear()

    def tearDown(self) -> None:
        self._env.stop()
        config_module.load_settings.cache_clear()
        cli.load_settings.cache_clear()
        self._tmpdir.cleanup()

    def test_parse_stats_defaults_to_thirty_days(self):
        args = cli.parse_args(["stats", "Toto"])

        self.assertEqual(args.lottery_type, "Toto")
        self.assertEqual(args.timeframe, "30days")

    @mock.patch("sglotto.actions.fetch_stats")
    def test_stats_prints_provider_result(self, mock_fetch):
        mock_fetch.return_value = {"hot": [{"number": "7", "count": 3}]}

        with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
            code = cli.main(["stats", "4D", "--timeframe", "1year"])

        self.assertEqual(code, 0)
        mock_fetch.assert_called_once_with(LotteryType.FOUR_D, Timeframe.ONE_YEAR)
        self.assertEqual(json.loads(out.getvalue()), {"hot": [{"number": "7", "count": 3}]})

    def test_clean_logs_uses_configured_directory(self):
        old = Path(self._tmpdir.name) / "debug.log.3"
        old.write_text("entry\n", encoding="utf-8")
        stamp = time.time() - 30 * 24 * 60 * 60
        os.utime(old, (stamp, stamp))

        code = cli.main(["clean-logs", "--retention-days", "7"])

        self.assertEqual(code, 0)
        self.assertFalse(old.exists())

    def test_zero_retention_days_is_not_treated_as_unset(self):
        recent = Path(self._tmpdir.name) / "debug.log.1"
        recent.write_text("entry\n", encoding="utf-8")
        stamp = time.time() - 60 * 60
        os.utime(recent, (stamp, stamp))

        code = cli.main(["clean-logs", "--retention-days", "0"])

        self.assertEqual(code, 0)
        self.assertFalse(recent.exists())

    def test_clean_logs_falls_back_to_configured_retention(self):
        recent = Path(self._tmpdir.name) / "debug.log.1"
        recent.write_text("entry\n", encoding="utf-8")
        stamp = time.time() - 60 * 60
        os.utime(recent, (stamp, stamp))

        code = cli.main(["clean-logs"])

        self.assertEqual(code, 0)
        self.assertTrue(recent.exists())


if __name__ == "__main__":
    unittest.main()
