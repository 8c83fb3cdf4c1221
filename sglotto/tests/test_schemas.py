import datetime as dt
import unittest

from pydantic import ValidationError

from sglotto.schemas import ResultSaveRequest, normalize_payload
from sglotto.types import LotteryType


class ResultSaveRequestTests(unittest.TestCase):
    def _toto(self, **overrides):
        payload = {
            "drawNo": 4050,
            "drawDate": "2025-01-06T00:00:00.000Z",
            "winning": [3, 11, 19, 27, 35, 43],
            "additional": 8,
            "winningShares": [{"group": "Group 1", "prizeAmount": 1250000, "count": 1}],
        }
        payload.update(overrides)
        return payload

    def test_toto_payload_keeps_camel_case_keys(self):
        request = ResultSaveRequest(type="Toto", draw_date="2025-01-06", draw_number=4050, data=self._toto())

        self.assertIs(request.type, LotteryType.TOTO)
        self.assertEqual(request.draw_date, dt.date(2025, 1, 6))
        self.assertEqual(request.draw_number, "4050")
        self.assertEqual(request.data["winningShares"][0]["prizeAmount"], 1250000)
        self.assertIn("drawNo", request.data)

    def test_toto_rejects_duplicate_numbers(self):
        with self.assertRaises(ValidationError):
            ResultSaveRequest(
                type="Toto",
                draw_date="2025-01-06",
                draw_number="4050",
                data=self._toto(winning=[1, 1, 2, 3, 4, 5]),
            )

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(ValidationError):
            ResultSaveRequest(type="Keno", draw_date="2025-01-06", draw_number="1", data={})

    def test_sweep_defaults_missing_prize_lists(self):
        data = normalize_payload(LotteryType.SWEEP, {"drawNo": 1, "drawDate": "2025-01-01", "winning": [1234567]})

        self.assertEqual(data["twoD"], [])
        self.assertEqual(data["winning"], [1234567])


if __name__ == "__main__":
    unittest.main()
