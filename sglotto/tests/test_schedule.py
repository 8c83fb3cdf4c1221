import datetime as dt
import json
import unittest

from sglotto.models import Schedule
from sglotto.services.schedule import (
    CASCADE_THRESHOLD,
    DEFAULT_SCHEDULES,
    ScheduleRepository,
    apply_draw,
    game_page_title,
    has_group_one_winner,
    is_draw_day,
    most_recent_draw_date,
    next_draw_date,
    streak_from,
)
from sglotto.types import LotteryType


def _schedule(lottery_type):
    values = next(row for row in DEFAULT_SCHEDULES if row["game_type"] == lottery_type.value)
    return Schedule(**values)


def _toto(draw_no, group_one_winners=0):
    return {
        "drawNo": draw_no,
        "winningShares": [
            {"group": "Group 1", "prizeAmount": 1000000, "count": group_one_winners},
            {"group": "Group 2", "prizeAmount": 80000, "count": 3},
        ],
    }


class CascadeStreakTests(unittest.TestCase):
    def test_group_one_winner_detection(self):
        self.assertTrue(has_group_one_winner(_toto(1, group_one_winners=2)))
        self.assertFalse(has_group_one_winner(_toto(1)))
        self.assertFalse(has_group_one_winner({"drawNo": 1}))

    def test_win_resets_streak(self):
        self.assertEqual(apply_draw(2, _toto(10, group_one_winners=1)), 0)
        self.assertEqual(apply_draw(2, _toto(10)), 3)

    def test_streak_from_draws_oldest_first(self):
        streak, last_draw_no = streak_from([_toto(1), _toto(2, 1), _toto(3), _toto(4)])

        self.assertEqual(streak, 2)
        self.assertEqual(last_draw_no, 4)

    def test_threshold_is_three_draws(self):
        streak, _ = streak_from([_toto(n) for n in range(1, CASCADE_THRESHOLD + 1)])
        self.assertGreaterEqual(streak, CASCADE_THRESHOLD)
        streak, _ = streak_from([_toto(n) for n in range(1, CASCADE_THRESHOLD)])
        self.assertLess(streak, CASCADE_THRESHOLD)

    def test_empty_history(self):
        self.assertEqual(streak_from([]), (0, None))


class FakeResultRepository:
    def __init__(self, payloads):
        self._payloads = payloads
        self.calls = []

    def recent_payloads(self, lottery_type, limit):
        self.calls.append((lottery_type, limit))
        return self._payloads[-limit:]


class RecordingScheduleRepository(ScheduleRepository):
    def __init__(self, result_repo, status=None):
        super().__init__(result_repo)
        self.status = status
        self.stored = []

    def get_cascade_status(self):
        return self.status

    def _store_status(self, consecutive_no_winner, last_draw_no):
        self.stored.append((consecutive_no_winner, last_draw_no))
        return (consecutive_no_winner, last_draw_no)


class CascadeRecalculationTests(unittest.TestCase):
    def test_recalculates_from_last_three_toto_draws(self):
        payloads = [json.dumps(_toto(1, 1)), json.dumps(_toto(2)), json.dumps(_toto(3)), json.dumps(_toto(4))]
        results = FakeResultRepository(payloads)
        repo = RecordingScheduleRepository(results)

        self.assertEqual(repo.recalculate_cascade_status(), (3, 4))
        self.assertEqual(results.calls, [(LotteryType.TOTO, CASCADE_THRESHOLD)])

    def test_undecodable_payloads_are_skipped(self):
        results = FakeResultRepository(["not json", json.dumps(_toto(7))])
        repo = RecordingScheduleRepository(results)

        self.assertEqual(repo.recalculate_cascade_status(), (1, 7))


class ScheduleDateTests(unittest.TestCase):
    def test_sweep_draws_only_on_first_wednesday(self):
        sweep = _schedule(LotteryType.SWEEP)

        self.assertTrue(is_draw_day(dt.date(2025, 1, 1), sweep))
        self.assertFalse(is_draw_day(dt.date(2025, 1, 8), sweep))
        self.assertFalse(is_draw_day(dt.date(2025, 1, 2), sweep))
        self.assertTrue(is_draw_day(dt.date(2025, 2, 5), sweep))

    def test_most_recent_and_next_toto_draw(self):
        toto = _schedule(LotteryType.TOTO)
        wednesday = dt.date(2025, 1, 8)

        self.assertEqual(most_recent_draw_date(toto, wednesday), dt.date(2025, 1, 6))
        self.assertEqual(next_draw_date(toto, wednesday), dt.date(2025, 1, 9))
        self.assertEqual(next_draw_date(toto, dt.date(2025, 1, 9)), dt.date(2025, 1, 9))

    def test_sweep_dates_cross_month_boundary(self):
        sweep = _schedule(LotteryType.SWEEP)

        self.assertEqual(most_recent_draw_date(sweep, dt.date(2025, 1, 31)), dt.date(2025, 1, 1))
        self.assertEqual(next_draw_date(sweep, dt.date(2025, 1, 2)), dt.date(2025, 2, 5))

    def test_game_page_title(self):
        toto = _schedule(LotteryType.TOTO)

        self.assertEqual(
            game_page_title(LotteryType.TOTO, toto, dt.date(2025, 1, 8)),
            "Toto Result Today - January 6, 2025 | Singapore Draw",
        )
        self.assertEqual(game_page_title(LotteryType.FOUR_D, None, dt.date(2025, 1, 8)), "4D Results")


if __name__ == "__main__":
    unittest.main()
