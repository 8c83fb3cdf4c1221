"""Draw schedules and the Toto cascade draw tracker.

A Toto draw becomes a cascade draw, held later in the evening, once three
draws in a row have gone without a Group 1 winner. A Group 1 win resets the
streak.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..db import detach, read_session, session_scope
from ..models import Schedule, TotoCascadeStatus
from ..types import LotteryType
from .results import ResultRepository

logger = logging.getLogger("sglotto.schedule")

SGT = dt.timezone(dt.timedelta(hours=8), name="SGT")

CASCADE_THRESHOLD = 3
DEFAULT_TOTO_DRAW_TIME = "18:30"
FIRST_WEDNESDAY = "first_wednesday_of_month"
SEARCH_WINDOW_DAYS = 31

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

DEFAULT_SCHEDULES: List[Dict[str, Optional[str]]] = [
    {
        "game_type": LotteryType.FOUR_D.value,
        "draw_days": "Wednesday,Saturday,Sunday",
        "draw_time": "18:30",
        "cascade_draw_time": None,
        "sales_close_time": "18:00",
        "special_rule": None,
        "description": "4D draws every Wednesday, Saturday and Sunday.",
    },
    {
        "game_type": LotteryType.TOTO.value,
        "draw_days": "Monday,Thursday",
        "draw_time": "18:30",
        "cascade_draw_time": "21:30",
        "sales_close_time": "18:00",
        "special_rule": None,
        "description": "Toto draws every Monday and Thursday; cascade draws at 9:30pm.",
    },
    {
        "game_type": LotteryType.SWEEP.value,
        "draw_days": "Wednesday",
        "draw_time": "18:30",
        "cascade_draw_time": None,
        "sales_close_time": "18:00",
        "special_rule": FIRST_WEDNESDAY,
        "description": "Singapore Sweep draws on the first Wednesday of each month.",
    },
]


def has_group_one_winner(payload: Mapping[str, Any]) -> bool:
    shares = payload.get("winningShares") or []
    for share in shares:
        if isinstance(share, Mapping) and "Group 1" in str(share.get("group", "")):
            return (share.get("count") or 0) > 0
    return False


def apply_draw(consecutive_no_winner: int, payload: Mapping[str, Any]) -> int:
    """Streak length after one more draw."""
    if has_group_one_winner(payload):
        return 0
    return consecutive_no_winner + 1


def streak_from(payloads: Iterable[Mapping[str, Any]]) -> Tuple[int, Optional[int]]:
    """Fold draws (oldest first) into ``(consecutive_no_winner, last_draw_no)``."""
    streak = 0
    last_draw_no = None
    for payload in payloads:
        streak = apply_draw(streak, payload)
        last_draw_no = payload.get("drawNo")
    return streak, last_draw_no


def is_first_weekday_of_month(day: dt.date) -> bool:
    return day.day <= 7


def is_draw_day(day: dt.date, schedule: Schedule) -> bool:
    weekdays = {WEEKDAYS[name] for name in schedule.draw_day_names() if name in WEEKDAYS}
    if day.weekday() not in weekdays:
        return False
    if schedule.special_rule == FIRST_WEDNESDAY:
        return is_first_weekday_of_month(day)
    return True


def most_recent_draw_date(schedule: Schedule, today: dt.date) -> dt.date:
    """Latest draw day on or before ``today``; ``today`` when none is found within a month."""
    for offset in range(SEARCH_WINDOW_DAYS):
        candidate = today - dt.timedelta(days=offset)
        if is_draw_day(candidate, schedule):
            return candidate
    return today


def next_draw_date(schedule: Schedule, today: dt.date) -> dt.date:
    for offset in range(SEARCH_WINDOW_DAYS):
        candidate = today + dt.timedelta(days=offset)
        if is_draw_day(candidate, schedule):
            return candidate
    return today


def game_page_title(lottery_type: LotteryType, schedule: Optional[Schedule], today: dt.date) -> str:
    if schedule is None:
        return f"{lottery_type.value} Results"
    recent = most_recent_draw_date(schedule, today)
    name = "Singapore Sweep" if lottery_type is LotteryType.SWEEP else lottery_type.value
    return f"{name} Result Today - {recent:%B} {recent.day}, {recent.year} | Singapore Draw"


def _decode(raw: Any) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    except ValueError:
        logger.warning("Skipping Toto result with undecodable payload")
        return None
    return data if isinstance(data, dict) else None


class ScheduleRepository:
    def __init__(self, result_repo: Optional[ResultRepository] = None) -> None:
        self._results = result_repo or ResultRepository()

    def ensure_defaults(self) -> int:
        """Seed missing schedule rows; existing rows are left as configured."""
        created = 0
        with session_scope() as session:
            existing = {row.game_type for row in session.query(Schedule).all()}
            for values in DEFAULT_SCHEDULES:
                if values["game_type"] in existing:
                    continue
                session.add(Schedule(**values))
                created += 1
        if created:
            logger.info("Seeded %d default draw schedule(s)", created)
        return created

    def list_schedules(self) -> List[Schedule]:
        with read_session() as session:
            return session.query(Schedule).order_by(Schedule.id).all()

    def get_schedule(self, lottery_type: LotteryType) -> Optional[Schedule]:
        with read_session() as session:
            return session.query(Schedule).filter(Schedule.game_type == lottery_type.value).one_or_none()

    def get_cascade_status(self) -> Optional[TotoCascadeStatus]:
        with read_session() as session:
            return session.get(TotoCascadeStatus, 1)

    def _store_status(self, consecutive_no_winner: int, last_draw_no: Optional[int]) -> TotoCascadeStatus:
        with session_scope() as session:
            status = session.get(TotoCascadeStatus, 1)
            if status is None:
                status = TotoCascadeStatus(id=1)
                session.add(status)
            status.consecutive_no_winner = consecutive_no_winner
            status.is_cascade_draw = consecutive_no_winner >= CASCADE_THRESHOLD
            status.last_checked_draw_no = last_draw_no
            status.updated_at = dt.datetime.utcnow()
            return detach(session, status)

    def update_cascade_status(self, latest: Mapping[str, Any]) -> TotoCascadeStatus:
        """Advance the streak by one Toto draw; a draw already counted is not counted again."""
        current = self.get_cascade_status()
        draw_no = latest.get("drawNo")
        if current is not None and current.last_checked_draw_no == draw_no:
            logger.debug("Toto draw %s already counted for cascade", draw_no)
            return current

        previous = current.consecutive_no_winner if current is not None else 0
        status = self._store_status(apply_draw(previous, latest), draw_no)
        logger.info(
            "Toto cascade after draw %s: %s consecutive no-winner draws, cascade=%s",
            draw_no,
            status.consecutive_no_winner,
            status.is_cascade_draw,
        )
        return status

    def recalculate_cascade_status(self) -> TotoCascadeStatus:
        """Rebuild the streak from the newest three stored Toto draws."""
        raw = self._results.recent_payloads(LotteryType.TOTO, CASCADE_THRESHOLD)
        payloads = [data for data in (_decode(item) for item in raw) if data]
        streak, last_draw_no = streak_from(payloads)
        return self._store_status(streak, last_draw_no)

    def toto_draw_time(self) -> Dict[str, object]:
        schedule = self.get_schedule(LotteryType.TOTO)
        if schedule is None:
            return {"draw_time": DEFAULT_TOTO_DRAW_TIME, "is_cascade": False}
        status = self.get_cascade_status()
        if status is not None and status.is_cascade_draw and schedule.cascade_draw_time:
            return {"draw_time": schedule.cascade_draw_time, "is_cascade": True}
        return {"draw_time": schedule.draw_time, "is_cascade": False}
