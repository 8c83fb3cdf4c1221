from __future__ import annotations

import calendar
import datetime as dt
from enum import Enum


class LotteryType(str, Enum):
    FOUR_D = "4D"
    TOTO = "Toto"
    SWEEP = "Sweep"

    @property
    def slug(self) -> str:
        """URL segment used by the site for this game."""
        return self.value.lower()

    @classmethod
    def parse(cls, value: str) -> "LotteryType":
        """Accept either the stored label (``4D``) or the URL slug (``4d``)."""
        for member in cls:
            if value == member.value or value.lower() == member.slug:
                return member
        raise ValueError(f"unknown lottery type: {value}")


class Timeframe(str, Enum):
    THIRTY_DAYS = "30days"
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"
    ONE_YEAR = "1year"

    @classmethod
    def parse(cls, value: object) -> "Timeframe":
        # Unrecognised values fall back to the shortest window.
        try:
            return cls(value)
        except ValueError:
            return cls.THIRTY_DAYS

    def cutoff(self, now: dt.datetime) -> dt.datetime:
        if self is Timeframe.THREE_MONTHS:
            return _months_before(now, 3)
        if self is Timeframe.SIX_MONTHS:
            return _months_before(now, 6)
        if self is Timeframe.ONE_YEAR:
            return _months_before(now, 12)
        return now - dt.timedelta(days=30)


def _months_before(moment: dt.datetime, months: int) -> dt.datetime:
    total = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
