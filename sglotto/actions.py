from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

from .services.stats import get_stats
from .types import LotteryType, Timeframe

StatsProvider = Callable[[LotteryType, Timeframe], Union[Any, Awaitable[Any]]]


async def fetch_stats(
    lottery_type: LotteryType,
    timeframe: Timeframe,
    provider: StatsProvider = get_stats,
) -> Any:
    """Hand ``(lottery_type, timeframe)`` to the stats provider and return its answer untouched.

    Provider errors propagate to the caller as raised.
    """
    result = provider(lottery_type, timeframe)
    if inspect.isawaitable(result):
        result = await result
    return result
