"""Hot/cold number statistics over stored draw results."""

from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..types import LotteryType, Timeframe
from .results import ResultRepository

logger = logging.getLogger("sglotto.stats")

FOUR_D_HOT_COLD = 5
TOTO_HOT_COLD = 6
SWEEP_HOT_COLD = 6

SWEEP_PRIZE_KEYS = ("winning", "jackpot", "lucky", "gift", "consolation", "participation", "twoD")


def _decode_payloads(raw_payloads: Iterable[Any]) -> List[Dict[str, Any]]:
    results = []
    for raw in raw_payloads:
        data = raw
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError:
                logger.warning("Skipping result with undecodable payload")
                continue
        if data:
            results.append(data)
    return results


def _by_count(counts: Mapping[str, int]) -> List[Tuple[str, int]]:
    # Numeric order first so ties stay in numeric order after the stable sort.
    ordered = sorted(counts.items(), key=lambda item: int(item[0]))
    return sorted(ordered, key=lambda item: item[1], reverse=True)


def _entries(pairs: Iterable[Tuple[str, int]]) -> List[Dict[str, object]]:
    return [{"number": number, "count": count} for number, count in pairs]


def _numeric_order(counts: Mapping[str, int]) -> List[Dict[str, object]]:
    return _entries(sorted(counts.items(), key=lambda item: int(item[0])))


def _numbers(payload: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = payload.get(key)
    return value if isinstance(value, list) else []


def calculate_4d_stats(results: Iterable[Mapping[str, Any]]) -> Dict[str, object]:
    counts = {str(digit): 0 for digit in range(10)}

    for res in results:
        all_numbers = [*_numbers(res, "winning"), *_numbers(res, "starter"), *_numbers(res, "consolation")]
        for num in all_numbers:
            for char in str(num).zfill(4):
                if char in counts:
                    counts[char] += 1

    ranked = _by_count(counts)
    return {
        "hot": _entries(ranked[:FOUR_D_HOT_COLD]),
        "cold": _entries(ranked[-FOUR_D_HOT_COLD:]),
        "frequency": _numeric_order(counts),
    }


def _parse_draw_date(value: Any) -> dt.datetime:
    if isinstance(value, str):
        try:
            parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=dt.timezone.utc)
    return dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def calculate_toto_stats(results: Iterable[Mapping[str, Any]]) -> Dict[str, object]:
    results = list(results)
    counts: Dict[str, int] = {}
    for res in results:
        all_numbers = [*_numbers(res, "winning"), res.get("additional")]
        for num in all_numbers:
            try:
                key = str(int(num))
            except (TypeError, ValueError):
                continue
            counts[key] = counts.get(key, 0) + 1

    for number in range(1, 50):
        counts.setdefault(str(number), 0)

    ranked = _by_count(counts)

    prize_trend = []
    for res in results:
        shares = _numbers(res, "winningShares")
        group_one = shares[0] if shares and isinstance(shares[0], Mapping) else {}
        prize_trend.append(
            {
                "drawNo": res.get("drawNo"),
                "drawDate": res.get("drawDate"),
                "amount": group_one.get("prizeAmount") or 0,
                "winners": group_one.get("count") or 0,
            }
        )
    prize_trend.sort(key=lambda item: _parse_draw_date(item["drawDate"]))

    return {
        "hot": _entries(ranked[:TOTO_HOT_COLD]),
        "cold": _entries(ranked[-TOTO_HOT_COLD:]),
        "frequency": _numeric_order(counts),
        "prizeTrend": prize_trend,
    }


def calculate_sweep_stats(results: Iterable[Mapping[str, Any]]) -> Dict[str, object]:
    first_digit_counts = {str(number): 0 for number in range(10, 45)}
    other_digit_counts = {str(digit): 0 for digit in range(10)}

    for res in results:
        for key in SWEEP_PRIZE_KEYS:
            for num in _numbers(res, key):
                num_str = str(num).zfill(7)
                first_part = num_str[:2]
                if first_part in first_digit_counts:
                    first_digit_counts[first_part] += 1
                for digit in num_str[2:7]:
                    if digit in other_digit_counts:
                        other_digit_counts[digit] += 1

    ranked_first = _by_count(first_digit_counts)
    ranked_other = _by_count(other_digit_counts)
    return {
        "firstDigitChart": _numeric_order(first_digit_counts),
        "otherDigitChart": _numeric_order(other_digit_counts),
        "hotFirst": _entries(ranked_first[:SWEEP_HOT_COLD]),
        "coldFirst": _entries(ranked_first[-SWEEP_HOT_COLD:]),
        "hotOther": _entries(ranked_other[:SWEEP_HOT_COLD]),
        "coldOther": _entries(ranked_other[-SWEEP_HOT_COLD:]),
    }


CALCULATORS = {
    LotteryType.FOUR_D: calculate_4d_stats,
    LotteryType.TOTO: calculate_toto_stats,
    LotteryType.SWEEP: calculate_sweep_stats,
}


async def get_stats(
    lottery_type: Any,
    timeframe: Any = Timeframe.THIRTY_DAYS,
    repo: Optional[ResultRepository] = None,
) -> Optional[Dict[str, object]]:
    """Compute statistics for one game over the draws inside ``timeframe``.

    Returns ``None`` for an unknown lottery type. An unknown timeframe is
    treated as the 30 day window.
    """
    try:
        game = LotteryType(lottery_type)
    except ValueError:
        logger.warning("Stats requested for unknown lottery type %r", lottery_type)
        return None

    window = Timeframe.parse(timeframe)
    cutoff = window.cutoff(dt.datetime.utcnow()).date()
    repo = repo or ResultRepository()
    results = _decode_payloads(repo.list_payloads_since(game, cutoff))
    logger.debug("Computing %s stats over %d draws since %s", game.value, len(results), cutoff)
    return CALCULATORS[game](results)
