from __future__ import annotations

import asyncio

from flask import Blueprint, current_app, jsonify, request

from ..actions import fetch_stats
from ..types import LotteryType, Timeframe

bp = Blueprint("stats", __name__)


@bp.get("/<lottery_type>")
def get_stats_for_game(lottery_type: str):
    try:
        game = LotteryType.parse(lottery_type)
    except ValueError:
        return jsonify({"error": f"unknown lottery type: {lottery_type}"}), 400

    raw_timeframe = request.args.get("timeframe", Timeframe.THIRTY_DAYS.value)
    try:
        timeframe = Timeframe(raw_timeframe)
    except ValueError:
        return jsonify({"error": f"unknown timeframe: {raw_timeframe}"}), 400

    stats = asyncio.run(fetch_stats(game, timeframe))
    current_app.logger.debug("Served %s stats for %s", game.value, timeframe.value)
    return jsonify(stats)
