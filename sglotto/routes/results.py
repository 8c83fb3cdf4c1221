from __future__ import annotations

import datetime as dt

from flask import Blueprint, jsonify

from ..services.results import ResultRepository
from ..types import LotteryType

bp = Blueprint("results", __name__)
result_repo = ResultRepository()


def _parse_game(lottery_type: str):
    try:
        return LotteryType.parse(lottery_type)
    except ValueError:
        return None


@bp.get("/<lottery_type>/latest")
def latest_result(lottery_type: str):
    game = _parse_game(lottery_type)
    if game is None:
        return jsonify({"error": f"unknown lottery type: {lottery_type}"}), 400

    result = result_repo.latest_result(game)
    if not result:
        return jsonify({"error": "no results stored"}), 404
    return jsonify(result.get_data())


@bp.get("/<lottery_type>/<draw_date>")
def result_for_date(lottery_type: str, draw_date: str):
    game = _parse_game(lottery_type)
    if game is None:
        return jsonify({"error": f"unknown lottery type: {lottery_type}"}), 400
    try:
        day = dt.date.fromisoformat(draw_date)
    except ValueError:
        return jsonify({"error": "draw date must be YYYY-MM-DD"}), 400

    result = result_repo.result_by_date(game, day)
    if not result:
        return jsonify({"error": "result not found"}), 404
    return jsonify(result.get_data())
