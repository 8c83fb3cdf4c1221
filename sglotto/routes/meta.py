from __future__ import annotations

import datetime as dt

from flask import Blueprint, jsonify, request

from ..metadata import DEFAULT_PATH, draw_page_metadata, metadata_for_path
from ..types import LotteryType

bp = Blueprint("meta", __name__)


@bp.get("")
def page_metadata():
    path = request.args.get("path", DEFAULT_PATH)
    return jsonify(metadata_for_path(path).to_dict())


@bp.get("/<lottery_type>/<draw_date>")
def draw_metadata(lottery_type: str, draw_date: str):
    try:
        game = LotteryType.parse(lottery_type)
    except ValueError:
        return jsonify({"error": f"unknown lottery type: {lottery_type}"}), 400
    try:
        day = dt.date.fromisoformat(draw_date)
    except ValueError:
        return jsonify({"error": "draw date must be YYYY-MM-DD"}), 400
    return jsonify(draw_page_metadata(game, day).to_dict())
