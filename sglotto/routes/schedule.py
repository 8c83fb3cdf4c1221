from __future__ import annotations

import datetime as dt

from flask import Blueprint, jsonify

from ..services.schedule import (
    SGT,
    ScheduleRepository,
    game_page_title,
    most_recent_draw_date,
    next_draw_date,
)
from ..types import LotteryType

bp = Blueprint("schedule", __name__)
schedule_repo = ScheduleRepository()


@bp.get("")
def list_schedules():
    return jsonify([schedule.to_dict() for schedule in schedule_repo.list_schedules()])


@bp.get("/toto/draw-time")
def toto_draw_time():
    return jsonify(schedule_repo.toto_draw_time())


@bp.get("/<lottery_type>")
def game_schedule(lottery_type: str):
    try:
        game = LotteryType.parse(lottery_type)
    except ValueError:
        return jsonify({"error": f"unknown lottery type: {lottery_type}"}), 400

    schedule = schedule_repo.get_schedule(game)
    if schedule is None:
        return jsonify({"error": "schedule not found"}), 404

    today = dt.datetime.now(SGT).date()
    body = schedule.to_dict()
    body["most_recent_draw_date"] = most_recent_draw_date(schedule, today).isoformat()
    body["next_draw_date"] = next_draw_date(schedule, today).isoformat()
    body["page_title"] = game_page_title(game, schedule, today)
    return jsonify(body)
