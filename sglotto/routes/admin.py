from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..config import load_settings
from ..schemas import Pagination, ResultSaveRequest, ResultUpdateRequest, normalize_payload
from ..services.results import DuplicateDrawError, ResultRepository
from ..services.schedule import ScheduleRepository
from ..types import LotteryType

bp = Blueprint("admin", __name__)
result_repo = ResultRepository()
schedule_repo = ScheduleRepository(result_repo)


def _require_admin() -> bool:
    settings = load_settings()
    api_key = settings.admin_api_key
    if api_key:
        provided = request.headers.get("X-Admin-Token")
        if provided != api_key:
            return False
    return True


@bp.before_request
def verify_admin():
    if not _require_admin():
        current_app.logger.warning("Rejected admin request to %s", request.path)
        return jsonify({"error": "unauthorized"}), 401
    return None


@bp.get("/results")
def list_results():
    page = request.args.get("page", default=1, type=int) or 1
    limit = request.args.get("limit", default=10, type=int) or 10
    listing = result_repo.list_results(page=page, limit=limit)
    pagination = Pagination(**listing["pagination"])
    return jsonify({"data": listing["data"], "pagination": pagination.dict()})


@bp.post("/results")
def save_result():
    payload = request.get_json(force=True, silent=True) or {}
    data = ResultSaveRequest(**payload)

    result = result_repo.save_result(
        data.type,
        data.draw_date,
        data.draw_number,
        data.data,
        source="manual",
    )
    current_app.logger.info("Saved %s draw %s via admin", data.type.value, data.draw_number)
    if data.type is LotteryType.TOTO:
        schedule_repo.update_cascade_status(data.data)
    return jsonify({"success": True, "result": result.to_dict()})


@bp.put("/results/<int:result_id>")
def update_result(result_id: int):
    payload = request.get_json(force=True, silent=True) or {}
    data = ResultUpdateRequest(**payload)

    existing = result_repo.get_result(result_id)
    if not existing:
        return jsonify({"error": "result not found"}), 404

    changes = data.dict(exclude_none=True)
    game = data.type or LotteryType(existing.type)
    if "data" in changes:
        changes["data"] = normalize_payload(game, changes["data"])
    elif game.value != existing.type:
        # The stored payload has to fit the game it is being moved to.
        changes["data"] = normalize_payload(game, existing.get_data())

    try:
        result = result_repo.update_result(result_id, **changes)
    except DuplicateDrawError as exc:
        current_app.logger.warning("Rejected update of result %s: %s", result_id, exc)
        return jsonify({"error": "another result already has this draw number for the game"}), 409
    if not result:
        return jsonify({"error": "result not found"}), 404
    return jsonify({"success": True, "result": result.to_dict()})


@bp.delete("/results/<int:result_id>")
def delete_result(result_id: int):
    if not result_repo.delete_result(result_id):
        return jsonify({"error": "result not found"}), 404
    current_app.logger.info("Deleted result %s via admin", result_id)
    return jsonify({"success": True})


@bp.get("/cascade")
def cascade_status():
    status = schedule_repo.get_cascade_status()
    if status is None:
        return jsonify({"error": "cascade status not calculated yet"}), 404
    return jsonify(status.to_dict())


@bp.post("/cascade/recalculate")
def recalculate_cascade():
    status = schedule_repo.recalculate_cascade_status()
    current_app.logger.info(
        "Recalculated Toto cascade: %s consecutive no-winner draws", status.consecutive_no_winner
    )
    return jsonify({"success": True, "status": status.to_dict()})
