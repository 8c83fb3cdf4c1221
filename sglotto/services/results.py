from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError

from ..db import detach, read_session, session_scope
from ..models import Result
from ..types import LotteryType

logger = logging.getLogger("sglotto.results")


class DuplicateDrawError(ValueError):
    """Another stored result already has this type and draw number."""


class ResultRepository:
    def save_result(
        self,
        lottery_type: LotteryType,
        draw_date: dt.date,
        draw_number: str,
        data: Dict[str, Any],
        source: str = "scrape",
    ) -> Result:
        """Insert a draw, or overwrite the stored one with the same type and draw number."""
        with session_scope() as session:
            result = (
                session.query(Result)
                .filter(Result.type == lottery_type.value, Result.draw_number == draw_number)
                .one_or_none()
            )
            if result is None:
                result = Result(type=lottery_type.value, draw_number=draw_number)
                session.add(result)
                logger.info("Inserting %s draw %s (%s)", lottery_type.value, draw_number, source)
            else:
                logger.info("Updating %s draw %s (%s)", lottery_type.value, draw_number, source)
            result.draw_date = draw_date
            result.source = source
            result.set_data(data)
            return detach(session, result)

    def get_result(self, result_id: int) -> Optional[Result]:
        with read_session() as session:
            return session.get(Result, result_id)

    def update_result(self, result_id: int, **changes: Any) -> Optional[Result]:
        try:
            with session_scope() as session:
                result = session.get(Result, result_id)
                if not result:
                    return None
                if changes.get("type") is not None:
                    result.type = LotteryType(changes["type"]).value
                if changes.get("draw_date") is not None:
                    result.draw_date = changes["draw_date"]
                if changes.get("draw_number") is not None:
                    result.draw_number = changes["draw_number"]
                if changes.get("data") is not None:
                    result.set_data(changes["data"])
                return detach(session, result)
        except IntegrityError as exc:
            raise DuplicateDrawError(
                f"result {result_id} would duplicate an existing draw number for its game"
            ) from exc

    def delete_result(self, result_id: int) -> bool:
        with session_scope() as session:
            deleted = session.query(Result).filter(Result.id == result_id).delete()
            return deleted > 0

    def list_results(self, page: int = 1, limit: int = 10) -> Dict[str, object]:
        page = max(page, 1)
        limit = max(limit, 1)
        with read_session() as session:
            total = session.query(func.count(Result.id)).scalar() or 0
            records = (
                session.query(Result)
                .order_by(desc(Result.draw_date), desc(Result.id))
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
            data = [record.to_dict() for record in records]
        return {
            "data": data,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": int(total),
                "total_pages": math.ceil(total / limit),
            },
        }

    def latest_result(self, lottery_type: LotteryType) -> Optional[Result]:
        with read_session() as session:
            return (
                session.query(Result)
                .filter(Result.type == lottery_type.value)
                .order_by(desc(Result.draw_date), desc(Result.id))
                .first()
            )

    def result_by_date(self, lottery_type: LotteryType, draw_date: dt.date) -> Optional[Result]:
        with read_session() as session:
            return (
                session.query(Result)
                .filter(Result.type == lottery_type.value, Result.draw_date == draw_date)
                .order_by(desc(Result.id))
                .first()
            )

    def list_payloads_since(self, lottery_type: LotteryType, cutoff: dt.date) -> List[Any]:
        """Return the raw stored payloads (undecoded) for draws on or after ``cutoff``."""
        with read_session() as session:
            rows = (
                session.query(Result.data)
                .filter(Result.type == lottery_type.value, Result.draw_date >= cutoff)
                .order_by(Result.draw_date)
                .all()
            )
            return [row.data for row in rows]

    def recent_payloads(self, lottery_type: LotteryType, limit: int) -> List[Any]:
        """Raw payloads of the newest ``limit`` draws, oldest first."""
        with read_session() as session:
            rows = (
                session.query(Result.data)
                .filter(Result.type == lottery_type.value)
                .order_by(desc(Result.draw_date), desc(Result.id))
                .limit(limit)
                .all()
            )
            return [row.data for row in reversed(rows)]

    def last_updated(self, lottery_type: Optional[LotteryType] = None) -> Optional[dt.datetime]:
        with read_session() as session:
            query = session.query(func.max(Result.updated_at))
            if lottery_type is not None:
                query = query.filter(Result.type == lottery_type.value)
            return query.scalar()

    def list_draw_dates(self) -> List[Dict[str, object]]:
        with read_session() as session:
            rows = (
                session.query(Result.type, Result.draw_date, Result.updated_at)
                .order_by(desc(Result.draw_date), Result.type)
                .all()
            )
            return [
                {"type": row.type, "draw_date": row.draw_date, "updated_at": row.updated_at}
                for row in rows
            ]
