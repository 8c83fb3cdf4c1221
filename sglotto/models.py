from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Result(Base):
    __tablename__ = "results"
    __table_args__ = (UniqueConstraint("type", "draw_number", name="unique_draw"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(8), nullable=False, index=True)
    draw_date = Column(Date, nullable=False, index=True)
    draw_number = Column(String(50), nullable=False)
    data = Column(Text, nullable=False)
    source = Column(String(16), nullable=False, default="scrape")
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow, nullable=False)

    def set_data(self, payload: Dict[str, Any]) -> None:
        self.data = json.dumps(payload)

    def get_data(self) -> Any:
        return json.loads(self.data)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "draw_date": self.draw_date.isoformat() if self.draw_date else None,
            "draw_number": self.draw_number,
            "data": self.get_data(),
            "source": self.source,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_type = Column(String(8), nullable=False, unique=True)
    draw_days = Column(String(128), nullable=False)
    draw_time = Column(String(5), nullable=False)
    cascade_draw_time = Column(String(5), nullable=True)
    sales_close_time = Column(String(5), nullable=True)
    special_rule = Column(String(64), nullable=True)
    description = Column(Text, nullable=True)

    def draw_day_names(self) -> List[str]:
        return [day.strip().lower() for day in self.draw_days.split(",") if day.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "game_type": self.game_type,
            "draw_days": self.draw_days,
            "draw_time": self.draw_time,
            "cascade_draw_time": self.cascade_draw_time,
            "sales_close_time": self.sales_close_time,
            "special_rule": self.special_rule,
            "description": self.description,
        }


class TotoCascadeStatus(Base):
    __tablename__ = "toto_cascade_status"

    id = Column(Integer, primary_key=True, default=1)
    consecutive_no_winner = Column(Integer, nullable=False, default=0)
    is_cascade_draw = Column(Boolean, nullable=False, default=False)
    last_checked_draw_no = Column(Integer, nullable=True)
    updated_at = Column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "consecutive_no_winner": self.consecutive_no_winner,
            "is_cascade_draw": self.is_cascade_draw,
            "last_checked_draw_no": self.last_checked_draw_no,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
