from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, Field, validator

from .types import LotteryType


class FourDResult(BaseModel):
    draw_no: int = Field(..., alias="drawNo")
    draw_date: str = Field(..., alias="drawDate")
    winning: List[int] = Field(..., description="1st, 2nd and 3rd prize numbers.")
    starter: List[int] = Field(default_factory=list)
    consolation: List[int] = Field(default_factory=list)

    @validator("winning")
    def validate_winning(cls, value: List[int]) -> List[int]:
        if len(value) != 3:
            raise ValueError("4D results require exactly 3 winning numbers.")
        return value

    @validator("winning", "starter", "consolation", each_item=True)
    def validate_four_digits(cls, value: int) -> int:
        if not 0 <= value <= 9999:
            raise ValueError("4D numbers must be between 0000 and 9999.")
        return value


class TotoPrizeShare(BaseModel):
    group: str
    prize_amount: float = Field(0, alias="prizeAmount")
    count: int = 0


class TotoResult(BaseModel):
    draw_no: int = Field(..., alias="drawNo")
    draw_date: str = Field(..., alias="drawDate")
    winning: List[int]
    additional: int
    winning_shares: List[TotoPrizeShare] = Field(default_factory=list, alias="winningShares")

    @validator("winning")
    def validate_winning(cls, value: List[int]) -> List[int]:
        if len(value) != 6:
            raise ValueError("Toto results require exactly 6 winning numbers.")
        if len(set(value)) != 6:
            raise ValueError("Winning numbers must be unique.")
        for n in value:
            if not 1 <= n <= 49:
                raise ValueError("Toto numbers must be between 1 and 49.")
        return value

    @validator("additional")
    def validate_additional(cls, value: int) -> int:
        if not 1 <= value <= 49:
            raise ValueError("Additional number must be between 1 and 49.")
        return value


class SweepResult(BaseModel):
    draw_no: int = Field(..., alias="drawNo")
    draw_date: str = Field(..., alias="drawDate")
    winning: List[int]
    jackpot: List[int] = Field(default_factory=list)
    lucky: List[int] = Field(default_factory=list)
    gift: List[int] = Field(default_factory=list)
    consolation: List[int] = Field(default_factory=list)
    participation: List[int] = Field(default_factory=list)
    two_d: List[int] = Field(default_factory=list, alias="twoD")


PAYLOAD_MODELS: Dict[LotteryType, Type[BaseModel]] = {
    LotteryType.FOUR_D: FourDResult,
    LotteryType.TOTO: TotoResult,
    LotteryType.SWEEP: SweepResult,
}


def normalize_payload(lottery_type: LotteryType, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a raw result payload and return it with its camelCase keys."""
    model = PAYLOAD_MODELS[lottery_type](**data)
    return model.dict(by_alias=True)


def _clean_draw_number(value: Union[int, str]) -> str:
    text = str(value).strip()
    if not text:
        raise ValueError("draw_number must not be empty.")
    return text


class ResultSaveRequest(BaseModel):
    type: LotteryType
    draw_date: dt.date
    draw_number: Union[int, str]
    data: Dict[str, Any]

    @validator("draw_number")
    def validate_draw_number(cls, value: Union[int, str]) -> str:
        return _clean_draw_number(value)

    @validator("data")
    def validate_data(cls, value: Dict[str, Any], values: Dict[str, Any]) -> Dict[str, Any]:
        lottery_type = values.get("type")
        if lottery_type is None:
            return value
        return normalize_payload(lottery_type, value)


class ResultUpdateRequest(BaseModel):
    type: Optional[LotteryType] = None
    draw_date: Optional[dt.date] = None
    draw_number: Optional[Union[int, str]] = None
    data: Optional[Dict[str, Any]] = None

    @validator("draw_number")
    def validate_draw_number(cls, value: Optional[Union[int, str]]) -> Optional[str]:
        if value is None:
            return None
        return _clean_draw_number(value)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int