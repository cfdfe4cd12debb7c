from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.stock import Stock
from schemas.comment import CommentOut

BIGINT_MAX = 2**63 - 1


class StockWrite(BaseModel):
    """Mutable business fields; used for both create and full update."""

    symbol: str = Field(min_length=1, max_length=10)
    company_name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    industry: str = Field(min_length=1, max_length=100)
    market_cap: int = Field(ge=0, le=BIGINT_MAX)
    price: float = Field(ge=0, allow_inf_nan=False)
    last_div: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


class StockCreate(StockWrite):
    pass


class StockUpdate(StockWrite):
    pass


class StockSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    company_name: str
    description: Optional[str] = None
    industry: str
    market_cap: int
    price: float
    last_div: Optional[float] = None


class StockOut(StockSummaryOut):
    comments: list[CommentOut] = Field(default_factory=list)


def to_stock_summary_dto(stock: Stock) -> StockSummaryOut:
    return StockSummaryOut.model_validate(stock)


def to_stock_dto(stock: Stock, comments: Iterable[CommentOut] = ()) -> StockOut:
    dto = StockOut.model_validate(stock)
    dto.comments = list(comments)
    return dto


def stock_from_create(payload: StockCreate) -> Stock:
    return Stock(**payload.model_dump())


def apply_stock_update(stock: Stock, payload: StockUpdate) -> Stock:
    for field, value in payload.model_dump().items():
        setattr(stock, field, value)
    return stock
