# repositories/stock_repository.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.comment import Comment
from models.portfolio import Portfolio
from models.stock import Stock
from schemas.stock import StockUpdate, apply_stock_update
from utils.common_helpers import normalize_symbol

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "symbol": Stock.symbol,
    "companyname": Stock.company_name,
    "company_name": Stock.company_name,
    "industry": Stock.industry,
    "marketcap": Stock.market_cap,
    "market_cap": Stock.market_cap,
    "price": Stock.price,
}


class DuplicateSymbolError(ValueError):
    """Raised when the stocks.symbol unique constraint rejects a write."""


@dataclass(frozen=True)
class StockQuery:
    symbol: Optional[str] = None
    company_name: Optional[str] = None
    sort_by: Optional[str] = None
    is_descending: bool = False
    page_number: int = 1
    page_size: int = 20


def resolve_sort_column(sort_by: Optional[str]):
    """Map a client sort key onto a column; None when the key is unknown."""
    if not sort_by:
        return None
    return SORTABLE_FIELDS.get(sort_by.strip().lower())


class StockRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self, query: StockQuery) -> List[Stock]:
        q = self.db.query(Stock)

        if query.symbol:
            q = q.filter(func.upper(Stock.symbol).contains(normalize_symbol(query.symbol)))
        if query.company_name:
            q = q.filter(func.lower(Stock.company_name).contains(query.company_name.strip().lower()))

        column = resolve_sort_column(query.sort_by)
        if column is not None:
            q = q.order_by(column.desc() if query.is_descending else column.asc(), Stock.id.asc())
        else:
            q = q.order_by(Stock.id.desc() if query.is_descending else Stock.id.asc())

        skip = (query.page_number - 1) * query.page_size
        return q.offset(skip).limit(query.page_size).all()

    def get_by_id(self, stock_id: int) -> Optional[Stock]:
        return self.db.get(Stock, stock_id)

    def get_by_symbol(self, symbol: str) -> Optional[Stock]:
        return (
            self.db.query(Stock)
            .filter(func.upper(Stock.symbol) == normalize_symbol(symbol))
            .first()
        )

    def create(self, stock: Stock) -> Stock:
        self.db.add(stock)
        self._commit_or_duplicate(stock.symbol)
        self.db.refresh(stock)
        logger.info("stock_created id=%s symbol=%s", stock.id, stock.symbol)
        return stock

    def update(self, stock_id: int, payload: StockUpdate) -> Optional[Stock]:
        stock = self.get_by_id(stock_id)
        if stock is None:
            return None
        apply_stock_update(stock, payload)
        self._commit_or_duplicate(payload.symbol)
        self.db.refresh(stock)
        return stock

    def delete(self, stock_id: int) -> bool:
        """Delete a stock together with its comments and portfolio rows."""
        stock = self.get_by_id(stock_id)
        if stock is None:
            return False

        comments = (
            self.db.query(Comment)
            .filter(Comment.stock_id == stock_id)
            .delete(synchronize_session=False)
        )
        holdings = (
            self.db.query(Portfolio)
            .filter(Portfolio.stock_id == stock_id)
            .delete(synchronize_session=False)
        )
        self.db.delete(stock)
        self.db.commit()
        logger.info(
            "stock_deleted id=%s comments_removed=%d portfolio_rows_removed=%d",
            stock_id, comments, holdings,
        )
        return True

    def _commit_or_duplicate(self, symbol: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateSymbolError(f"Stock with symbol {symbol} already exists") from exc
