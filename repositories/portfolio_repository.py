# repositories/portfolio_repository.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.portfolio import Portfolio
from models.stock import Stock
from utils.common_helpers import normalize_symbol

logger = logging.getLogger(__name__)


class PortfolioRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_user_portfolio(self, user_id: int) -> List[Stock]:
        return (
            self.db.query(Stock)
            .join(Portfolio, Portfolio.stock_id == Stock.id)
            .filter(Portfolio.user_id == user_id)
            .order_by(Stock.symbol.asc())
            .all()
        )

    def get(self, user_id: int, stock_id: int) -> Optional[Portfolio]:
        return self.db.get(Portfolio, (user_id, stock_id))

    def create(self, user_id: int, stock_id: int) -> Portfolio:
        """Insert the association; the composite key rejects a second copy."""
        entry = Portfolio(user_id=user_id, stock_id=stock_id)
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValueError("Stock is already in portfolio") from exc
        logger.info("portfolio_added user_id=%s stock_id=%s", user_id, stock_id)
        return entry

    def delete(self, user_id: int, symbol: str) -> bool:
        entry = (
            self.db.query(Portfolio)
            .join(Stock, Stock.id == Portfolio.stock_id)
            .filter(Portfolio.user_id == user_id, func.upper(Stock.symbol) == normalize_symbol(symbol))
            .first()
        )
        if entry is None:
            return False
        stock_id = entry.stock_id
        self.db.delete(entry)
        self.db.commit()
        logger.info("portfolio_removed user_id=%s stock_id=%s", user_id, stock_id)
        return True
