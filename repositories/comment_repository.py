# repositories/comment_repository.py
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.comment import Comment
from models.stock import Stock
from utils.common_helpers import normalize_symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentQuery:
    symbol: Optional[str] = None
    is_descending: bool = True


class CommentRepository:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(Comment).options(joinedload(Comment.user))

    def get_all(self, query: CommentQuery) -> List[Comment]:
        q = self._base_query()
        if query.symbol:
            q = q.join(Stock, Stock.id == Comment.stock_id).filter(
                func.upper(Stock.symbol) == normalize_symbol(query.symbol)
            )
        if query.is_descending:
            q = q.order_by(Comment.created_on.desc(), Comment.id.desc())
        else:
            q = q.order_by(Comment.created_on.asc(), Comment.id.asc())
        return q.all()

    def get_by_id(self, comment_id: int) -> Optional[Comment]:
        return self._base_query().filter(Comment.id == comment_id).first()

    def list_for_stocks(self, stock_ids: Iterable[int]) -> Dict[int, List[Comment]]:
        """Comments grouped by stock id, newest first, in a single query."""
        ids = list(stock_ids)
        grouped: Dict[int, List[Comment]] = defaultdict(list)
        if not ids:
            return grouped
        rows = (
            self._base_query()
            .filter(Comment.stock_id.in_(ids))
            .order_by(Comment.created_on.desc(), Comment.id.desc())
            .all()
        )
        for comment in rows:
            grouped[comment.stock_id].append(comment)
        return grouped

    def list_for_stock(self, stock_id: int) -> List[Comment]:
        return self.list_for_stocks([stock_id]).get(stock_id, [])

    def create(self, comment: Comment) -> Comment:
        self.db.add(comment)
        self.db.commit()
        logger.info("comment_created id=%s stock_id=%s", comment.id, comment.stock_id)
        return self.get_by_id(comment.id)  # type: ignore[return-value]

    def update(self, comment_id: int, *, title: str, content: str) -> Optional[Comment]:
        comment = self.db.get(Comment, comment_id)
        if comment is None:
            return None
        comment.title = title
        comment.content = content
        self.db.commit()
        return self.get_by_id(comment_id)

    def delete(self, comment_id: int) -> bool:
        comment = self.db.get(Comment, comment_id)
        if comment is None:
            return False
        self.db.delete(comment)
        self.db.commit()
        logger.info("comment_deleted id=%s", comment_id)
        return True
