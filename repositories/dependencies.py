# repositories/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from repositories.comment_repository import CommentRepository
from repositories.portfolio_repository import PortfolioRepository
from repositories.stock_repository import StockRepository
from repositories.user_repository import UserRepository


def get_stock_repository(db: Session = Depends(get_db)) -> StockRepository:
    return StockRepository(db)


def get_comment_repository(db: Session = Depends(get_db)) -> CommentRepository:
    return CommentRepository(db)


def get_portfolio_repository(db: Session = Depends(get_db)) -> PortfolioRepository:
    return PortfolioRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
