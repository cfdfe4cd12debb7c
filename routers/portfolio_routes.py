# routers/portfolio_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from models.user import User
from repositories.dependencies import get_portfolio_repository, get_stock_repository
from repositories.portfolio_repository import PortfolioRepository
from repositories.stock_repository import StockRepository
from schemas.stock import StockSummaryOut, to_stock_summary_dto
from services.auth import get_current_user
from services.fmp_service import FmpService, get_fmp_service
from services.stock_lookup_service import resolve_stock

router = APIRouter()


@router.get("", response_model=List[StockSummaryOut])
def get_user_portfolio(
    user: User = Depends(get_current_user),
    portfolios: PortfolioRepository = Depends(get_portfolio_repository),
):
    return [to_stock_summary_dto(s) for s in portfolios.get_user_portfolio(user.id)]


@router.post("/{symbol}", response_model=StockSummaryOut, status_code=status.HTTP_201_CREATED)
async def add_portfolio(
    symbol: str,
    user: User = Depends(get_current_user),
    stocks: StockRepository = Depends(get_stock_repository),
    portfolios: PortfolioRepository = Depends(get_portfolio_repository),
    fmp: FmpService = Depends(get_fmp_service),
):
    stock = await resolve_stock(symbol, stocks, fmp)
    if stock is None:
        raise HTTPException(status_code=404, detail="Stock not found")

    if portfolios.get(user.id, stock.id) is not None:
        raise HTTPException(status_code=400, detail="Cannot add same stock to portfolio")

    try:
        portfolios.create(user.id, stock.id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return to_stock_summary_dto(stocks.get_by_id(stock.id))


@router.delete("/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
def remove_portfolio(
    symbol: str,
    user: User = Depends(get_current_user),
    portfolios: PortfolioRepository = Depends(get_portfolio_repository),
):
    if not portfolios.delete(user.id, symbol):
        raise HTTPException(status_code=404, detail="Stock not in portfolio")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
