# routers/stock_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from repositories.comment_repository import CommentRepository
from repositories.dependencies import get_comment_repository, get_stock_repository
from repositories.stock_repository import DuplicateSymbolError, StockQuery, StockRepository, resolve_sort_column
from schemas.comment import to_comment_dto
from schemas.stock import StockCreate, StockOut, StockUpdate, stock_from_create, to_stock_dto
from services.auth import get_current_principal

router = APIRouter()


def stock_query_params(
    symbol: Optional[str] = Query(None),
    company_name: Optional[str] = Query(None, alias="companyName"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    is_descending: bool = Query(False, alias="isDescending"),
    page_number: int = Query(1, ge=1, alias="pageNumber"),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
) -> StockQuery:
    if sort_by and resolve_sort_column(sort_by) is None:
        raise HTTPException(status_code=400, detail=f"Unsupported sortBy: {sort_by}")
    return StockQuery(
        symbol=symbol,
        company_name=company_name,
        sort_by=sort_by,
        is_descending=is_descending,
        page_number=page_number,
        page_size=page_size,
    )


@router.get("", response_model=List[StockOut], dependencies=[Depends(get_current_principal)])
def list_stocks(
    query: StockQuery = Depends(stock_query_params),
    stocks: StockRepository = Depends(get_stock_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    rows = stocks.get_all(query)
    by_stock = comments.list_for_stocks(s.id for s in rows)
    return [
        to_stock_dto(s, (to_comment_dto(c) for c in by_stock.get(s.id, [])))
        for s in rows
    ]


@router.get("/{stock_id}", response_model=StockOut)
def get_stock(
    stock_id: int,
    stocks: StockRepository = Depends(get_stock_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    stock = stocks.get_by_id(stock_id)
    if stock is None:
        raise HTTPException(status_code=404, detail="Stock not found")
    return to_stock_dto(stock, (to_comment_dto(c) for c in comments.list_for_stock(stock.id)))


@router.post("", response_model=StockOut, status_code=status.HTTP_201_CREATED)
def create_stock(
    payload: StockCreate,
    request: Request,
    response: Response,
    stocks: StockRepository = Depends(get_stock_repository),
):
    try:
        stock = stocks.create(stock_from_create(payload))
    except DuplicateSymbolError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    response.headers["Location"] = str(request.url_for("get_stock", stock_id=stock.id))
    return to_stock_dto(stock)


@router.put("/{stock_id}", response_model=StockOut)
def update_stock(
    stock_id: int,
    payload: StockUpdate,
    stocks: StockRepository = Depends(get_stock_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        stock = stocks.update(stock_id, payload)
    except DuplicateSymbolError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    if stock is None:
        raise HTTPException(status_code=404, detail="Stock not found")
    return to_stock_dto(stock, (to_comment_dto(c) for c in comments.list_for_stock(stock.id)))


@router.delete("/{stock_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stock(
    stock_id: int,
    stocks: StockRepository = Depends(get_stock_repository),
):
    if not stocks.delete(stock_id):
        raise HTTPException(status_code=404, detail="Stock not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
