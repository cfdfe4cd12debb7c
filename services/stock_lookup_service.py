# services/stock_lookup_service.py
import logging
from typing import Optional

from models.stock import Stock
from repositories.stock_repository import DuplicateSymbolError, StockRepository
from services.fmp_service import FmpService

logger = logging.getLogger(__name__)


async def resolve_stock(symbol: str, stocks: StockRepository, fmp: FmpService) -> Optional[Stock]:
    """
    Local store first, then the market-data API. A stock found remotely is
    persisted before it is returned. None means neither source knows it.
    """
    stock = stocks.get_by_symbol(symbol)
    if stock is not None:
        return stock

    fetched = await fmp.find_stock_by_symbol(symbol)
    if fetched is None:
        return None

    fetched_symbol = fetched.symbol
    try:
        return stocks.create(fetched)
    except DuplicateSymbolError:
        # Another request stored the same symbol (or FMP answered with a
        # differently-cased alias of an existing row).
        logger.info("stock_lookup_race symbol=%s", fetched_symbol)
        return stocks.get_by_symbol(fetched_symbol)
