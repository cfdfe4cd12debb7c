# services/fmp_service.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx

from config import settings
from models.stock import Stock
from schemas.stock import BIGINT_MAX
from utils.common_helpers import safe_float, safe_int

logger = logging.getLogger(__name__)


def _first_profile(resp: httpx.Response) -> Optional[Dict[str, Any]]:
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return None


def profile_to_stock(profile: Dict[str, Any]) -> Optional[Stock]:
    """Map an FMP company profile onto an unsaved Stock; None when the payload is unusable."""
    symbol = (profile.get("symbol") or "").strip()
    if not symbol:
        return None

    raw_cap = profile.get("mktCap")
    market_cap = safe_int(raw_cap)
    if raw_cap is None:
        market_cap = 0
    elif market_cap is None or not 0 <= market_cap <= BIGINT_MAX:
        return None

    return Stock(
        symbol=symbol,
        company_name=(profile.get("companyName") or symbol).strip(),
        description=profile.get("description") or None,
        industry=(profile.get("industry") or "").strip(),
        market_cap=market_cap,
        price=safe_float(profile.get("price")) or 0.0,
        last_div=safe_float(profile.get("lastDiv")),
    )


class FmpService:
    """
    Company-profile lookup against Financial Modeling Prep.

    Every failure (missing key, transport error, bad status, empty or
    malformed body) degrades to None: callers cannot tell an outage from
    an unknown symbol. No retries.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = settings.FMP_BASE_URL,
        timeout: float = settings.FMP_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.FMP_API_KEY
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._shared_client = client

    @asynccontextmanager
    async def _client(self):
        if self._shared_client is not None:
            yield self._shared_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as c:
            yield c

    async def find_stock_by_symbol(self, symbol: str) -> Optional[Stock]:
        sym = (symbol or "").strip()
        if not sym:
            return None
        if not self.api_key:
            logger.warning("fmp_lookup_skipped symbol=%s reason=missing_api_key", sym)
            return None

        try:
            async with self._client() as c:
                r = await c.get(
                    f"{self.base_url}/profile/{sym}",
                    params={"apikey": self.api_key},
                )
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("fmp_lookup_failed symbol=%s status=%s", sym, e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.warning("fmp_lookup_failed symbol=%s error=%s", sym, type(e).__name__)
            return None

        profile = _first_profile(r)
        if profile is None:
            logger.info("fmp_lookup_miss symbol=%s", sym)
            return None

        stock = profile_to_stock(profile)
        if stock is None:
            logger.warning("fmp_lookup_unparseable symbol=%s", sym)
        return stock


def get_fmp_service() -> FmpService:
    return FmpService()
