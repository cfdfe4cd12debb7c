import asyncio
import unittest

import httpx

from services.fmp_service import FmpService

PROFILE = [
    {
        "symbol": "AAPL",
        "companyName": "Apple Inc.",
        "description": "Designs consumer electronics.",
        "industry": "Consumer Electronics",
        "mktCap": 3012345678901,
        "price": 190.5,
        "lastDiv": 0.96,
    }
]


def _lookup(handler, symbol="AAPL", api_key="demo-key"):
    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            svc = FmpService(api_key=api_key, base_url="https://fmp.test/api/v3", client=client)
            return await svc.find_stock_by_symbol(symbol)

    return asyncio.run(_run())


class TestFmpService(unittest.TestCase):
    def test_profile_mapped_onto_stock(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PROFILE)

        stock = _lookup(handler)

        self.assertEqual(seen[0].url.path, "/api/v3/profile/AAPL")
        self.assertEqual(seen[0].url.params["apikey"], "demo-key")
        self.assertIsNone(stock.id)
        self.assertEqual(stock.symbol, "AAPL")
        self.assertEqual(stock.company_name, "Apple Inc.")
        self.assertEqual(stock.industry, "Consumer Electronics")
        self.assertEqual(stock.market_cap, 3012345678901)
        self.assertEqual(stock.price, 190.5)
        self.assertEqual(stock.last_div, 0.96)

    def test_empty_result_is_a_miss(self):
        self.assertIsNone(_lookup(lambda request: httpx.Response(200, json=[])))

    def test_error_status_is_a_miss(self):
        self.assertIsNone(_lookup(lambda request: httpx.Response(503, text="down")))

    def test_unparseable_body_is_a_miss(self):
        self.assertIsNone(_lookup(lambda request: httpx.Response(200, text="<html>")))
        self.assertIsNone(_lookup(lambda request: httpx.Response(200, json={"Error Message": "Invalid key"})))
        self.assertIsNone(_lookup(lambda request: httpx.Response(200, json=[{"companyName": "No symbol"}])))

    def test_market_cap_outside_storage_range_is_a_miss(self):
        bodies = [
            b'[{"symbol": "X", "companyName": "X Corp", "mktCap": 1e400, "price": 1.0}]',
            b'[{"symbol": "X", "companyName": "X Corp", "mktCap": 1e20, "price": 1.0}]',
            b'[{"symbol": "X", "companyName": "X Corp", "mktCap": -5, "price": 1.0}]',
            b'[{"symbol": "X", "companyName": "X Corp", "mktCap": "n/a", "price": 1.0}]',
        ]
        for body in bodies:
            stock = _lookup(lambda request, body=body: httpx.Response(200, content=body), symbol="X")
            self.assertIsNone(stock, body)

    def test_missing_market_cap_defaults_to_zero(self):
        body = b'[{"symbol": "X", "companyName": "X Corp", "price": 1e400}]'
        stock = _lookup(lambda request: httpx.Response(200, content=body), symbol="X")

        self.assertEqual(stock.market_cap, 0)
        self.assertEqual(stock.price, 0.0)

    def test_transport_failure_is_a_miss(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.assertIsNone(_lookup(handler))

    def test_missing_api_key_skips_the_call(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PROFILE)

        self.assertIsNone(_lookup(handler, api_key=""))
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
