import re
import unittest

from fastapi.testclient import TestClient

from api_harness import ApiTestCase
from config import settings
from main import app
from middleware.rate_limit import limiter
from middleware.request_logging import REQUEST_ID_HEADER
from repositories.dependencies import get_stock_repository


def _broken_repository():
    raise RuntimeError("connection string postgres://admin:hunter2@db")


class TestAuthRateLimit(ApiTestCase):
    def setUp(self):
        super().setUp()
        limiter.reset()
        limiter.enabled = True

    def tearDown(self):
        limiter.enabled = False
        limiter.reset()
        super().tearDown()

    def test_login_throttled_after_limit(self):
        allowed = int(settings.RATE_LIMIT_AUTH.split("/")[0])
        payload = {"username": "nobody", "password": "Wrong-password-1!"}

        statuses = [self.client.post("/account/login", json=payload).status_code for _ in range(allowed + 2)]

        self.assertEqual(statuses[:allowed], [401] * allowed)
        self.assertEqual(statuses[allowed:], [429, 429])

    def test_other_routes_not_throttled(self):
        allowed = int(settings.RATE_LIMIT_AUTH.split("/")[0])
        stock = self.create_stock()
        for _ in range(allowed + 2):
            self.assertEqual(self.client.get(f"/stock/{stock['id']}").status_code, 200)


class TestUnhandledErrors(ApiTestCase):
    def setUp(self):
        super().setUp()
        app.dependency_overrides[get_stock_repository] = _broken_repository
        self.raw_client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self):
        self.raw_client.close()
        super().tearDown()

    def test_server_error_body_leaks_nothing(self):
        res = self.raw_client.get("/stock/1")

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"detail": "Internal server error"})
        self.assertNotIn("hunter2", res.text)
        self.assertNotIn("RuntimeError", res.text)

    def test_failed_request_logged_with_request_id(self):
        with self.assertLogs("middleware.request_logging", level="ERROR") as logs:
            self.raw_client.get("/stock/1", headers={REQUEST_ID_HEADER: "req-failing-1"})

        self.assertEqual(len(logs.records), 1)
        record = logs.records[0]
        self.assertEqual(record.request_id, "req-failing-1")
        self.assertIn("request_failed", record.getMessage())
        self.assertIn("RuntimeError", record.getMessage())
        self.assertNotIn("hunter2", record.getMessage())


class TestRequestId(ApiTestCase):
    def test_caller_request_id_echoed(self):
        res = self.client.get("/stock/999", headers={REQUEST_ID_HEADER: "abc-123"})

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.headers[REQUEST_ID_HEADER], "abc-123")

    def test_request_id_generated_when_absent(self):
        first = self.client.get("/stock/999").headers[REQUEST_ID_HEADER]
        second = self.client.get("/stock/999").headers[REQUEST_ID_HEADER]

        self.assertRegex(first, re.compile(r"^[0-9a-f]{32}$"))
        self.assertNotEqual(first, second)

    def test_request_logged_with_status(self):
        with self.assertLogs("middleware.request_logging", level="INFO") as logs:
            self.client.get("/stock/999", headers={REQUEST_ID_HEADER: "abc-404"})

        record = logs.records[-1]
        self.assertEqual(record.levelname, "WARNING")
        self.assertEqual(record.request_id, "abc-404")
        self.assertIn("status=404", record.getMessage())


if __name__ == "__main__":
    unittest.main()
