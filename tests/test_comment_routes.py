import unittest

from api_harness import ApiTestCase
from models.comment import Comment
from models.stock import Stock
from models.user import User

BODY = {"title": "Bullish take", "content": "Strong quarter ahead"}


class TestCommentCreate(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.login_headers("author")

    def test_comment_on_local_stock_skips_market_data(self):
        stock = self.create_stock(symbol="TSLA")
        res = self.client.post("/comment/TSLA", json=BODY, headers=self.headers)

        self.assertEqual(res.status_code, 201, res.text)
        body = res.json()
        self.assertEqual(body["title"], BODY["title"])
        self.assertEqual(body["content"], BODY["content"])
        self.assertEqual(body["created_by"], "author")
        self.assertEqual(body["stock_id"], stock["id"])
        self.assertTrue(res.headers["Location"].endswith(f"/comment/{body['id']}"))
        self.assertEqual(self.fmp.calls, [])

    def test_symbol_lookup_is_case_insensitive(self):
        self.create_stock(symbol="TSLA")
        res = self.client.post("/comment/tsla", json=BODY, headers=self.headers)

        self.assertEqual(res.status_code, 201)
        self.assertEqual(self.count(Stock), 1)

    def test_unknown_symbol_resolved_remotely_is_persisted_once(self):
        res = self.client.post("/comment/AAPL", json=BODY, headers=self.headers)

        self.assertEqual(res.status_code, 201, res.text)
        self.assertEqual(self.fmp.calls, ["AAPL"])
        self.assertEqual(self.count(Stock), 1)
        self.assertEqual(self.count(Comment), 1)

        with self.SessionLocal() as db:
            stock = db.query(Stock).one()
            comment = db.query(Comment).one()
            author = db.query(User).filter(User.username == "author").one()
            self.assertEqual(stock.symbol, "AAPL")
            self.assertEqual(stock.company_name, "Apple Inc.")
            self.assertEqual(comment.stock_id, stock.id)
            self.assertEqual(comment.user_id, author.id)

        # Second comment reuses the stored stock.
        self.client.post("/comment/AAPL", json=BODY, headers=self.headers)
        self.assertEqual(self.fmp.calls, ["AAPL"])
        self.assertEqual(self.count(Stock), 1)

    def test_unknown_symbol_failing_lookup_creates_nothing(self):
        res = self.client.post("/comment/ZZZZ", json=BODY, headers=self.headers)

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["detail"], "Stock does not exist")
        self.assertEqual(self.count(Stock), 0)
        self.assertEqual(self.count(Comment), 0)

    def test_create_requires_authentication(self):
        self.create_stock(symbol="TSLA")
        res = self.client.post("/comment/TSLA", json=BODY)

        self.assertEqual(res.status_code, 401)
        self.assertEqual(self.count(Comment), 0)

    def test_short_fields_rejected(self):
        self.create_stock(symbol="TSLA")
        res = self.client.post("/comment/TSLA", json={"title": "hey", "content": "ok"}, headers=self.headers)

        self.assertEqual(res.status_code, 400)
        locs = [tuple(err["loc"]) for err in res.json()["detail"]]
        self.assertIn(("body", "title"), locs)
        self.assertIn(("body", "content"), locs)
        self.assertEqual(self.count(Comment), 0)


class TestCommentCrud(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.login_headers("author")
        self.tsla = self.create_stock(symbol="TSLA")
        self.msft = self.create_stock(symbol="MSFT", company_name="Microsoft")
        self.first = self._post("TSLA", "First comment", "Tesla thoughts")
        self.second = self._post("MSFT", "Second comment", "Microsoft thoughts")
        self.third = self._post("TSLA", "Third comment", "More Tesla")

    def _post(self, symbol, title, content):
        res = self.client.post(f"/comment/{symbol}", json={"title": title, "content": content}, headers=self.headers)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()

    def test_list_newest_first_by_default(self):
        ids = [c["id"] for c in self.client.get("/comment").json()]
        self.assertEqual(ids, [self.third["id"], self.second["id"], self.first["id"]])

    def test_list_ascending_and_filtered_by_symbol(self):
        res = self.client.get("/comment", params={"symbol": "tsla", "isDescending": "false"})
        self.assertEqual([c["id"] for c in res.json()], [self.first["id"], self.third["id"]])

    def test_get_by_id(self):
        res = self.client.get(f"/comment/{self.second['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["title"], "Second comment")
        self.assertEqual(res.json()["created_by"], "author")

    def test_update_changes_title_and_content(self):
        res = self.client.put(
            f"/comment/{self.first['id']}",
            json={"title": "Edited title", "content": "Edited content"},
        )
        self.assertEqual(res.status_code, 200, res.text)
        self.assertEqual(res.json()["title"], "Edited title")
        self.assertEqual(res.json()["stock_id"], self.tsla["id"])
        self.assertEqual(self.client.get(f"/comment/{self.first['id']}").json()["content"], "Edited content")

    def test_delete(self):
        self.assertEqual(self.client.delete(f"/comment/{self.first['id']}").status_code, 204)
        self.assertEqual(self.client.get(f"/comment/{self.first['id']}").status_code, 404)
        self.assertEqual(self.count(Comment), 2)

    def test_unknown_id_not_found_and_state_untouched(self):
        update = {"title": "Edited title", "content": "Edited content"}
        self.assertEqual(self.client.get("/comment/999").status_code, 404)
        self.assertEqual(self.client.put("/comment/999", json=update).status_code, 404)
        self.assertEqual(self.client.delete("/comment/999").status_code, 404)
        self.assertEqual(self.count(Comment), 3)

    def test_stock_representation_embeds_its_comments(self):
        stock = self.client.get(f"/stock/{self.tsla['id']}").json()
        self.assertEqual([c["id"] for c in stock["comments"]], [self.third["id"], self.first["id"]])

        listed = self.client.get("/stock", headers=self.headers).json()
        by_symbol = {s["symbol"]: s for s in listed}
        self.assertEqual(len(by_symbol["MSFT"]["comments"]), 1)
        self.assertEqual(len(by_symbol["TSLA"]["comments"]), 2)


if __name__ == "__main__":
    unittest.main()
