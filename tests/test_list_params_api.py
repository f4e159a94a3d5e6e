import unittest
from unittest.mock import patch

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from querykit.api.deps import get_list_params
from querykit.core.config import settings
from querykit.core.errors import install_error_handlers
from querykit.schemas.query import ListParams
from querykit.services.ordering import compile_order
from querykit.services.pagination import slice_page
from querykit.services.predicates import Combinator, compile_predicates, evaluate

ROWS = [
    {"name": "acme", "description": "widget company", "version": "v1.0"},
    {"name": "globex", "description": "gadget factory", "version": "v2.1"},
    {"name": "initech", "description": "widget reseller", "version": "v1.9"},
]
ALLOW_LIST = {"name": "name", "description": "description", "version": "version", "secret": ""}


def _build_app() -> FastAPI:
    app = FastAPI()
    install_error_handlers(app)

    @app.get("/params")
    def echo_params(params: ListParams = Depends(get_list_params)):
        return params.model_dump()

    @app.get("/companies")
    def list_companies(params: ListParams = Depends(get_list_params)):
        predicates = compile_predicates(params.filters, ALLOW_LIST)
        directives = compile_order(params.order_by, ALLOW_LIST)
        rows = [r for r in ROWS if evaluate(predicates, r, combinator=Combinator.OR)]
        for directive in reversed(directives):
            rows.sort(key=lambda r: r[directive.column], reverse=directive.descending)
        return {"rows": slice_page(rows, params.page_size, params.offset), "total": len(rows)}

    return app


class ListParamsApiTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(_build_app())

    def tearDown(self):
        self.client.close()

    def test_defaults(self):
        response = self.client.get("/params")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["filters"], [])
        self.assertEqual(body["order_by"], [])
        self.assertEqual(body["page_size"], settings.DEFAULT_PAGE_SIZE)
        self.assertEqual(body["offset"], 0)

    def test_query_parameters_are_parsed(self):
        response = self.client.get(
            "/params",
            params={"filter": "name=acme OR description=widget company", "orderBy": "name desc", "pageSize": 5, "offset": 5},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(
            body["filters"],
            [{"name": "name", "value": "acme"}, {"name": "description", "value": "widget company"}],
        )
        self.assertEqual(body["order_by"], [{"name": "name", "descending": True}])
        self.assertEqual((body["page_size"], body["offset"]), (5, 5))

    def test_malformed_filter_is_400(self):
        response = self.client.get("/params", params={"filter": "name=acme OR"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("invalid filter request", response.json()["detail"])

    def test_malformed_order_is_400(self):
        response = self.client.get("/params", params={"orderBy": "name sideways"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("invalid order by", response.json()["detail"])

    def test_oversized_parameters_are_400(self):
        response = self.client.get("/params", params={"pageSize": settings.MAX_PAGE_SIZE + 1})
        self.assertEqual(response.status_code, 400)
        response = self.client.get("/params", params={"filter": "name=" + "x" * settings.MAX_FILTER_LENGTH})
        self.assertEqual(response.status_code, 400)

    def test_page_size_zero_cannot_bypass_cap(self):
        for page_size in (0, -1):
            with self.subTest(page_size=page_size):
                response = self.client.get("/params", params={"pageSize": page_size})
                self.assertEqual(response.status_code, 400)
                self.assertIn("pageSize", response.json()["detail"])

    def test_page_size_zero_allowed_without_cap(self):
        with patch.object(settings, "MAX_PAGE_SIZE", 0):
            response = self.client.get("/params", params={"pageSize": 0})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["page_size"], 0)

    def test_filtered_sorted_page(self):
        response = self.client.get(
            "/companies",
            params={"filter": "description=WIDGET OR version=v2*", "orderBy": "name desc", "pageSize": 2},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total"], 3)
        self.assertEqual([r["name"] for r in body["rows"]], ["initech", "globex"])

    def test_disallowed_field_maps_to_400(self):
        with self.assertLogs("querykit.http", level="INFO") as captured:
            response = self.client.get("/companies", params={"filter": "secret=x"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": "filter: cannot use attribute: secret"})
        self.assertTrue(any("operation=filter" in line for line in captured.output))

    def test_unknown_order_field_maps_to_400(self):
        response = self.client.get("/companies", params={"orderBy": "founded"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": "orderBy: no such attribute: founded"})


if __name__ == "__main__":
    unittest.main()
