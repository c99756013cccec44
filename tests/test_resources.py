"""Tests for the sales order convenience operations."""

import json

import httpx
import pytest

from spire import OrderDeletionError, SalesOrderItem

from conftest import ROOT_URL, FakeSpire, json_body


class TestCreateSalesOrder:
    """Tests for SpireClient.create_sales_order."""

    def test_posts_payload(self, client_for, credentials):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        payload = {"customer": {"customerNo": "C0001"}, "items": []}
        page = client_for(handler).create_sales_order(credentials, payload)

        assert page.records == []
        assert seen[0].method == "POST"
        assert str(seen[0].url) == f"{ROOT_URL}/sales/orders"
        assert json_body(seen[0]) == payload


class TestDeleteSalesOrders:
    """Tests for SpireClient.delete_sales_orders."""

    def test_deletes_each_in_order(self, client_for, credentials):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        client_for(handler).delete_sales_orders(credentials, [101, 102, 103])

        assert [r.method for r in seen] == ["DELETE"] * 3
        assert [r.url.path.rsplit("/", 1)[-1] for r in seen] == ["101", "102", "103"]

    def test_stops_at_first_failure(self, client_for, credentials):
        seen = []

        def handler(request):
            seen.append(request)
            if request.url.path.endswith("/102"):
                return httpx.Response(409, text="order is invoiced")
            return httpx.Response(204)

        with pytest.raises(OrderDeletionError) as excinfo:
            client_for(handler).delete_sales_orders(credentials, [101, 102, 103])

        assert excinfo.value.order_id == 102
        assert "102" in str(excinfo.value)
        assert "order is invoiced" in str(excinfo.value)
        assert excinfo.value.__cause__.status_code == 409
        assert len(seen) == 2

    def test_no_ids(self, client_for, credentials):
        seen = []
        client_for(lambda request: seen.append(request)).delete_sales_orders(credentials, [])
        assert seen == []


class TestFetchSalesOrders:
    """Tests for SpireClient.fetch_sales_orders."""

    def test_passes_filter_through(self, client_for, credentials):
        backend = FakeSpire([{"id": 1}])
        orders = client_for(backend).fetch_sales_orders(credentials, {"status": "O"})

        assert orders == [{"id": 1}]
        assert backend.requests[0].url.path.endswith("/sales/orders")
        assert json.loads(backend.requests[0].url.params["filter"]) == {"status": "O"}


class TestFetchOrderItems:
    """Tests for SpireClient.fetch_order_items."""

    def test_builds_or_filter(self, client_for, credentials):
        backend = FakeSpire([{"id": 1, "orderNo": "00001"}, {"id": 2, "orderNo": "00002"}])
        items = client_for(backend).fetch_order_items(credentials, ["00001", "00002"])

        assert len(items) == 2
        request = backend.requests[0]
        assert request.url.path.endswith("/sales/items")
        assert json.loads(request.url.params["filter"]) == {
            "$or": [{"orderNo": "00001"}, {"orderNo": "00002"}]
        }

    def test_typed_items(self, client_for, credentials):
        backend = FakeSpire(
            [{"id": 5, "orderNo": "00001", "partNo": "NUT", "orderQty": 3}]
        )
        items = client_for(backend).fetch_order_items(
            credentials, ["00001"], record_type=SalesOrderItem
        )
        assert items[0].part_no == "NUT"
        assert items[0].order_qty == 3.0

    def test_no_orders_means_no_request(self, client_for, credentials):
        backend = FakeSpire([])
        assert client_for(backend).fetch_order_items(credentials, []) == []
        assert backend.requests == []
