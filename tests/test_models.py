"""
Tests for decoding raw Rohlik JSON into typed records
"""

from datetime import date

from rohlik_mcp.models import (
    decode_line_item,
    decode_order_detail,
    decode_order_listing,
    unwrap_list,
)


class TestDecodeOrderDetail:
    def test_prefers_delivered_at_over_created_at(self):
        order = decode_order_detail({
            "id": 7,
            "deliveredAt": "2025-01-15T10:30:00Z",
            "createdAt": "2025-01-10T08:00:00Z",
        })

        assert order.order_id == "7"
        assert order.delivered_on == date(2025, 1, 15)

    def test_falls_back_to_created_at(self):
        order = decode_order_detail({"orderNumber": "A1", "createdAt": "2025-01-10"})

        assert order.order_id == "A1"
        assert order.delivered_on == date(2025, 1, 10)

    def test_uses_requested_id_when_payload_has_none(self):
        order = decode_order_detail({"products": []}, "42")

        assert order.order_id == "42"
        assert order.delivered_on is None

    def test_products_then_items(self):
        with_products = decode_order_detail({"products": [{"productId": 1, "productName": "A"}]})
        with_items = decode_order_detail({"items": [{"id": 2, "name": "B"}]})

        assert with_products.line_items[0].product_id == "1"
        assert with_items.line_items[0].product_id == "2"
        assert with_items.line_items[0].product_name == "B"


class TestDecodeLineItem:
    def test_full_product(self):
        item = decode_line_item({
            "productId": 1001,
            "productName": "Miil Mléko",
            "brand": "Miil",
            "price": 21.9,
            "quantity": 3,
            "categories": [{"id": 10, "name": "Mléko a mléčné nápoje", "level": 1}],
        })

        assert item.product_id == "1001"
        assert item.unit_price == 21.9
        assert item.quantity == 3
        assert item.primary_category == "Mléko a mléčné nápoje"

    def test_defaults(self):
        item = decode_line_item({"productId": 5, "productName": "Bread"})

        assert item.brand == ""
        assert item.unit_price is None
        assert item.quantity == 1
        assert item.category_path == []

    def test_price_object_and_zero_price(self):
        assert decode_line_item({"price": {"full": 12.5, "currency": "CZK"}}).unit_price == 12.5
        assert decode_line_item({"price": 0}).unit_price is None

    def test_missing_id_is_invalid(self):
        item = decode_line_item({"productName": "Orphan"})

        assert item.product_id == ""
        assert not item.is_valid()


class TestDecodeOrderListing:
    def test_envelope_and_missing_ids(self):
        orders = decode_order_listing({"data": [{"id": 1}, {"orderNumber": "X2"}, {"status": "?"}]})

        assert [o.order_id for o in orders] == ["1", "X2"]

    def test_single_object_becomes_list(self):
        assert [o.order_id for o in decode_order_listing({"id": 3})] == ["3"]

    def test_empty_payloads(self):
        assert unwrap_list(None) == []
        assert unwrap_list([]) == []
        assert unwrap_list({}) == []
