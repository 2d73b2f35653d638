"""
Tests for the order, cart, product and account MCP tools
"""

from datetime import date
from unittest.mock import patch

import pytest

from rohlik_mcp import server
from rohlik_mcp.models import OrderDetail
from rohlik_mcp.rohlik_api import OrderNotFound, RohlikAPIError
from rohlik_mcp.tools import account_tools, cart_tools, order_tools, product_tools


class TestOrderTools:
    @pytest.mark.asyncio
    async def test_order_history(self, registered_tools, mock_api):
        tools = registered_tools(order_tools)
        mock_api.get_order_history.return_value = [
            {"id": 1, "orderNumber": "1001", "deliveredAt": "2025-01-15", "totalPrice": 540, "status": "DELIVERED"},
        ]

        with patch.object(order_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_order_history"](limit=5)

        mock_api.get_order_history.assert_called_once_with(5)
        assert result["count"] == 1
        assert "ORDER HISTORY (1 orders)" in result["summary"]
        assert "Total: 540 CZK" in result["summary"]

    @pytest.mark.asyncio
    async def test_order_history_limit_range(self, registered_tools):
        tools = registered_tools(order_tools)

        result = await tools["get_order_history"](limit=101)

        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_order_detail(self, registered_tools, mock_api, milk):
        tools = registered_tools(order_tools)
        mock_api.get_order_detail.return_value = OrderDetail(
            "1001", date(2025, 1, 15), [milk], total_price=540.0, status="DELIVERED"
        )

        with patch.object(order_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_order_detail"](order_id="1001")

        assert result["found"] is True
        assert result["delivered_on"] == "2025-01-15"
        assert result["products"][0]["category"] == "Mléko a mléčné nápoje"
        assert "ORDER DETAILS - 1001" in result["summary"]
        assert "Miil Mléko (Miil)" in result["summary"]

    @pytest.mark.asyncio
    async def test_order_detail_not_found_is_informational(self, registered_tools, mock_api):
        tools = registered_tools(order_tools)
        mock_api.get_order_detail.side_effect = OrderNotFound("999")

        with patch.object(order_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_order_detail"](order_id="999")

        assert result["success"] is True
        assert result["found"] is False
        assert "999 not found" in result["summary"]

    @pytest.mark.asyncio
    async def test_no_upcoming_orders(self, registered_tools, mock_api):
        tools = registered_tools(order_tools)
        mock_api.get_upcoming_orders.return_value = []

        with patch.object(order_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_upcoming_orders"]()

        assert result["summary"] == "No upcoming orders found."


class TestCartTools:
    @pytest.mark.asyncio
    async def test_add_to_cart_partial(self, registered_tools, mock_api):
        tools = registered_tools(cart_tools)
        mock_api.add_to_cart.return_value = [1001]

        with patch.object(cart_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["add_to_cart"](products=[
                {"product_id": 1001, "quantity": 2},
                {"product_id": 1002, "quantity": 1},
            ])

        assert result["success"] is True
        assert result["failed_product_ids"] == [1002]
        assert "Successfully added 1/2 products" in result["summary"]

    @pytest.mark.asyncio
    async def test_add_to_cart_rejects_zero_quantity(self, registered_tools):
        tools = registered_tools(cart_tools)

        result = await tools["add_to_cart"](products=[{"product_id": 1, "quantity": 0}])

        assert result["success"] is False
        assert "at least 1" in result["error"]

    @pytest.mark.asyncio
    async def test_empty_cart(self, registered_tools, mock_api):
        tools = registered_tools(cart_tools)
        mock_api.get_cart_content.return_value = {
            "total_price": 0, "total_items": 0, "can_make_order": False, "products": [],
        }

        with patch.object(cart_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_cart_content"]()

        assert result["summary"] == "Your cart is empty."

    @pytest.mark.asyncio
    async def test_remove_from_cart_failure(self, registered_tools, mock_api):
        tools = registered_tools(cart_tools)
        mock_api.remove_from_cart.return_value = False

        with patch.object(cart_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["remove_from_cart"](order_field_id="77")

        assert result["success"] is False


class TestProductTools:
    @pytest.mark.asyncio
    async def test_search_products(self, registered_tools, mock_api):
        tools = registered_tools(product_tools)
        mock_api.search_products.return_value = [
            {"id": 2, "name": "Milk", "price": "21.9 CZK", "brand": "Miil", "amount": "1 l"},
        ]

        with patch.object(product_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["search_products"](product_name="mléko", limit=5)

        mock_api.search_products.assert_called_once_with("mléko", 5, False)
        assert "Found 1 products" in result["summary"]

    @pytest.mark.asyncio
    async def test_search_requires_term(self, registered_tools):
        tools = registered_tools(product_tools)

        result = await tools["search_products"](product_name="  ")

        assert result["success"] is False


class TestAccountTools:
    @pytest.mark.asyncio
    async def test_account_data(self, registered_tools, mock_api):
        tools = registered_tools(account_tools)
        mock_api.get_account_data.return_value = {
            "cart": {"total_items": 2, "total_price": 99, "can_make_order": True, "products": []},
            "bags": None,
        }

        with patch.object(account_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_account_data"]()

        assert "CART SUMMARY" in result["summary"]
        assert "REUSABLE BAGS: No data available" in result["summary"]

    @pytest.mark.asyncio
    async def test_delivery_info_error(self, registered_tools, mock_api):
        tools = registered_tools(account_tools)
        mock_api.get_delivery_info.side_effect = RohlikAPIError("HTTP 503: Error", 503)

        with patch.object(account_tools, "get_rohlik_client", return_value=mock_api):
            result = await tools["get_delivery_info"]()

        assert result == {"success": False, "error": "HTTP 503: Error"}

    @pytest.mark.asyncio
    async def test_shopping_scenarios(self, registered_tools):
        tools = registered_tools(account_tools)

        result = await tools["get_shopping_scenarios"]()

        assert "get_meal_suggestions" in result["summary"]


class TestServer:
    def test_all_tools_registered(self):
        tools = {}

        def capture_tool():
            def decorator(func):
                tools[func.__name__] = func
                return func
            return decorator

        with patch.object(server, "FastMCP") as fastmcp:
            fastmcp.return_value.tool = capture_tool
            server.create_server()

        assert set(tools) == {
            "search_products", "get_shopping_list",
            "add_to_cart", "get_cart_content", "remove_from_cart",
            "get_order_history", "get_order_detail", "get_upcoming_orders",
            "get_frequent_items", "get_meal_suggestions",
            "get_delivery_info", "get_delivery_slots", "get_announcements",
            "get_premium_info", "get_reusable_bags_info", "get_account_data",
            "get_shopping_scenarios",
        }

    def test_missing_credentials(self):
        from rohlik_mcp.tools.shared import get_rohlik_client

        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match="ROHLIK_USERNAME"):
                get_rohlik_client()
