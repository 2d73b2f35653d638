"""
Shared fixtures: order details built the way the Rohlik API returns them
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from rohlik_mcp.models import CategoryRef, LineItem, OrderDetail, OrderSummary


def make_item(product_id, name, category="Test Category", price=50.0, quantity=1, brand="Test Brand"):
    return LineItem(
        product_id=product_id,
        product_name=name,
        brand=brand,
        unit_price=price,
        quantity=quantity,
        category_path=[CategoryRef(name=category, level=1)] if category else [],
    )


@pytest.fixture
def milk():
    return make_item("1001", "Miil Mléko", "Mléko a mléčné nápoje", 21.90, brand="Miil")


@pytest.fixture
def bread():
    return make_item("1002", "Rohlíky", "Pekárna", 8.90, brand="Rohlík")


@pytest.fixture
def cheese():
    return make_item("1003", "Eidam", "Sýry", 55.00, brand="Madeta")


@pytest.fixture
def repeated_orders(milk, bread, cheese):
    """Milk in all four orders, bread in orders 1-2, cheese in orders 2-3"""
    return {
        "order1": OrderDetail("order1", date(2025, 1, 1), [milk, bread]),
        "order2": OrderDetail("order2", date(2025, 1, 5), [milk, bread, cheese]),
        "order3": OrderDetail("order3", date(2025, 1, 10), [milk, cheese]),
        "order4": OrderDetail("order4", date(2025, 1, 15), [milk]),
    }


@pytest.fixture
def summaries():
    def build(*order_ids):
        return [OrderSummary(order_id) for order_id in order_ids]
    return build


@pytest.fixture
def mock_api():
    """A stand-in RohlikAPI whose session() works as a context manager"""
    api = MagicMock()
    api.session.return_value.__enter__.return_value = api
    return api


@pytest.fixture
def registered_tools():
    """Register a tool module against a fake MCP server and return its tools by name"""
    def register(module):
        mock_mcp = MagicMock()
        tools = {}

        def capture_tool():
            def decorator(func):
                tools[func.__name__] = func
                return func
            return decorator

        mock_mcp.tool = capture_tool
        module.register_tools(mock_mcp)
        return tools
    return register
