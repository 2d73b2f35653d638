"""
Order history and order detail tools for Rohlik MCP server
"""

from typing import Dict, Any

from fastmcp import Context

from ..formatting import format_order_detail, format_order_history, format_upcoming_orders
from ..rohlik_api import OrderNotFound
from .shared import check_range, get_rohlik_client, report_error


def register_tools(mcp):
    """Register order tools with the FastMCP server"""

    @mcp.tool()
    async def get_order_history(limit: int = 10, ctx: Context = None) -> Dict[str, Any]:
        """
        Get your past delivered orders.

        Args:
            limit: Maximum number of orders to return (1-100, default: 10)

        Returns:
            Dictionary containing the delivered orders
        """
        try:
            check_range("limit", limit, 1, 100)
            if ctx:
                await ctx.info(f"Fetching the last {limit} delivered orders")

            orders = get_rohlik_client().get_order_history(limit)
        except Exception as e:
            return await report_error(ctx, "Error getting order history", e)

        return {
            "success": True,
            "orders": orders,
            "count": len(orders),
            "summary": format_order_history(orders) if orders else "No order history found.",
        }

    @mcp.tool()
    async def get_order_detail(order_id: str, ctx: Context = None) -> Dict[str, Any]:
        """
        Get detailed information about a specific order, including all products.

        Args:
            order_id: The order ID to fetch details for

        Returns:
            Dictionary containing the order and its products
        """
        try:
            if ctx:
                await ctx.info(f"Fetching order {order_id}")
            order = get_rohlik_client().get_order_detail(order_id)
        except OrderNotFound as e:
            return {
                "success": True,
                "found": False,
                "order_id": order_id,
                "summary": str(e),
            }
        except Exception as e:
            return await report_error(ctx, "Error getting order detail", e)

        return {
            "success": True,
            "found": True,
            "order_id": order.order_id,
            "delivered_on": order.delivered_on.isoformat() if order.delivered_on else None,
            "status": order.status,
            "total_price": order.total_price,
            "products": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "brand": item.brand,
                    "quantity": item.quantity,
                    "price": item.unit_price,
                    "category": item.primary_category,
                }
                for item in order.line_items
            ],
            "summary": format_order_detail(order),
        }

    @mcp.tool()
    async def get_upcoming_orders(ctx: Context = None) -> Dict[str, Any]:
        """
        Get your scheduled upcoming orders.

        Returns:
            Dictionary containing the upcoming orders
        """
        try:
            orders = get_rohlik_client().get_upcoming_orders()
        except Exception as e:
            return await report_error(ctx, "Error getting upcoming orders", e)

        return {
            "success": True,
            "orders": orders,
            "count": len(orders),
            "summary": format_upcoming_orders(orders) if orders else "No upcoming orders found.",
        }
