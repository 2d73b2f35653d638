"""
Purchase history tools for Rohlik MCP server
"""

from typing import Dict, Any

from fastmcp import Context

from ..formatting import format_frequent_items, format_meal_suggestions
from ..purchase_analysis import (
    MEAL_TYPES,
    AggregationResult,
    AggregationStatus,
    UnsupportedMealType,
    aggregate,
    group_by_category,
    relevant_categories,
    suggest,
)
from .shared import check_range, get_rohlik_client, report_error


NO_HISTORY_MESSAGE = "No order history found. I need your past orders to make personalized suggestions."


def _result_fields(result: AggregationResult) -> Dict[str, Any]:
    return {
        "success": True,
        "status": result.status.value,
        "orders_analyzed": result.orders_analyzed,
        "failed_orders": result.failed_orders,
        "total_products": result.total_products,
        "items": [stat.to_dict() for stat in result.items],
    }


def register_tools(mcp):
    """Register purchase history tools with the FastMCP server"""

    @mcp.tool()
    async def get_frequent_items(
        orders_to_analyze: int = 20,
        top_items: int = 10,
        show_categories: bool = True,
        items_per_category: int = 3,
        ctx: Context = None,
    ) -> Dict[str, Any]:
        """
        Find the products you buy most often across your recent Rohlik orders.

        Args:
            orders_to_analyze: Number of recent orders to analyze (1-100, default: 20)
            top_items: Number of top items to return (1-50, default: 10)
            show_categories: Also group the top items by category (default: True)
            items_per_category: Items shown per category group (1-10, default: 3)

        Returns:
            Dictionary with ranked product statistics and a text summary
        """
        try:
            check_range("orders_to_analyze", orders_to_analyze, 1, 100)
            check_range("top_items", top_items, 1, 50)
            check_range("items_per_category", items_per_category, 1, 10)

            if ctx:
                await ctx.info(f"Analyzing the last {orders_to_analyze} orders")

            api = get_rohlik_client()
            with api.session():
                orders = api.list_recent_orders(orders_to_analyze)
                result = aggregate(orders, top_items, fetch_detail=api.get_order_detail)

        except Exception as e:
            return await report_error(ctx, "Error analyzing purchase history", e)

        fields = _result_fields(result)

        if result.status is AggregationStatus.NO_HISTORY:
            fields["summary"] = NO_HISTORY_MESSAGE
            return fields

        if result.status is AggregationStatus.NO_PRODUCTS:
            fields["summary"] = f"Analyzed {result.orders_analyzed} orders but found no products."
            return fields

        if ctx:
            await ctx.info(
                f"Found {result.total_products} products in {result.orders_analyzed} orders"
            )

        if show_categories:
            fields["categories"] = {
                name: [stat.product_id for stat in stats]
                for name, stats in group_by_category(result.ranked, items_per_category)
            }
        fields["summary"] = format_frequent_items(
            result, top_items, show_categories, items_per_category
        )
        return fields

    @mcp.tool()
    async def get_meal_suggestions(
        meal_type: str,
        items_count: int = 10,
        orders_to_analyze: int = 20,
        prefer_frequent: bool = True,
        ctx: Context = None,
    ) -> Dict[str, Any]:
        """
        Get shopping suggestions for a meal type based on your purchase history.

        Args:
            meal_type: One of breakfast, lunch, dinner, snack, baking, drinks, healthy
            items_count: Number of items to suggest (3-30, default: 10)
            orders_to_analyze: Number of recent orders to analyze (5-100, default: 20)
            prefer_frequent: Rank by how often items were ordered (True) or by
                total quantity bought (False). Default: True

        Returns:
            Dictionary with suggested products and a text summary
        """
        try:
            categories = relevant_categories(meal_type)
        except UnsupportedMealType as e:
            result = await report_error(ctx, "Unsupported meal type", e)
            result["meal_types"] = list(MEAL_TYPES)
            return result

        meal_type = meal_type.strip().lower()

        try:
            check_range("items_count", items_count, 3, 30)
            check_range("orders_to_analyze", orders_to_analyze, 5, 100)

            if ctx:
                await ctx.info(f"Looking for {meal_type} items in {orders_to_analyze} orders")

            api = get_rohlik_client()
            with api.session():
                orders = api.list_recent_orders(orders_to_analyze)
                result = suggest(
                    orders,
                    meal_type,
                    item_count=items_count,
                    orders_to_analyze=orders_to_analyze,
                    prefer_frequent=prefer_frequent,
                    fetch_detail=api.get_order_detail,
                )

        except Exception as e:
            return await report_error(ctx, "Error building meal suggestions", e)

        fields = _result_fields(result)
        fields["meal_type"] = meal_type
        fields["relevant_categories"] = categories

        if result.status is AggregationStatus.NO_HISTORY:
            fields["summary"] = NO_HISTORY_MESSAGE
        elif result.status is AggregationStatus.NO_PRODUCTS:
            fields["summary"] = (
                f"No items found for {meal_type} in your order history. Try a different "
                "meal type or check if you have enough order history."
            )
        else:
            fields["summary"] = format_meal_suggestions(
                result, meal_type, categories, prefer_frequent
            )
        return fields
