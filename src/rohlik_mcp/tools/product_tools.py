"""
Product search and shopping list tools for Rohlik MCP server
"""

from typing import Dict, Any

from fastmcp import Context

from ..formatting import format_search_results, format_shopping_list
from .shared import check_range, get_rohlik_client, report_error


def register_tools(mcp):
    """Register product tools with the FastMCP server"""

    @mcp.tool()
    async def search_products(
        product_name: str,
        limit: int = 10,
        favourite_only: bool = False,
        ctx: Context = None,
    ) -> Dict[str, Any]:
        """
        Search for products on Rohlik.cz by name.

        Sponsored results are left out.

        Args:
            product_name: The product name or search term
            limit: Maximum number of products to return (1-50, default: 10)
            favourite_only: Only return products marked as favourites (default: False)

        Returns:
            Dictionary containing matching products
        """
        try:
            if not product_name or not product_name.strip():
                raise ValueError("product_name must not be empty")
            check_range("limit", limit, 1, 50)

            if ctx:
                await ctx.info(f"Searching Rohlik for '{product_name}'")

            products = get_rohlik_client().search_products(product_name, limit, favourite_only)
        except Exception as e:
            return await report_error(ctx, "Error searching products", e)

        return {
            "success": True,
            "products": products,
            "count": len(products),
            "summary": format_search_results(products) if products else "No products found.",
        }

    @mcp.tool()
    async def get_shopping_list(shopping_list_id: str, ctx: Context = None) -> Dict[str, Any]:
        """
        Get a saved shopping list by its ID.

        Args:
            shopping_list_id: The ID of the shopping list

        Returns:
            Dictionary with the list name and its products
        """
        try:
            shopping_list = get_rohlik_client().get_shopping_list(shopping_list_id)
        except Exception as e:
            return await report_error(ctx, "Error getting shopping list", e)

        return {
            "success": True,
            **shopping_list,
            "summary": format_shopping_list(shopping_list),
        }
