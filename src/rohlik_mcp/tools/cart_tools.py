"""
Rohlik cart tools - add, view and remove cart items
"""

from typing import Dict, Any, List

from fastmcp import Context

from ..formatting import format_cart
from .shared import get_rohlik_client, report_error


def _validate_products(products: List[Dict[str, Any]]) -> List[Dict[str, int]]:
    if not products:
        raise ValueError("At least one product is required")

    validated = []
    for product in products:
        product_id = product.get("product_id")
        quantity = product.get("quantity", 1)
        if product_id is None:
            raise ValueError(f"Missing product_id in {product}")
        if int(quantity) < 1:
            raise ValueError(f"Quantity for product {product_id} must be at least 1")
        validated.append({"product_id": int(product_id), "quantity": int(quantity)})
    return validated


def register_tools(mcp):
    """Register cart tools with the FastMCP server"""

    @mcp.tool()
    async def add_to_cart(
        products: List[Dict[str, int]],
        ctx: Context = None,
    ) -> Dict[str, Any]:
        """
        Add products to the Rohlik shopping cart.

        Args:
            products: List of {"product_id": int, "quantity": int} entries

        Returns:
            Dictionary with the product IDs that were added
        """
        try:
            items = _validate_products(products)
            if ctx:
                await ctx.info(f"Adding {len(items)} products to cart")

            added = get_rohlik_client().add_to_cart(items)
        except Exception as e:
            return await report_error(ctx, "Error adding to cart", e)

        summary = f"Successfully added {len(added)}/{len(items)} products to cart.\n"
        if added:
            summary += f"Added product IDs: {', '.join(str(i) for i in added)}"
        else:
            summary += "No products were added."

        return {
            "success": bool(added),
            "added_product_ids": added,
            "failed_product_ids": [i["product_id"] for i in items if i["product_id"] not in added],
            "summary": summary,
        }

    @mcp.tool()
    async def get_cart_content(ctx: Context = None) -> Dict[str, Any]:
        """
        Get the current contents of the Rohlik shopping cart.

        Returns:
            Dictionary with cart totals and items
        """
        try:
            cart = get_rohlik_client().get_cart_content()
        except Exception as e:
            return await report_error(ctx, "Error getting cart content", e)

        return {"success": True, **cart, "summary": format_cart(cart)}

    @mcp.tool()
    async def remove_from_cart(order_field_id: str, ctx: Context = None) -> Dict[str, Any]:
        """
        Remove an item from the Rohlik shopping cart.

        Args:
            order_field_id: The cart item ID (cart_item_id from get_cart_content)

        Returns:
            Dictionary indicating whether the item was removed
        """
        try:
            removed = get_rohlik_client().remove_from_cart(order_field_id)
        except Exception as e:
            return await report_error(ctx, "Error removing from cart", e)

        if not removed:
            return {
                "success": False,
                "error": f"Failed to remove item {order_field_id} from cart",
            }
        return {
            "success": True,
            "order_field_id": order_field_id,
            "summary": f"Removed item {order_field_id} from cart.",
        }
