"""
Account, delivery and help tools for Rohlik MCP server
"""

from typing import Dict, Any

from fastmcp import Context

from ..formatting import (
    SHOPPING_SCENARIOS,
    format_account_data,
    format_delivery_info,
    format_section,
)
from .shared import get_rohlik_client, report_error


def register_tools(mcp):
    """Register account-related tools with the FastMCP server"""

    @mcp.tool()
    async def get_delivery_info(ctx: Context = None) -> Dict[str, Any]:
        """
        Get current delivery information such as the next available delivery and fees.

        Returns:
            Dictionary containing delivery information
        """
        try:
            data = get_rohlik_client().get_delivery_info()
        except Exception as e:
            return await report_error(ctx, "Error getting delivery info", e)

        if not data:
            return {"success": True, "data": None, "summary": "No delivery information available."}
        summary = format_delivery_info(data) if isinstance(data, dict) else format_section("🚚 DELIVERY INFO", data)
        return {"success": True, "data": data, "summary": summary}

    @mcp.tool()
    async def get_delivery_slots(ctx: Context = None) -> Dict[str, Any]:
        """
        Get available delivery time slots for your address.

        Returns:
            Dictionary containing the available slots
        """
        try:
            data = get_rohlik_client().get_delivery_slots()
        except Exception as e:
            return await report_error(ctx, "Error getting delivery slots", e)

        return {
            "success": True,
            "data": data,
            "summary": format_section("⏰ DELIVERY SLOTS", data),
        }

    @mcp.tool()
    async def get_announcements(ctx: Context = None) -> Dict[str, Any]:
        """
        Get current announcements from Rohlik.

        Returns:
            Dictionary containing the announcements
        """
        try:
            data = get_rohlik_client().get_announcements()
        except Exception as e:
            return await report_error(ctx, "Error getting announcements", e)

        return {
            "success": True,
            "data": data,
            "summary": format_section("📢 ANNOUNCEMENTS", data),
        }

    @mcp.tool()
    async def get_premium_info(ctx: Context = None) -> Dict[str, Any]:
        """
        Get your Rohlik Premium subscription profile and savings.

        Returns:
            Dictionary containing the premium profile
        """
        try:
            data = get_rohlik_client().get_premium_profile()
        except Exception as e:
            return await report_error(ctx, "Error getting premium info", e)

        return {
            "success": True,
            "data": data,
            "summary": format_section("⭐ PREMIUM PROFILE", data),
        }

    @mcp.tool()
    async def get_reusable_bags_info(ctx: Context = None) -> Dict[str, Any]:
        """
        Get information about your reusable bags.

        Returns:
            Dictionary containing reusable bag counts
        """
        try:
            data = get_rohlik_client().get_reusable_bags()
        except Exception as e:
            return await report_error(ctx, "Error getting reusable bags info", e)

        return {
            "success": True,
            "data": data,
            "summary": format_section("♻️ REUSABLE BAGS", data),
        }

    @mcp.tool()
    async def get_account_data(ctx: Context = None) -> Dict[str, Any]:
        """
        Get an account overview: cart, delivery, orders, premium profile,
        announcements and reusable bags.

        Returns:
            Dictionary with one entry per section; sections that failed to load are None
        """
        try:
            if ctx:
                await ctx.info("Collecting account data")
            account = get_rohlik_client().get_account_data()
        except Exception as e:
            return await report_error(ctx, "Error getting account data", e)

        return {"success": True, **account, "summary": format_account_data(account)}

    @mcp.tool()
    async def get_shopping_scenarios() -> Dict[str, Any]:
        """
        Show example scenarios for what this server can do.

        Returns:
            Dictionary with the help text
        """
        return {"success": True, "summary": SHOPPING_SCENARIOS}
