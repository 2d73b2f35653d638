"""
Common helpers shared by the Rohlik MCP tool modules
"""

from typing import Any, Dict

from fastmcp import Context

from .. import config
from ..rohlik_api import RohlikAPI


def get_rohlik_client() -> RohlikAPI:
    """Create a Rohlik client from the environment credentials.

    A fresh client per tool call keeps cookies from leaking between calls.
    """
    username, password = config.get_credentials()
    return RohlikAPI(username, password)


def check_range(name: str, value: int, minimum: int, maximum: int) -> None:
    if not minimum <= value <= maximum:
        raise ValueError(f"{name} must be between {minimum} and {maximum} (got {value})")


async def report_error(ctx: Context, message: str, error: Exception) -> Dict[str, Any]:
    if ctx:
        await ctx.error(f"{message}: {error}")
    return {
        "success": False,
        "error": str(error),
    }
