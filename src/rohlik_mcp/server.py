"""
Rohlik MCP server entry point.

Builds the FastMCP server, registers every tool module and runs it over
stdio (default) or streamable HTTP.
"""

import logging
import sys

from fastmcp import FastMCP

from . import config
from .tools import (
    account_tools,
    cart_tools,
    order_tools,
    product_tools,
    purchase_history_tools,
)

logger = logging.getLogger(__name__)

TOOL_MODULES = (
    product_tools,
    cart_tools,
    order_tools,
    purchase_history_tools,
    account_tools,
)


def create_server() -> FastMCP:
    """Create the FastMCP server with all Rohlik tools registered"""
    mcp = FastMCP(
        name="rohlik-mcp",
        instructions=(
            "Tools for shopping on Rohlik.cz: search products, manage the cart, "
            "browse order history and get suggestions based on past purchases."
        ),
    )
    for module in TOOL_MODULES:
        module.register_tools(mcp)
    return mcp


def main():
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=config.LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mcp = create_server()

    if config.MCP_TRANSPORT == "http":
        logger.info("Rohlik MCP server running on http://%s:%s", config.MCP_HOST, config.MCP_PORT)
        mcp.run(transport="http", host=config.MCP_HOST, port=config.MCP_PORT)
    elif config.MCP_TRANSPORT == "stdio":
        logger.info("Rohlik MCP server running on stdio")
        mcp.run()
    else:
        raise SystemExit(
            f"Unsupported ROHLIK_MCP_TRANSPORT '{config.MCP_TRANSPORT}' (use stdio or http)"
        )


if __name__ == "__main__":
    main()
