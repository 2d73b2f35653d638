"""
Environment-driven settings for the Rohlik MCP server
"""

import os
from typing import Tuple


ROHLIK_BASE_URL = os.getenv("ROHLIK_BASE_URL", "https://www.rohlik.cz")
ROHLIK_TIMEOUT = float(os.getenv("ROHLIK_TIMEOUT", "30"))

# Transport: "stdio" for local pipe clients, "http" for streamable HTTP
MCP_TRANSPORT = os.getenv("ROHLIK_MCP_TRANSPORT", "stdio").lower()
MCP_HOST = os.getenv("ROHLIK_MCP_HOST", "127.0.0.1")
MCP_PORT = int(os.getenv("ROHLIK_MCP_PORT", "8000"))

LOG_LEVEL = os.getenv("ROHLIK_LOG_LEVEL", "INFO").upper()


def get_credentials() -> Tuple[str, str]:
    """Read the Rohlik account credentials from the environment"""
    username = os.getenv("ROHLIK_USERNAME")
    password = os.getenv("ROHLIK_PASSWORD")

    if not username or not password:
        raise ValueError(
            "ROHLIK_USERNAME and ROHLIK_PASSWORD environment variables are required"
        )

    return username, password
