"""Rohlik.cz grocery tools for MCP clients"""
