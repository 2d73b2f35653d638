"""
Tools package for Rohlik MCP server

This package contains all the tool modules organized by functionality:
- product_tools: Product search and shopping lists
- cart_tools: Shopping cart management (add, view, remove)
- order_tools: Delivered, detailed and upcoming orders
- purchase_history_tools: Frequent items and meal suggestions from past orders
- account_tools: Delivery, premium, announcements, reusable bags and help
- shared: Common utilities and client creation

Every tool opens a single Rohlik session for the whole call: purchase
history analysis fetches the order listing and every order detail inside
one login/logout pair.
"""
