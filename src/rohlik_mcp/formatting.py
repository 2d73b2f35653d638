"""
Text rendering for Rohlik tool results.

The MCP client shows these strings to the user as-is, so they are plain text
with a few emoji markers and no markup.
"""

import json
from datetime import date
from typing import Any, Dict, List, Optional

from .models import OrderDetail, ProductStat
from .purchase_analysis import AggregationResult, group_by_category

RULE = "━" * 39

MEAL_EMOJIS = {
    "breakfast": "🍳",
    "lunch": "🍽️",
    "dinner": "🍴",
    "snack": "🍿",
    "baking": "🧁",
    "drinks": "🥤",
    "healthy": "🥗",
}


def format_date(value: Optional[date]) -> str:
    if value is None:
        return "Unknown date"
    return f"{value.month}/{value.day}/{value.year}"


def format_price(value: float) -> str:
    return f"{value:.2f} Kč" if value else "N/A"


def _brand(stat: ProductStat) -> str:
    return f" ({stat.brand})" if stat.brand else ""


def _frequent_line(stat: ProductStat, index: int) -> str:
    return (
        f"{index}. {stat.product_name}{_brand(stat)}\n"
        f"   📊 {stat.order_count}× orders • {stat.total_quantity} units"
        f" • 💰 {format_price(stat.average_price)}"
        f" • 📅 {format_date(stat.last_seen_date)} • 🆔 {stat.product_id}"
    )


def format_frequent_items(
    result: AggregationResult,
    top_items: int,
    show_categories: bool = True,
    items_per_category: int = 3,
) -> str:
    lines = [
        "🛒 YOUR FREQUENTLY PURCHASED ITEMS",
        RULE,
        f"📈 Analyzed {result.orders_analyzed} orders • {result.total_products} total items",
    ]
    if result.failed_orders:
        lines.append(f"⚠️ Skipped {len(result.failed_orders)} orders that could not be loaded")

    lines += ["", f"🏆 TOP {top_items} OVERALL:", ""]
    lines.append("\n\n".join(
        _frequent_line(stat, i) for i, stat in enumerate(result.items, 1)
    ))

    if show_categories:
        lines += ["", RULE, "📂 TOP ITEMS BY CATEGORY:"]
        for category, stats in group_by_category(result.ranked, items_per_category):
            lines += ["", f"▸ {category.upper()}"]
            for i, stat in enumerate(stats, 1):
                lines.append(f"   {i}. {stat.product_name}{_brand(stat)} ({stat.order_count}×)")

    lines += ["", RULE, "💡 Product IDs can be used with the add_to_cart tool"]
    return "\n".join(lines)


def format_meal_suggestions(
    result: AggregationResult,
    meal_type: str,
    categories: List[str],
    prefer_frequent: bool,
) -> str:
    emoji = MEAL_EMOJIS.get(meal_type, "🛒")
    shown = ", ".join(categories[:5]) + ("..." if len(categories) > 5 else "")
    heading = "🏆 TOP ITEMS YOU FREQUENTLY ORDER:" if prefer_frequent else "📦 SUGGESTED ITEMS:"

    entries = []
    for i, stat in enumerate(result.items, 1):
        category = f" • {stat.primary_category}" if stat.primary_category else ""
        entries.append(
            f"{i}. {stat.product_name}{_brand(stat)}{category}\n"
            f"   📊 Ordered {stat.order_count}× • 💰 {format_price(stat.average_price)}"
            f" • 🆔 {stat.product_id}"
        )

    return "\n".join([
        f"{emoji} {meal_type.upper()} SUGGESTIONS",
        RULE,
        f"📈 Analyzed {result.orders_analyzed} orders • Found {result.total_products} relevant items",
        f"🎯 Relevant categories: {shown}",
        "",
        heading,
        "",
        "\n\n".join(entries),
        "",
        RULE,
        "💡 Tips:",
        "   • Product IDs can be used with the add_to_cart tool",
        "   • Try different meal types: " + ", ".join(MEAL_EMOJIS),
    ])


def format_order_history(orders: List[Dict[str, Any]]) -> str:
    entries = []
    for i, order in enumerate(orders, 1):
        entries.append(
            f"{i}. {order.get('orderNumber') or order.get('id') or f'Order {i}'}\n"
            f"   Date: {order.get('deliveredAt') or order.get('createdAt') or 'Unknown date'}\n"
            f"   Total: {_amount(order.get('totalPrice') or order.get('price'))} CZK\n"
            f"   Status: {order.get('status') or 'Delivered'}"
        )
    return f"📋 ORDER HISTORY ({len(orders)} orders):\n\n" + "\n\n".join(entries)


def _amount(value: Any) -> str:
    if isinstance(value, dict):
        value = value.get("full") or value.get("amount")
    return str(value) if value else "Unknown price"


def format_order_detail(order: OrderDetail) -> str:
    total = f"{order.total_price:.2f}" if order.total_price else "Unknown price"
    products = []
    for i, item in enumerate(order.line_items, 1):
        brand = f" ({item.brand})" if item.brand else ""
        products.append(
            f"  {i}. {item.product_name or 'Unknown product'}{brand}\n"
            f"     Quantity: {item.quantity}\n"
            f"     Price: {item.unit_price or 0} CZK"
        )

    return "\n".join([
        f"📦 ORDER DETAILS - {order.order_id}",
        RULE,
        f"Delivery Date: {format_date(order.delivered_on)}",
        f"Status: {order.status or 'Unknown status'}",
        f"Total Price: {total} CZK",
        "",
        f"📋 PRODUCTS ({len(order.line_items)} items):",
        "\n\n".join(products),
    ])


def format_upcoming_orders(orders: List[Dict[str, Any]]) -> str:
    entries = []
    for i, order in enumerate(orders, 1):
        items = order.get("items")
        item_count = order.get("itemCount") or (len(items) if isinstance(items, list) else "Unknown")
        entries.append(
            f"{i}. {order.get('orderNumber') or order.get('id') or f'Order {i}'}\n"
            f"   Delivery: {order.get('deliveryDate') or order.get('scheduledAt') or 'Unknown date'}"
            f" {order.get('deliveryTime') or order.get('timeSlot') or 'Unknown time'}\n"
            f"   Total: {_amount(order.get('totalPrice') or order.get('price'))} CZK\n"
            f"   Items: {item_count}\n"
            f"   Status: {order.get('status') or 'Scheduled'}"
        )
    return f"📦 UPCOMING ORDERS ({len(orders)} orders):\n\n" + "\n\n".join(entries)


def format_search_results(products: List[Dict[str, Any]]) -> str:
    entries = [
        f"• {p['name']}\n  Product ID: {p['id']}\n  Brand: {p['brand']}\n"
        f"  Price: {p['price']}\n  Amount: {p['amount']}"
        for p in products
    ]
    return f"Found {len(products)} products:\n\n" + "\n\n".join(entries)


def format_cart(cart: Dict[str, Any]) -> str:
    if not cart["products"]:
        return "Your cart is empty."

    lines = [
        "🛒 CART CONTENT",
        f"Total items: {cart['total_items']}",
        f"Total price: {cart['total_price']} CZK",
        f"Can make order: {'Yes' if cart['can_make_order'] else 'No'}",
        "",
    ]
    for product in cart["products"]:
        brand = f" ({product['brand']})" if product["brand"] else ""
        lines.append(
            f"• {product['name']}{brand}\n"
            f"  Product ID: {product['id']} • Cart item ID: {product['cart_item_id']}\n"
            f"  Quantity: {product['quantity']} • Price: {product['price']} CZK"
        )
    return "\n".join(lines)


def format_shopping_list(shopping_list: Dict[str, Any]) -> str:
    products = shopping_list["products"]
    entries = []
    for product in products:
        name = product.get("productName") or product.get("name") or "Unknown product"
        product_id = product.get("productId") or product.get("id") or "?"
        entries.append(f"• {name} (ID: {product_id})")
    return (
        f"📝 SHOPPING LIST: {shopping_list['name']}\n"
        f"Products ({len(products)}):\n\n" + "\n".join(entries)
    )


def format_section(title: str, data: Any) -> str:
    if not data:
        return f"{title}: No data available"
    if isinstance(data, (dict, list)):
        return f"{title}:\n{json.dumps(data, indent=2, ensure_ascii=False)}"
    return f"{title}: {data}"


def format_delivery_info(data: Dict[str, Any]) -> str:
    sections = []
    next_delivery = data.get("nextAvailableDelivery")
    if next_delivery:
        sections.append(
            "🚚 NEXT AVAILABLE DELIVERY:\n"
            f"   Date: {next_delivery.get('date') or 'Not available'}\n"
            f"   Time: {next_delivery.get('time') or 'Not available'}"
        )
    if data.get("deliveryFee") is not None:
        sections.append(f"💰 DELIVERY FEE: {data['deliveryFee']} CZK")
    if data.get("minimumOrder") is not None:
        sections.append(f"📦 MINIMUM ORDER: {data['minimumOrder']} CZK")
    if data.get("deliveryArea"):
        sections.append(f"📍 DELIVERY AREA: {data['deliveryArea']}")

    if not sections:
        sections.append(format_section("🚚 DELIVERY INFO", data))
    return "\n\n".join(sections)


def format_account_data(account: Dict[str, Any]) -> str:
    sections = []
    cart = account.get("cart")
    if cart:
        sections.append(
            "🛒 CART SUMMARY:\n"
            f"• Total items: {cart['total_items']}\n"
            f"• Total price: {cart['total_price']} CZK\n"
            f"• Can order: {'Yes' if cart['can_make_order'] else 'No'}"
        )

    titles = [
        ("delivery", "🚚 DELIVERY INFO"),
        ("upcoming_orders", "📦 UPCOMING ORDERS"),
        ("last_order", "📋 LAST ORDER"),
        ("premium_profile", "⭐ PREMIUM PROFILE"),
        ("announcements", "📢 ANNOUNCEMENTS"),
        ("bags", "♻️ REUSABLE BAGS"),
    ]
    for key, title in titles:
        if key in account:
            sections.append(format_section(title, account[key]))

    return "\n\n".join(sections) if sections else "No account data available"


SHOPPING_SCENARIOS = f"""🛒 ROHLIK MCP - WHAT YOU CAN DO
{RULE}

1️⃣  MEAL-BASED SHOPPING
   💬 "Add breakfast items I typically order"
   💬 "I need dinner ingredients - suggest what I usually buy"
   🔧 Tool: get_meal_suggestions

2️⃣  QUICK REORDERING
   💬 "Show my 20 most frequently purchased items"
   💬 "What dairy products do I usually buy?"
   🔧 Tool: get_frequent_items

3️⃣  SPECIFIC PRODUCT SEARCH
   💬 "Find organic milk and add to cart"
   🔧 Tools: search_products + add_to_cart

4️⃣  ORDER MANAGEMENT
   💬 "What's in my cart?"
   💬 "Show my last 5 orders"
   💬 "Show details of order #1234567"
   🔧 Tools: get_cart_content, get_order_history, get_order_detail

5️⃣  DELIVERY PLANNING
   💬 "When is my next delivery?"
   💬 "What delivery slots are available tomorrow?"
   🔧 Tools: get_upcoming_orders, get_delivery_info, get_delivery_slots

6️⃣  ACCOUNT & SAVINGS
   💬 "How much have I saved with Premium?"
   💬 "Check my reusable bags count"
   🔧 Tools: get_premium_info, get_reusable_bags_info, get_account_data

{RULE}

🎯 MEAL TYPES AVAILABLE:
   • breakfast 🍳 - Morning essentials (bread, milk, cereals, fruits)
   • lunch 🍽️ - Midday meal ingredients (meat, vegetables, pasta, rice)
   • dinner 🍴 - Evening meal items (meat, fish, vegetables, sides)
   • snack 🍿 - Quick bites (sweets, fruits, nuts, yogurt)
   • baking 🧁 - Baking supplies (flour, sugar, chocolate, butter)
   • drinks 🥤 - Beverages (coffee, tea, juices, water, alcohol)
   • healthy 🥗 - Health-focused (bio, vegan, gluten-free, vegetables)

🚀 TRY IT NOW:
   Start with: "Show me breakfast suggestions based on what I usually order\""""
