"""
Purchase history analysis for Rohlik orders.

Folds historical order details into per-product statistics and ranks them,
either across all products (frequent items) or restricted to the categories
relevant to a meal type (meal suggestions).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import LineItem, OrderDetail, OrderSummary, ProductStat

logger = logging.getLogger(__name__)


# Rohlik category names considered relevant for each meal type
MEAL_CATEGORY_MAPPINGS: Dict[str, List[str]] = {
    "breakfast": [
        "Pekárna",
        "Mléko a mléčné nápoje",
        "Müsli a cereálie",
        "Džemy a pomazánky",
        "Ovoce",
        "Med",
        "Máslo a tuky",
        "Vejce",
    ],
    "lunch": [
        "Maso a drůbež",
        "Zelenina",
        "Přílohy",
        "Těstoviny",
        "Rýže",
        "Omáčky a dresinky",
        "Polévky",
        "Luštěniny",
    ],
    "dinner": [
        "Maso a drůbež",
        "Ryby a mořské plody",
        "Zelenina",
        "Přílohy",
        "Těstoviny",
        "Rýže",
        "Brambory",
        "Omáčky a dresinky",
    ],
    "snack": [
        "Sladkosti",
        "Ovoce",
        "Ořechy a semínka",
        "Jogurty",
        "Sýry",
        "Chipsy a krekry",
        "Tyčinky",
    ],
    "baking": [
        "Mouka a směsi",
        "Cukr a sladidla",
        "Pečení a vaření",
        "Čokoláda a kakao",
        "Ořechy a semínka",
        "Vejce",
        "Máslo a tuky",
        "Droždí a kypřidla",
    ],
    "drinks": [
        "Nápoje",
        "Káva",
        "Čaj",
        "Mléko a mléčné nápoje",
        "Džusy a smoothies",
        "Minerální vody",
        "Pivo",
        "Víno",
    ],
    "healthy": [
        "Bio produkty",
        "Zdravá výživa",
        "Bezlepkové",
        "Veganské",
        "Ovoce",
        "Zelenina",
        "Ořechy a semínka",
        "Luštěniny",
    ],
}

MEAL_TYPES: Tuple[str, ...] = tuple(MEAL_CATEGORY_MAPPINGS)

UNCATEGORIZED = "Uncategorized"

FetchDetail = Callable[[str], Optional[OrderDetail]]


class UnsupportedMealType(ValueError):
    """Raised for a meal type outside MEAL_CATEGORY_MAPPINGS"""

    def __init__(self, meal_type: str):
        self.meal_type = meal_type
        super().__init__(
            f"Unknown meal type: {meal_type}. Available types: {', '.join(MEAL_TYPES)}"
        )


class AggregationStatus(str, Enum):
    OK = "ok"
    NO_HISTORY = "no_history"
    NO_PRODUCTS = "no_products"


@dataclass
class AggregationResult:
    status: AggregationStatus
    items: List[ProductStat] = field(default_factory=list)
    ranked: List[ProductStat] = field(default_factory=list)
    orders_analyzed: int = 0
    failed_orders: List[str] = field(default_factory=list)

    @property
    def total_products(self) -> int:
        return len(self.ranked)

    @property
    def is_empty(self) -> bool:
        return self.status is not AggregationStatus.OK


def relevant_categories(meal_type: str) -> List[str]:
    """Return the category names for a meal type, or raise UnsupportedMealType"""
    categories = MEAL_CATEGORY_MAPPINGS.get((meal_type or "").strip().lower())
    if not categories:
        raise UnsupportedMealType(meal_type)
    return categories


def matches_categories(category_name: str, categories: Iterable[str]) -> bool:
    """Case-insensitive match in either direction of substring containment"""
    name = category_name.casefold()
    for candidate in categories:
        wanted = candidate.casefold()
        if wanted in name or name in wanted:
            return True
    return False


def _record(
    stats: Dict[str, ProductStat],
    seen_in_order: set,
    item: LineItem,
    order: OrderDetail,
) -> None:
    stat = stats.get(item.product_id)
    if stat is None:
        stat = ProductStat(
            product_id=item.product_id,
            product_name=item.product_name,
            brand=item.brand,
            primary_category=item.primary_category,
        )
        stats[item.product_id] = stat

    stat.total_quantity += item.quantity

    if order.delivered_on and (
        stat.last_seen_date is None or order.delivered_on > stat.last_seen_date
    ):
        stat.last_seen_date = order.delivered_on

    # Repeated lines of one order count as a single occurrence
    if item.product_id in seen_in_order:
        return
    seen_in_order.add(item.product_id)

    stat.order_count += 1
    price = item.unit_price or 0.0
    stat.average_price = (
        stat.average_price * (stat.order_count - 1) + price
    ) / stat.order_count


def _accumulate(
    orders: Sequence[OrderSummary],
    fetch_detail: FetchDetail,
    include: Callable[[LineItem], bool],
) -> Tuple[Dict[str, ProductStat], int, List[str]]:
    stats: Dict[str, ProductStat] = {}
    processed = 0
    failed: List[str] = []

    for summary in orders:
        try:
            detail = fetch_detail(summary.order_id)
        except Exception as e:
            logger.warning("Skipping order %s: %s", summary.order_id, e)
            failed.append(summary.order_id)
            continue

        if detail is None:
            logger.warning("Skipping order %s: no detail returned", summary.order_id)
            failed.append(summary.order_id)
            continue

        processed += 1
        seen_in_order: set = set()
        for item in detail.line_items:
            if not item.is_valid():
                logger.debug(
                    "Ignoring line item without id or name in order %s",
                    summary.order_id,
                )
                continue
            if not include(item):
                continue
            _record(stats, seen_in_order, item, detail)

    return stats, processed, failed


def _result(
    stats: Dict[str, ProductStat],
    processed: int,
    failed: List[str],
    limit: int,
    sort_key: Callable[[ProductStat], int],
) -> AggregationResult:
    if not stats:
        return AggregationResult(
            status=AggregationStatus.NO_PRODUCTS,
            orders_analyzed=processed,
            failed_orders=failed,
        )

    # sorted() is stable, dict order is first-seen order
    ranked = sorted(stats.values(), key=sort_key, reverse=True)
    return AggregationResult(
        status=AggregationStatus.OK,
        items=ranked[:limit],
        ranked=ranked,
        orders_analyzed=processed,
        failed_orders=failed,
    )


def _by_order_count(stat: ProductStat) -> int:
    return stat.order_count


def _by_total_quantity(stat: ProductStat) -> int:
    return stat.total_quantity


def aggregate(
    orders: Sequence[OrderSummary],
    limit: int = 10,
    *,
    fetch_detail: FetchDetail,
) -> AggregationResult:
    """
    Rank every product found in the given orders by how many orders contain it.

    Args:
        orders: Order handles in listing order
        limit: Maximum number of ranked products to return
        fetch_detail: Callable returning the OrderDetail for an order id.
            Orders whose fetch raises or returns None are skipped.

    Returns:
        AggregationResult; status is NO_HISTORY for an empty listing and
        NO_PRODUCTS when no valid line item survived
    """
    if not orders:
        return AggregationResult(status=AggregationStatus.NO_HISTORY)

    stats, processed, failed = _accumulate(orders, fetch_detail, lambda item: True)
    return _result(stats, processed, failed, limit, _by_order_count)


def suggest(
    orders: Sequence[OrderSummary],
    meal_type: str,
    item_count: int = 10,
    orders_to_analyze: int = 20,
    prefer_frequent: bool = True,
    *,
    fetch_detail: FetchDetail,
) -> AggregationResult:
    """
    Rank products from the categories relevant to a meal type.

    Raises UnsupportedMealType before touching fetch_detail when the meal
    type is unknown. With prefer_frequent the ranking is by order count,
    otherwise by total quantity bought.
    """
    categories = relevant_categories(meal_type)

    if not orders:
        return AggregationResult(status=AggregationStatus.NO_HISTORY)

    stats, processed, failed = _accumulate(
        list(orders)[:orders_to_analyze],
        fetch_detail,
        lambda item: matches_categories(item.primary_category, categories),
    )
    sort_key = _by_order_count if prefer_frequent else _by_total_quantity
    return _result(stats, processed, failed, item_count, sort_key)


def group_by_category(
    ranked: Sequence[ProductStat], per_category: int = 3
) -> List[Tuple[str, List[ProductStat]]]:
    """
    Partition ranked products by primary category.

    Each group keeps the incoming rank order and is cut to per_category.
    Groups are ordered by their summed order count, ties by first appearance.
    """
    groups: Dict[str, List[ProductStat]] = {}
    for stat in ranked:
        groups.setdefault(stat.primary_category or UNCATEGORIZED, []).append(stat)

    ordered = sorted(
        groups.items(),
        key=lambda entry: sum(stat.order_count for stat in entry[1]),
        reverse=True,
    )
    return [(name, stats[:per_category]) for name, stats in ordered]
