"""
Typed records for Rohlik order history and the decode step from raw API JSON.

The Rohlik endpoints are loosely shaped: the same field can live under
different keys depending on the endpoint version. The decoders below turn a
raw payload into fixed records, checking fallback keys in a fixed order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional


@dataclass
class CategoryRef:
    name: str
    level: Optional[int] = None


@dataclass
class LineItem:
    product_id: str
    product_name: str
    brand: str = ""
    unit_price: Optional[float] = None
    quantity: int = 1
    category_path: List[CategoryRef] = field(default_factory=list)

    def is_valid(self) -> bool:
        """A line item needs both an id and a name to be aggregated"""
        return bool(self.product_id.strip()) and bool(self.product_name.strip())

    @property
    def primary_category(self) -> str:
        """First level-1 category, else the first category, else empty"""
        for category in self.category_path:
            if category.level == 1:
                return category.name
        if self.category_path:
            return self.category_path[0].name
        return ""


@dataclass
class OrderSummary:
    order_id: str


@dataclass
class OrderDetail:
    order_id: str
    delivered_on: Optional[date] = None
    line_items: List[LineItem] = field(default_factory=list)
    total_price: Optional[float] = None
    status: str = ""


@dataclass
class ProductStat:
    product_id: str
    product_name: str
    brand: str = ""
    order_count: int = 0
    total_quantity: int = 0
    average_price: float = 0.0
    last_seen_date: Optional[date] = None
    primary_category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "brand": self.brand,
            "order_count": self.order_count,
            "total_quantity": self.total_quantity,
            "average_price": round(self.average_price, 2),
            "last_seen_date": self.last_seen_date.isoformat() if self.last_seen_date else None,
            "primary_category": self.primary_category,
        }


def _first(data: Dict[str, Any], *keys: str) -> Any:
    """Return the first truthy value among keys, in order"""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        # fromisoformat() rejects a trailing "Z" before Python 3.11
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _parse_price(value: Any) -> Optional[float]:
    if isinstance(value, dict):
        value = _first(value, "full", "amount")
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_quantity(value: Any) -> int:
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity > 0 else 1


def decode_category(raw: Dict[str, Any]) -> CategoryRef:
    level = raw.get("level")
    return CategoryRef(
        name=str(raw.get("name") or ""),
        level=int(level) if isinstance(level, (int, float)) else None,
    )


def decode_line_item(raw: Dict[str, Any]) -> LineItem:
    """Decode a product entry of an order detail.

    Fallbacks: productId then id, productName then name. Price and zero
    price are both treated as "no price".
    """
    product_id = _first(raw, "productId", "id")
    product_name = _first(raw, "productName", "name")
    categories = raw.get("categories") or []

    return LineItem(
        product_id=str(product_id) if product_id is not None else "",
        product_name=str(product_name) if product_name is not None else "",
        brand=str(raw.get("brand") or ""),
        unit_price=_parse_price(raw.get("price")),
        quantity=_parse_quantity(raw.get("quantity")),
        category_path=[decode_category(c) for c in categories if isinstance(c, dict)],
    )


def decode_order_summary(raw: Dict[str, Any]) -> Optional[OrderSummary]:
    """Decode an order listing entry; entries without any id yield None"""
    order_id = _first(raw, "id", "orderNumber")
    if order_id is None:
        return None
    return OrderSummary(order_id=str(order_id))


def decode_order_detail(raw: Dict[str, Any], order_id: str = "") -> OrderDetail:
    """Decode a full order.

    Fallbacks: id then orderNumber (then the requested id), deliveredAt then
    createdAt, products then items.
    """
    resolved_id = _first(raw, "id", "orderNumber") or order_id
    products = _first(raw, "products", "items") or []

    return OrderDetail(
        order_id=str(resolved_id),
        delivered_on=_parse_date(_first(raw, "deliveredAt", "createdAt")),
        line_items=[decode_line_item(p) for p in products if isinstance(p, dict)],
        total_price=_parse_price(_first(raw, "totalPrice", "price")),
        status=str(raw.get("status") or ""),
    )


def unwrap_list(payload: Any) -> List[Dict[str, Any]]:
    """Normalize a listing payload into a list of dicts.

    Accepts a bare list, a {"data": [...]} envelope, or a single object.
    """
    if payload is None:
        return []
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    if isinstance(payload, dict):
        return [payload] if payload else []
    if isinstance(payload, list):
        return [entry for entry in payload if isinstance(entry, dict)]
    return []


def decode_order_listing(payload: Any) -> List[OrderSummary]:
    summaries = []
    for raw in unwrap_list(payload):
        summary = decode_order_summary(raw)
        if summary is not None:
            summaries.append(summary)
    return summaries
