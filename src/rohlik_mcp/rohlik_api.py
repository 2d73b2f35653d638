"""
HTTP client for the Rohlik.cz frontend API.

Rohlik has no public API; these are the endpoints the web shop itself calls.
Every call needs a logged-in session cookie, so calls are made inside a
scoped session:

    api = RohlikAPI(username, password)
    with api.session():
        orders = api.list_recent_orders(20)
        detail = api.get_order_detail(orders[0].order_id)

Each public method also opens its own session when called outside one, so a
single call works on its own.
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import requests

from . import config
from .models import OrderDetail, OrderSummary, decode_order_detail, decode_order_listing, unwrap_list

logger = logging.getLogger(__name__)


class RohlikAPIError(Exception):
    """An HTTP call to Rohlik failed"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class StoreUnavailable(RohlikAPIError):
    """The session could not be established"""


class OrderNotFound(RohlikAPIError):
    def __init__(self, order_id: str):
        super().__init__(f"Order with ID {order_id} not found.", 404)
        self.order_id = order_id


def _unwrap(payload: Any) -> Any:
    """Strip the {"status", "data", "messages"} envelope when present"""
    if isinstance(payload, dict) and payload.get("data") is not None:
        return payload["data"]
    return payload


class RohlikAPI:
    USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = None,
        timeout: float = None,
        http: requests.Session = None,
    ):
        self.username = username
        self.password = password
        self.base_url = (base_url or config.ROHLIK_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.ROHLIK_TIMEOUT
        self.http = http or requests.Session()
        self.http.headers.update({
            "Content-Type": "application/json",
            "User-Agent": self.USER_AGENT,
        })
        self.user_id: Optional[int] = None
        self.address_id: Optional[int] = None
        self._session_depth = 0

    def _make_request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] = None,
        body: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                params=params,
                data=json.dumps(body) if body is not None else None,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RohlikAPIError(f"Request to {path} failed: {e}") from e

        if not response.ok:
            raise RohlikAPIError(
                f"HTTP {response.status_code}: {response.reason}", response.status_code
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RohlikAPIError(f"Invalid JSON from {path}: {e}", response.status_code) from e

    # Session handling

    def login(self) -> None:
        login_data = {"email": self.username, "password": self.password, "name": ""}
        try:
            response = self._make_request(
                "POST", "/services/frontend-service/login", body=login_data
            )
        except RohlikAPIError as e:
            if e.status == 401:
                raise StoreUnavailable("Invalid credentials", 401) from e
            raise StoreUnavailable(f"Login failed: {e}", e.status) from e

        status = response.get("status") if isinstance(response, dict) else None
        if status != 200:
            if status == 401:
                raise StoreUnavailable("Invalid credentials", 401)
            messages = response.get("messages") if isinstance(response, dict) else None
            first = messages[0] if messages else None
            detail = first.get("content") if isinstance(first, dict) else "Unknown error"
            raise StoreUnavailable(f"Login failed: {detail}", status)

        data = response.get("data") or {}
        self.user_id = (data.get("user") or {}).get("id")
        self.address_id = (data.get("address") or {}).get("id")
        logger.debug("Logged in to Rohlik as user %s", self.user_id)

    def logout(self) -> None:
        try:
            self._make_request("POST", "/services/frontend-service/logout")
        finally:
            self.http.cookies.clear()
            self.user_id = None
            self.address_id = None

    @contextmanager
    def session(self) -> Iterator["RohlikAPI"]:
        """Log in on entry and always log out on exit; nested use is a no-op"""
        if self._session_depth:
            self._session_depth += 1
            try:
                yield self
            finally:
                self._session_depth -= 1
            return

        self.login()
        self._session_depth = 1
        try:
            yield self
        finally:
            self._session_depth = 0
            try:
                self.logout()
            except RohlikAPIError as e:
                logger.warning("Rohlik logout failed: %s", e)

    # Orders

    def get_order_history(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Raw delivered orders, newest first"""
        with self.session():
            response = self._make_request(
                "GET", "/api/v3/orders/delivered", params={"offset": 0, "limit": limit}
            )
        return unwrap_list(response)

    def list_recent_orders(self, limit: int = 10) -> List[OrderSummary]:
        return decode_order_listing(self.get_order_history(limit))

    def get_order_detail(self, order_id: str) -> OrderDetail:
        with self.session():
            try:
                response = self._make_request("GET", f"/api/v3/orders/{order_id}")
            except RohlikAPIError as e:
                if e.status == 404:
                    raise OrderNotFound(order_id) from e
                raise

        payload = _unwrap(response)
        if not isinstance(payload, dict) or not payload:
            raise OrderNotFound(order_id)
        return decode_order_detail(payload, order_id)

    def get_upcoming_orders(self) -> List[Dict[str, Any]]:
        with self.session():
            response = self._make_request("GET", "/api/v3/orders/upcoming")
        return unwrap_list(response)

    # Products and cart

    def search_products(
        self, product_name: str, limit: int = 10, favourite_only: bool = False
    ) -> List[Dict[str, Any]]:
        params = {
            "search": product_name,
            "offset": "0",
            "limit": str(limit + 5),
            "companyId": "1",
            "filterData": json.dumps({"filters": []}),
            "canCorrect": "true",
        }
        with self.session():
            response = self._make_request(
                "GET", "/services/frontend-service/search-metadata", params=params
            )

        products = (_unwrap(response) or {}).get("productList") or []

        # Sponsored results carry a "promoted" badge
        products = [
            p for p in products
            if not any(badge.get("slug") == "promoted" for badge in p.get("badge") or [])
        ]
        if favourite_only:
            products = [p for p in products if p.get("favourite")]

        results = []
        for p in products[:limit]:
            price = p.get("price") or {}
            results.append({
                "id": p.get("productId"),
                "name": p.get("productName", ""),
                "price": f"{price.get('full', '')} {price.get('currency', '')}".strip(),
                "brand": p.get("brand") or "",
                "amount": p.get("textualAmount") or "",
            })
        return results

    def add_to_cart(self, products: List[Dict[str, Any]]) -> List[int]:
        """Add products one by one; returns the ids that were added"""
        added = []
        with self.session():
            for product in products:
                payload = {
                    "actionId": None,
                    "productId": product["product_id"],
                    "quantity": product["quantity"],
                    "recipeId": None,
                    "source": "true:Shopping Lists",
                }
                try:
                    self._make_request("POST", "/services/frontend-service/v2/cart", body=payload)
                except RohlikAPIError as e:
                    logger.warning("Failed to add product %s: %s", product["product_id"], e)
                    continue
                added.append(product["product_id"])
        return added

    def get_cart_content(self) -> Dict[str, Any]:
        with self.session():
            response = self._make_request("GET", "/services/frontend-service/v2/cart")

        data = _unwrap(response) or {}
        items = data.get("items") or {}
        return {
            "total_price": data.get("totalPrice") or 0,
            "total_items": len(items),
            "can_make_order": bool(data.get("submitConditionPassed")),
            "products": [
                {
                    "id": product_id,
                    "cart_item_id": str(item.get("orderFieldId") or ""),
                    "name": item.get("productName") or "",
                    "quantity": item.get("quantity") or 0,
                    "price": item.get("price") or 0,
                    "category_name": item.get("primaryCategoryName") or "",
                    "brand": item.get("brand") or "",
                }
                for product_id, item in items.items()
            ],
        }

    def remove_from_cart(self, order_field_id: str) -> bool:
        with self.session():
            try:
                self._make_request(
                    "DELETE",
                    "/services/frontend-service/v2/cart",
                    params={"orderFieldId": order_field_id},
                )
            except RohlikAPIError as e:
                logger.warning("Failed to remove cart item %s: %s", order_field_id, e)
                return False
        return True

    def get_shopping_list(self, shopping_list_id: str) -> Dict[str, Any]:
        with self.session():
            response = self._make_request("GET", f"/api/v1/shopping-lists/id/{shopping_list_id}")

        data = _unwrap(response) or {}
        return {
            "name": data.get("name") or "Unknown List",
            "products": data.get("products") or [],
        }

    # Delivery and account

    def get_delivery_info(self) -> Any:
        with self.session():
            response = self._make_request(
                "GET",
                "/services/frontend-service/first-delivery",
                params={"reasonableDeliveryTime": "true"},
            )
        return _unwrap(response)

    def get_delivery_slots(self) -> Any:
        with self.session():
            if not self.user_id or not self.address_id:
                raise RohlikAPIError("Delivery slots need a user and address on the account")
            response = self._make_request(
                "GET",
                "/services/frontend-service/timeslots-api/0",
                params={
                    "userId": self.user_id,
                    "addressId": self.address_id,
                    "reasonableDeliveryTime": "true",
                },
            )
        return _unwrap(response)

    def get_announcements(self) -> Any:
        with self.session():
            response = self._make_request("GET", "/services/frontend-service/announcements/top")
        return _unwrap(response)

    def get_reusable_bags(self) -> Any:
        with self.session():
            response = self._make_request("GET", "/api/v1/reusable-bags/user-info")
        return _unwrap(response)

    def get_premium_profile(self) -> Any:
        with self.session():
            response = self._make_request("GET", "/services/frontend-service/premium/profile")
        return _unwrap(response)

    def get_account_data(self) -> Dict[str, Any]:
        """Collect the account overview in one session; failing sections are None"""
        sections = {
            "cart": self.get_cart_content,
            "delivery": self.get_delivery_info,
            "upcoming_orders": self.get_upcoming_orders,
            "last_order": lambda: (self.get_order_history(1) or [None])[0],
            "premium_profile": self.get_premium_profile,
            "announcements": self.get_announcements,
            "bags": self.get_reusable_bags,
        }
        account: Dict[str, Any] = {}
        with self.session():
            for name, fetch in sections.items():
                try:
                    account[name] = fetch()
                except RohlikAPIError as e:
                    logger.warning("Could not load %s: %s", name, e)
                    account[name] = None
        return account
