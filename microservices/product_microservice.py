from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple


SORT_KEYS = ("newest", "price-low", "price-high", "rating")
STOCK_FILTERS = ("instock", "lowstock", "outofstock")
LOW_STOCK_LIMIT = 5
CATEGORIES = ("electronics", "clothing", "home", "sports", "books",
              "beauty", "toys", "food", "health", "tools", "other")


def _number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0


def _timestamp(value) -> float:
    # missing or unreadable dates sort as the epoch
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
        except ValueError:
            return 0
    return 0


def parse_price_range(price_range: str) -> Optional[Tuple[float, float]]:
    # "10000-50000" -> (10000.0, 50000.0)
    if not price_range:
        return None
    low, _, high = price_range.partition("-")
    try:
        return float(low), float(high)
    except ValueError:
        return None


def matches_search(product: Dict, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.lower()
    name = str(product.get("name") or "").lower()
    description = str(product.get("description") or "").lower()
    return term in name or term in description


def matches_category(product: Dict, category: str) -> bool:
    if not category:
        return True
    return str(product.get("category") or "").lower() == category.lower()


def matches_price(product: Dict, price_range: str) -> bool:
    bounds = parse_price_range(price_range)
    if bounds is None:
        return True
    price = _number(product.get("price"))
    return bounds[0] <= price <= bounds[1]


def matches_stock(product: Dict, stock_filter: str) -> bool:
    stock = _number(product.get("stock"))
    match stock_filter:
        case "instock":
            return stock > 0
        case "lowstock":
            return 0 < stock <= LOW_STOCK_LIMIT
        case "outofstock":
            return stock <= 0
    return True


def filter_products(products: Iterable[Dict], search_term: str = "", category: str = "",
                    price_range: str = "", stock: str = "") -> List[Dict]:
    # every given condition has to hold, empty ones match everything
    return [product for product in products
            if matches_search(product, search_term)
            and matches_category(product, category)
            and matches_price(product, price_range)
            and matches_stock(product, stock)]


def sort_products(products: Iterable[Dict], sort_key: str = "newest") -> List[Dict]:
    # sorted() is stable, so ties keep their filtered order
    match sort_key:
        case "price-low":
            return sorted(products, key=lambda p: _number(p.get("price")))
        case "price-high":
            return sorted(products, key=lambda p: _number(p.get("price")), reverse=True)
        case "rating":
            return sorted(products, key=lambda p: _number(p.get("rating")), reverse=True)
    return sorted(products, key=lambda p: _timestamp(p.get("createdAt")), reverse=True)


def paginate(products: List[Dict], page_size: int, page: int) -> List[Dict]:
    # cumulative window: page 3 shows the first three pages
    return products[:max(page, 1) * page_size]


def with_vendor_fields(product: Dict, vendor: Optional[Dict]) -> Dict:
    vendor = vendor or {}
    product["vendorName"] = vendor.get("businessName") or "Vendor"
    product["vendorProfileImage"] = vendor.get(
        "profileImage") or "/default-avatar.png"
    product["isVerified"] = bool(vendor.get("verified", False))
    return product
