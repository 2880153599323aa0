import logging
from typing import Awaitable, Callable, Dict, List, Optional
from microservices.product_microservice import SORT_KEYS, filter_products, paginate, sort_products


logger = logging.getLogger(__name__)

PAGE_SIZE = 12


class CatalogView:
    """Filtered, sorted and paginated view over the whole product catalog.

    The catalog is loaded once into a snapshot and everything else happens
    in memory. Changing the search term, a filter or the sort key derives the
    view again from the snapshot and shows the first page.
    """

    def __init__(self, loader: Callable[[], Awaitable[List[Dict]]], page_size: int = PAGE_SIZE):
        self.loader = loader
        self.page_size = page_size
        self.snapshot: List[Dict] = []
        self.loaded = False
        self.search_term = ""
        self.category = ""
        self.price_range = ""
        self.stock = ""
        self.sort_key = "newest"
        self.page = 1
        self._ordered: List[Dict] = []

    async def load_all(self):
        try:
            products = await self.loader()
        except Exception:
            # keep whatever we had, the page still renders
            logger.exception("Error loading products")
            return
        self.snapshot = list(products)
        self.loaded = True
        self._derive()

    async def ensure_loaded(self):
        if not self.loaded:
            await self.load_all()

    def _derive(self):
        filtered = filter_products(self.snapshot, self.search_term,
                                   self.category, self.price_range, self.stock)
        self._ordered = sort_products(filtered, self.sort_key)
        self.page = 1

    def set_filters(self, search_term: Optional[str] = None, category: Optional[str] = None,
                    price_range: Optional[str] = None, stock: Optional[str] = None,
                    sort_key: Optional[str] = None):
        if search_term is not None:
            self.search_term = search_term
        if category is not None:
            self.category = category
        if price_range is not None:
            self.price_range = price_range
        if stock is not None:
            self.stock = stock
        if sort_key is not None:
            self.sort_key = sort_key if sort_key in SORT_KEYS else "newest"
        self._derive()

    def set_search(self, search_term: str):
        self.set_filters(search_term=search_term)

    def set_category(self, category: str):
        self.set_filters(category=category)

    def set_sort(self, sort_key: str):
        self.set_filters(sort_key=sort_key)

    def clear_filters(self):
        self.set_filters(category="", price_range="", stock="")

    def load_more(self):
        if self.has_more:
            self.page += 1

    @property
    def total(self) -> int:
        return len(self._ordered)

    @property
    def visible(self) -> List[Dict]:
        return paginate(self._ordered, self.page_size, self.page)

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total

    def state(self) -> Dict:
        return {
            "products": self.visible,
            "page": self.page,
            "length": self.total,
            "hasMore": self.has_more,
            "filters": {
                "search": self.search_term,
                "category": self.category,
                "price_range": self.price_range,
                "stock": self.stock,
                "sort_by": self.sort_key,
            },
        }
