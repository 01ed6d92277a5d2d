# voice_ordering/menu_loader.py
import json
import logging
import os
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .lexicon import ALL_CATEGORY, CanonicalSize

logger = logging.getLogger(__name__)

DEFAULT_MENU_PATH = os.path.join(os.path.dirname(__file__), "data", "menu.json")


class SizeVariant(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: CanonicalSize
    label: str = ""
    price: float


class ProductCatalogEntry(BaseModel):
    """One menu item. Read-only here; the catalog owner mutates it."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    aliases: Tuple[str, ...] = ()
    sizes: Tuple[SizeVariant, ...] = Field(min_length=1)
    description: str = ""
    available: bool = True

    def size_for(self, size: Optional[CanonicalSize]) -> SizeVariant:
        """Requested size if offered, otherwise the first variant"""
        if size is not None:
            for variant in self.sizes:
                if variant.name is size:
                    return variant
        return self.sizes[0]


class MenuLoader:
    """Load and manage menu data"""

    def __init__(self, menu_path: Optional[str] = None):
        """Initialize menu loader

        Args:
            menu_path: Path to menu JSON file (defaults to the bundled menu)
        """
        self.menu_path = menu_path or DEFAULT_MENU_PATH
        self.products: List[ProductCatalogEntry] = []
        self.categories: List[Dict] = []

        self._load_data()

    @classmethod
    def from_dict(cls, menu_data: Dict) -> "MenuLoader":
        """Build a loader from already-parsed menu data"""
        loader = cls.__new__(cls)
        loader.menu_path = None
        loader.products = []
        loader.categories = []
        loader._parse(menu_data)
        return loader

    def _load_data(self):
        """Load menu data"""
        try:
            with open(self.menu_path, "r", encoding="utf-8") as f:
                menu_data = json.load(f)
        except FileNotFoundError:
            logger.error("❌ Menu file %s not found", self.menu_path)
            raise
        except json.JSONDecodeError as e:
            logger.error("❌ Menu file %s is not valid JSON: %s", self.menu_path, e)
            raise

        self._parse(menu_data)

    def _parse(self, menu_data: Dict):
        self.categories = menu_data.get("categories", [])

        # Products keep file order; that order is the resolver's tie-break
        self.products = []
        for category in self.categories:
            for product in category.get("products", []):
                entry = dict(product)
                entry.setdefault("category", category.get("name"))
                self.products.append(ProductCatalogEntry.model_validate(entry))

        logger.info(
            "✅ Loaded menu data: %d categories, %d products",
            len(self.categories), len(self.products),
        )
        if not self.products:
            logger.warning("⚠️ No products found in categories!")

    def get_all_products(self) -> List[ProductCatalogEntry]:
        """Get all products"""
        return self.products

    def get_all_categories(self) -> List[Dict]:
        """Get all categories"""
        return self.categories

    def get_category_names(self) -> List[str]:
        """'All' followed by every category that has a name"""
        names = [c.get("name") for c in self.categories if c.get("name")]
        return [ALL_CATEGORY] + [n for n in names if n != ALL_CATEGORY]

    def search_product_by_name(self, name: str) -> List[ProductCatalogEntry]:
        """Search products by name"""
        name_lower = name.lower()
        return [p for p in self.products if name_lower in p.name.lower()]

    def get_product_by_id(self, product_id: str) -> Optional[ProductCatalogEntry]:
        for product in self.products:
            if product.id == str(product_id):
                return product
        return None
