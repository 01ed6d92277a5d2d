# voice_ordering/fuzzy_matcher.py
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from fuzzywuzzy import fuzz

from .menu_loader import ProductCatalogEntry

logger = logging.getLogger(__name__)

Catalog = Sequence[ProductCatalogEntry]
Strategy = Callable[[Catalog, str], Optional[ProductCatalogEntry]]


def exact_name(catalog: Catalog, term: str) -> Optional[ProductCatalogEntry]:
    """Canonical name equals the term (case-folded)"""
    term = term.casefold()
    for product in catalog:
        if product.name.casefold() == term:
            return product
    return None


def contains(catalog: Catalog, term: str) -> Optional[ProductCatalogEntry]:
    """Name or alias contains the term, or the term contains it

    First hit in catalog order wins.
    """
    term = term.casefold()
    for product in catalog:
        for candidate in (product.name, *product.aliases):
            candidate = candidate.casefold()
            if candidate and (term in candidate or candidate in term):
                return product
    return None


class ProductResolver:
    """Match a spoken product phrase to a catalog entry

    Strategies run in order and stop at the first hit:
        1. exact name on the cleaned term
        2. name/alias containment on the cleaned term
        3. name/alias containment on the raw term (only if it differs)
    """

    def __init__(self, products: Catalog, suggestion_threshold: float = 0.6):
        """
        Args:
            products: Catalog entries in display order; unavailable ones are
                never matched or suggested
            suggestion_threshold: Minimum fuzzy score (0-1) for suggest()
        """
        self.products = [p for p in products if p.available]
        self.suggestion_threshold = suggestion_threshold

    def stages(self, clean_term: str, raw_term: str) -> List[Tuple[str, Strategy, str]]:
        stages = [
            ("exact", exact_name, clean_term),
            ("contains_clean", contains, clean_term),
        ]
        if raw_term and raw_term != clean_term:
            stages.append(("contains_raw", contains, raw_term))
        return stages

    def resolve(self, clean_term: str, raw_term: Optional[str] = None) -> Optional[ProductCatalogEntry]:
        """Resolve a product or return None ("not found")"""
        clean_term = (clean_term or "").strip()
        raw_term = (raw_term or clean_term).strip()

        for name, strategy, term in self.stages(clean_term, raw_term):
            if not term:
                continue
            product = strategy(self.products, term)
            if product is not None:
                logger.debug("Resolved %r via %s -> %s", term, name, product.name)
                return product

        logger.debug("No product for %r / %r", clean_term, raw_term)
        return None

    def suggest(self, query: str, limit: int = 3) -> List[str]:
        """Close product names for a phrase that did not resolve

        Scored like the menu matcher: weighted ratio, partial ratio and
        token sort ratio. Only used to word an apology, never to resolve.
        """
        query = (query or "").lower().strip()
        if not query:
            return []

        scored = []
        for product in self.products:
            name = product.name.lower()
            ratio = fuzz.ratio(query, name) / 100.0
            partial = fuzz.partial_ratio(query, name) / 100.0
            token_sort = fuzz.token_sort_ratio(query, name) / 100.0
            score = 0.4 * ratio + 0.3 * partial + 0.3 * token_sort
            if score >= self.suggestion_threshold:
                scored.append((score, product.name))

        # sorted() is stable, so equal scores keep catalog order
        scored = sorted(scored, key=lambda s: s[0], reverse=True)
        return [name for _, name in scored[:limit]]
