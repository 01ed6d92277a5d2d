# voice_ordering/category_resolver.py
import re
from typing import Optional, Set

from .lexicon import Lexicon


class CategoryResolver:
    """Map spoken category names to the menu's canonical categories"""

    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon
        # keys are already longest-first in the lexicon
        self._patterns = [
            (key, re.compile(rf"\b{re.escape(key)}\b"), category)
            for key, category in lexicon.categories
        ]

    def lookup(self, text: str) -> Optional[str]:
        """Exact key match ("meals" -> "Meals")"""
        text = (text or "").strip().lower()
        for key, _, category in self._patterns:
            if text == key:
                return category
        return None

    def resolve(self, text: str) -> Optional[str]:
        """Whole-word match anywhere in the text, longest key first

        "non coffee based drinks" resolves to Non-Coffee Based, not to the
        shorter "coffee" key it also contains.
        """
        text = (text or "").strip().lower()
        if not text:
            return None
        for _, pattern, category in self._patterns:
            if pattern.search(text):
                return category
        return None

    def categories(self) -> Set[str]:
        """Every category this table can produce"""
        return {category for _, _, category in self._patterns}
