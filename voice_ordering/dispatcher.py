# voice_ordering/dispatcher.py
"""
Turns a classified utterance into exactly one action.

    SwitchCategory(category)            show a menu category
    OpenOrder(product, size, quantity)  open an item, pre-filled
    FallbackSearch(term)                plain text search

Nothing here raises on unmatched input: every branch/outcome pair ends in
one of the three actions.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Sequence, Union

from .category_resolver import CategoryResolver
from .entity_extractor import EntityExtractor, ParsedOrderIntent
from .fuzzy_matcher import ProductResolver
from .intent_classifier import Branch, Classification
from .lexicon import FILIPINO_LANGUAGES, Lexicon, get_lexicon, language_of
from .menu_loader import ProductCatalogEntry, SizeVariant

logger = logging.getLogger(__name__)


class DispatchMode(Enum):
    """Which UI is listening

    VOICE_SEARCH stays quiet when it just runs a search; COMMAND always
    answers and also tries to read a plain utterance as an order.
    """
    VOICE_SEARCH = "voice_search"
    COMMAND = "command"


@dataclass(frozen=True)
class SwitchCategory:
    kind: ClassVar[str] = "switch_category"
    category: str

    def to_dict(self) -> Dict:
        return {"kind": self.kind, "category": self.category}


@dataclass(frozen=True)
class OpenOrder:
    kind: ClassVar[str] = "open_order"
    product: ProductCatalogEntry
    size: SizeVariant
    quantity: int = 1

    def to_dict(self) -> Dict:
        return {
            "kind": self.kind,
            "product": self.product.model_dump(mode="json"),
            "size": self.size.model_dump(mode="json"),
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class FallbackSearch:
    kind: ClassVar[str] = "fallback_search"
    term: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"kind": self.kind, "term": self.term, "suggestions": list(self.suggestions)}


ResolvedAction = Union[SwitchCategory, OpenOrder, FallbackSearch]


RESPONSES = {
    "en": {
        "switch": "Showing {category} for you.",
        "open": "Great choice! {quantity} {size} {product}. Would you like to customize it?",
        "not_found": "Sorry, I couldn't find {term}. Here are the search results instead.",
        "suggest": " Did you mean {suggestion}?",
        "searching": "Searching for {term}.",
    },
    "tl": {
        "switch": "Narito ang {category} para sa iyo.",
        "open": "Sige! {quantity} {size} {product}. Gusto mo bang i-customize?",
        "not_found": "Pasensya na, hindi ko mahanap ang {term}. Narito ang mga resulta ng search.",
        "suggest": " Ito ba ang ibig mong sabihin: {suggestion}?",
        "searching": "Hinahanap ang {term}.",
    },
}


@dataclass(frozen=True)
class Dispatch:
    """Dispatcher output: the action plus what to say about it"""
    action: ResolvedAction
    speech: Optional[str] = None
    parsed: Optional[ParsedOrderIntent] = None


class IntentDispatcher:
    """Decide the action for a classified utterance"""

    def __init__(
        self,
        products: Sequence[ProductCatalogEntry],
        lexicon: Optional[Lexicon] = None,
        mode: DispatchMode = DispatchMode.COMMAND,
        locale: str = "en-US",
        suggestion_threshold: float = 0.6,
    ):
        self.lexicon = lexicon or get_lexicon(locale)
        self.mode = mode
        self.locale = locale
        self.extractor = EntityExtractor(self.lexicon)
        self.categories = CategoryResolver(self.lexicon)
        self.resolver = ProductResolver(products, suggestion_threshold=suggestion_threshold)

        lang = "tl" if language_of(locale) in FILIPINO_LANGUAGES else "en"
        self.responses = RESPONSES[lang]

    def dispatch(self, classification: Classification) -> Dispatch:
        if classification.branch is Branch.PLAIN_SEARCH:
            return self._dispatch_plain(classification)

        term = classification.term

        # "i want meals" / "show me the meals": the whole term is a category
        category = self.categories.lookup(term)
        if category:
            return self._switch(category)

        parsed = self.extractor.extract(term)
        product = self.resolver.resolve(parsed.clean_term, parsed.raw_term)
        if product is not None:
            return self._open(product, parsed)

        # "show me the coffee drinks": a category somewhere in the term
        if classification.branch is Branch.NAVIGATION:
            category = self.categories.resolve(term)
            if category:
                return self._switch(category)

        return self._not_found(parsed)

    def _dispatch_plain(self, classification: Classification) -> Dispatch:
        term = classification.term

        if self.mode is DispatchMode.COMMAND:
            # Direct ordering without a trigger phrase: "two grande spanish latte"
            parsed = self.extractor.extract(classification.normalized)
            if parsed.has_order_terms:
                product = self.resolver.resolve(parsed.clean_term, parsed.raw_term)
                if product is not None:
                    return self._open(product, parsed)

            speech = self.responses["searching"].format(term=term) if term else None
            return Dispatch(action=FallbackSearch(term=term), speech=speech)

        return Dispatch(action=FallbackSearch(term=term), speech=None)

    def _switch(self, category: str) -> Dispatch:
        return Dispatch(
            action=SwitchCategory(category=category),
            speech=self.responses["switch"].format(category=category),
        )

    def _open(self, product: ProductCatalogEntry, parsed: ParsedOrderIntent) -> Dispatch:
        size = product.size_for(parsed.target_size)
        if parsed.target_size is not None and size.name is not parsed.target_size:
            logger.info(
                "%s has no %s size, using %s",
                product.name, parsed.target_size.value, size.name.value,
            )
        speech = self.responses["open"].format(
            quantity=parsed.quantity, size=size.name.value, product=product.name,
        )
        return Dispatch(
            action=OpenOrder(product=product, size=size, quantity=parsed.quantity),
            speech=speech,
            parsed=parsed,
        )

    def _not_found(self, parsed: ParsedOrderIntent) -> Dispatch:
        term = parsed.raw_term
        suggestions = self.resolver.suggest(parsed.clean_term or term)
        speech = self.responses["not_found"].format(term=term)
        if suggestions:
            speech += self.responses["suggest"].format(suggestion=suggestions[0])
        return Dispatch(
            action=FallbackSearch(term=term, suggestions=suggestions),
            speech=speech,
            parsed=parsed,
        )
