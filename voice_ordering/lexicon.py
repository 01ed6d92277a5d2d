# voice_ordering/lexicon.py
"""
Word tables for voice ordering.
Maps customer language (English + Filipino + colloquial) → canonical values.
Every table is an ordered list evaluated top to bottom; order is priority.
"""

from enum import Enum
from functools import lru_cache
from typing import Dict, List, Tuple


class CanonicalSize(Enum):
    """Size identifiers used by the catalog"""
    GRANDE = "Grande"
    VENTI = "Venti"
    COMBO_MEAL = "Combo Meal"
    ALA_CARTE = "Ala Carte"


class CommandKind(Enum):
    """What a trigger phrase asks for"""
    ORDER = "order"
    NAVIGATION = "navigation"


ALL_CATEGORY = "All"

CATEGORIES = (
    ALL_CATEGORY,
    "Coffee Based",
    "Non-Coffee Based",
    "Matcha Series",
    "Refreshments",
    "Meals",
)

# Stripped from the end of a phrase only
FILLER_WORDS: Dict[str, List[str]] = {
    "en": ["please", "thanks", "thank you", "cart", "to", "the", "my"],
    "tl": [
        "pre", "pare", "tol", "boss", "idol", "po", "opo", "naman", "sana",
        "sa", "ng", "ko", "mo",
    ],
}

COMMAND_PHRASES: Dict[str, List[Tuple[str, CommandKind]]] = {
    "en": [
        ("add to cart", CommandKind.ORDER),
        ("can i have", CommandKind.ORDER),
        ("i want", CommandKind.ORDER),
        ("get me", CommandKind.ORDER),
        ("order", CommandKind.ORDER),
        ("add", CommandKind.ORDER),
        ("show me the", CommandKind.NAVIGATION),
        ("show me", CommandKind.NAVIGATION),
        ("go to", CommandKind.NAVIGATION),
        ("view", CommandKind.NAVIGATION),
        ("open", CommandKind.NAVIGATION),
    ],
    "tl": [
        ("order ako ng", CommandKind.ORDER),
        ("gusto ko ng", CommandKind.ORDER),
        ("pabili ng", CommandKind.ORDER),
        ("gusto ko", CommandKind.ORDER),
        ("dagdag", CommandKind.ORDER),
        ("patingin ng", CommandKind.NAVIGATION),
        ("patingin sa", CommandKind.NAVIGATION),
        ("punta sa", CommandKind.NAVIGATION),
        ("buksan", CommandKind.NAVIGATION),
    ],
}

# Linker variants ("apat na") come before their stems
NUMBER_WORDS: Dict[str, List[Tuple[str, int]]] = {
    "en": [
        ("one", 1), ("two", 2), ("three", 3), ("four", 4), ("five", 5),
        ("six", 6), ("seven", 7), ("eight", 8), ("nine", 9), ("ten", 10),
    ],
    "tl": [
        ("isang", 1), ("isa", 1),
        ("dalawang", 2), ("dalawa", 2),
        ("tatlong", 3), ("tatlo", 3),
        ("apat na", 4), ("apat", 4),
        ("limang", 5), ("lima", 5),
        ("anim na", 6), ("anim", 6),
        ("pitong", 7), ("pito", 7),
        ("walong", 8), ("walo", 8),
        ("siyam na", 9), ("siyam", 9),
        ("sampung", 10), ("sampu", 10),
    ],
}

# Group priority: Venti before Grande, Combo before Ala Carte
SIZE_PRIORITY = (
    CanonicalSize.VENTI,
    CanonicalSize.GRANDE,
    CanonicalSize.COMBO_MEAL,
    CanonicalSize.ALA_CARTE,
)

SIZE_SYNONYMS: Dict[str, Dict[CanonicalSize, List[str]]] = {
    "en": {
        CanonicalSize.VENTI: [
            "venti", "extra large", "large", "big", "biggest",
            "22 ounces", "22 ounce", "22 oz", "22oz",
        ],
        CanonicalSize.GRANDE: [
            "grande", "medium", "regular", "small",
            "16 ounces", "16 ounce", "16 oz", "16oz",
        ],
        CanonicalSize.COMBO_MEAL: [
            "combo meal", "combo", "with drinks", "with drink", "meal deal",
        ],
        CanonicalSize.ALA_CARTE: [
            "a la carte", "ala carte", "alacarte", "solo",
            "without drinks", "without drink", "no drinks", "no drink",
        ],
    },
    "tl": {
        CanonicalSize.VENTI: ["pinakamalaki", "malaki"],
        CanonicalSize.GRANDE: ["katamtaman", "maliit", "sakto"],
        CanonicalSize.COMBO_MEAL: ["may drinks", "may inumin", "kasama drinks"],
        CanonicalSize.ALA_CARTE: ["walang drinks", "walang inumin"],
    },
}

CATEGORY_SYNONYMS: Dict[str, Dict[str, str]] = {
    "en": {
        "all": ALL_CATEGORY,
        "everything": ALL_CATEGORY,
        "full menu": ALL_CATEGORY,
        "menu": ALL_CATEGORY,
        "coffee based": "Coffee Based",
        "coffee": "Coffee Based",
        "coffees": "Coffee Based",
        "non coffee based": "Non-Coffee Based",
        "non-coffee based": "Non-Coffee Based",
        "non coffee": "Non-Coffee Based",
        "non-coffee": "Non-Coffee Based",
        "noncoffee": "Non-Coffee Based",
        "matcha series": "Matcha Series",
        "matcha": "Matcha Series",
        "matchas": "Matcha Series",
        "refreshments": "Refreshments",
        "refreshment": "Refreshments",
        "refreshers": "Refreshments",
        "meals": "Meals",
        "meal": "Meals",
        "food": "Meals",
        "foods": "Meals",
        "rice meals": "Meals",
    },
    "tl": {
        "lahat": ALL_CATEGORY,
        "kape": "Coffee Based",
        "hindi kape": "Non-Coffee Based",
        "walang kape": "Non-Coffee Based",
        "pampalamig": "Refreshments",
        "pagkain": "Meals",
        "ulam": "Meals",
    },
}

# Languages that get the bilingual tables; everything else is English-only
BILINGUAL_LANGUAGES = ("en", "tl", "fil")
FILIPINO_LANGUAGES = ("tl", "fil")


def _longest_first(items, key):
    # stable: equal lengths keep table order
    return sorted(items, key=lambda item: -len(key(item)))


class Lexicon:
    """Active word tables for one locale. Immutable once built."""

    def __init__(self, languages: Tuple[str, ...]):
        self.languages = languages

        fillers: List[Tuple[str, ...]] = []
        commands: List[Tuple[str, CommandKind]] = []
        numbers: List[Tuple[str, int]] = []
        categories: Dict[str, str] = {}
        sizes: Dict[CanonicalSize, List[str]] = {size: [] for size in SIZE_PRIORITY}

        for lang in languages:
            fillers.extend(tuple(w.split()) for w in FILLER_WORDS.get(lang, []))
            commands.extend(COMMAND_PHRASES.get(lang, []))
            numbers.extend(NUMBER_WORDS.get(lang, []))
            categories.update(CATEGORY_SYNONYMS.get(lang, {}))
            for size, synonyms in SIZE_SYNONYMS.get(lang, {}).items():
                sizes[size].extend(synonyms)

        self.fillers: Tuple[Tuple[str, ...], ...] = tuple(fillers)
        self.commands: Tuple[Tuple[str, CommandKind], ...] = tuple(
            _longest_first(commands, key=lambda c: c[0])
        )
        # table order: linker forms already precede their stems
        self.numbers: Tuple[Tuple[str, int], ...] = tuple(numbers)
        self.sizes: Tuple[Tuple[CanonicalSize, Tuple[str, ...]], ...] = tuple(
            (size, tuple(_longest_first(sizes[size], key=lambda s: s)))
            for size in SIZE_PRIORITY
        )
        self.categories: Tuple[Tuple[str, str], ...] = tuple(
            _longest_first(categories.items(), key=lambda c: c[0])
        )

    def __repr__(self):
        return f"Lexicon(languages={self.languages!r})"


def language_of(locale: str) -> str:
    """'tl-PH' -> 'tl'"""
    return (locale or "").replace("_", "-").split("-")[0].lower()


def get_lexicon(locale: str = "en-US") -> Lexicon:
    """Get the tables for a locale

    Supported locales use the union of English and Filipino tables, since
    customers mix both in one sentence. Unsupported locales fall back to
    English only.
    """
    if language_of(locale) in BILINGUAL_LANGUAGES:
        return _build_lexicon(("en", "tl"))
    return _build_lexicon(("en",))


@lru_cache(maxsize=None)
def _build_lexicon(languages: Tuple[str, ...]) -> Lexicon:
    return Lexicon(languages)
