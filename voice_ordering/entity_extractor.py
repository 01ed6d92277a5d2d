# voice_ordering/entity_extractor.py
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .lexicon import CanonicalSize, Lexicon, get_lexicon
from .normalizer import clean_phrase, collapse_whitespace, normalize

logger = logging.getLogger(__name__)

# A bare number that is not a cup measurement ("22 oz" belongs to size)
DIGIT_QUANTITY = re.compile(r"\b(\d+)\b(?!\s*(?:oz|ounces?)\b)")


def _word_pattern(phrase: str):
    return re.compile(rf"\b{re.escape(phrase)}\b")


@dataclass(frozen=True)
class ParsedOrderIntent:
    """Quantity, size and product phrase pulled out of an order phrase"""
    quantity: int
    target_size: Optional[CanonicalSize]
    clean_term: str
    raw_term: str
    quantity_token: Optional[str] = None
    size_tokens: Tuple[str, ...] = ()

    @property
    def has_order_terms(self) -> bool:
        """True if a quantity or size was actually spoken"""
        return self.quantity_token is not None or self.target_size is not None

    def to_dict(self) -> Dict:
        return {
            "quantity": self.quantity,
            "size": self.target_size.value if self.target_size else None,
            "clean_term": self.clean_term,
            "raw_term": self.raw_term,
            "quantity_token": self.quantity_token,
            "size_tokens": list(self.size_tokens),
        }


class EntityExtractor:
    """Extract quantity and size from an order phrase

    Order is fixed: quantity, then size, then filler stripping. Whatever
    quantity consumed is gone before size looks at the phrase, so one token
    is never counted twice.
    """

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_lexicon()

        self.quantities: List[Tuple[re.Pattern, int, str]] = [
            (_word_pattern(word), qty, word) for word, qty in self.lexicon.numbers
        ]
        self.sizes: List[Tuple[CanonicalSize, List[Tuple[re.Pattern, str]]]] = [
            (size, [(_word_pattern(s), s) for s in synonyms])
            for size, synonyms in self.lexicon.sizes
        ]

    def extract(self, phrase: str, verbose=False) -> ParsedOrderIntent:
        """Parse one phrase

        Args:
            phrase: Residual after the command phrase, or a whole utterance
            verbose: Log what was found

        Returns:
            ParsedOrderIntent; quantity defaults to 1
        """
        raw_term = collapse_whitespace(normalize(phrase))
        text = raw_term

        quantity, quantity_token, text = self._extract_quantity(text)
        size, size_tokens, text = self._extract_size(text)
        clean_term = clean_phrase(text, self.lexicon.fillers)

        if verbose:
            logger.debug(
                "Parsed %r: qty=%s (%r) size=%s %r term=%r",
                raw_term, quantity, quantity_token,
                size.value if size else None, size_tokens, clean_term,
            )

        return ParsedOrderIntent(
            quantity=quantity,
            target_size=size,
            clean_term=clean_term,
            raw_term=raw_term,
            quantity_token=quantity_token,
            size_tokens=size_tokens,
        )

    def _extract_quantity(self, text: str) -> Tuple[int, Optional[str], str]:
        """Digits first, then number words. Removes exactly one token."""
        match = DIGIT_QUANTITY.search(text)
        if match:
            qty = max(int(match.group(1)), 1)
            return qty, match.group(1), self._cut(text, match.start(), match.end())

        for pattern, qty, word in self.quantities:
            match = pattern.search(text)
            if match:
                return qty, word, self._cut(text, match.start(), match.end())

        return 1, None, text

    def _extract_size(self, text: str) -> Tuple[Optional[CanonicalSize], Tuple[str, ...], str]:
        """First size group with a hit wins; all of its synonyms are removed"""
        for size, patterns in self.sizes:
            if not any(pattern.search(text) for pattern, _ in patterns):
                continue

            found = []
            for pattern, synonym in patterns:
                if pattern.search(text):
                    found.append(synonym)
                    text = pattern.sub(" ", text)
            return size, tuple(found), collapse_whitespace(text)

        return None, (), text

    @staticmethod
    def _cut(text: str, start: int, end: int) -> str:
        return collapse_whitespace(text[:start] + " " + text[end:])
