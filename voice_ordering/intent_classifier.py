# voice_ordering/intent_classifier.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .lexicon import CommandKind, Lexicon, get_lexicon
from .normalizer import clean_phrase, normalize

logger = logging.getLogger(__name__)


class Branch(Enum):
    """Which way an utterance goes after classification"""
    ORDER = "order"
    NAVIGATION = "navigation"
    PLAIN_SEARCH = "plain_search"


@dataclass(frozen=True)
class Classification:
    branch: Branch
    term: str
    normalized: str
    phrase: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "branch": self.branch.value,
            "phrase": self.phrase,
            "term": self.term,
            "normalized": self.normalized,
        }


class IntentClassifier:
    """Classify an utterance as an order, a navigation request or a search"""

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_lexicon()

    def classify(self, text: str, verbose=False) -> Classification:
        """Find the first trigger phrase with something after it

        Args:
            text: Transcribed text
            verbose: Log each phrase considered

        Returns:
            Classification with the residual term. A phrase followed only
            by fillers ("order po") is skipped and scanning continues.
        """
        normalized = normalize(text)

        for phrase, kind in self.lexicon.commands:
            index = normalized.find(phrase)
            if index < 0:
                continue

            residual = normalized[index + len(phrase):]
            term = clean_phrase(residual, self.lexicon.fillers)

            if not term:
                if verbose:
                    logger.debug("Phrase %r matched with empty residual, skipping", phrase)
                continue

            if verbose:
                logger.debug("Phrase %r matched (%s), term=%r", phrase, kind.value, term)

            branch = Branch.ORDER if kind is CommandKind.ORDER else Branch.NAVIGATION
            return Classification(branch=branch, term=term, normalized=normalized, phrase=phrase)

        term = clean_phrase(normalized, self.lexicon.fillers)
        if verbose:
            logger.debug("No command phrase in %r, plain search for %r", normalized, term)
        return Classification(branch=Branch.PLAIN_SEARCH, term=term, normalized=normalized)
