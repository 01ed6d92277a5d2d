"""Voice-ordering intent pipeline: transcript in, menu action out."""

from .api_pipeline import VoicePipeline
from .dispatcher import (
    DispatchMode,
    FallbackSearch,
    IntentDispatcher,
    OpenOrder,
    ResolvedAction,
    SwitchCategory,
)
from .entity_extractor import EntityExtractor, ParsedOrderIntent
from .fuzzy_matcher import ProductResolver
from .intent_classifier import Branch, Classification, IntentClassifier
from .lexicon import CanonicalSize, get_lexicon
from .menu_loader import MenuLoader, ProductCatalogEntry, SizeVariant
from .normalizer import Utterance
from .session import SessionController, SessionError, SessionErrorKind, SessionState

__all__ = [
    "VoicePipeline",
    "DispatchMode",
    "FallbackSearch",
    "IntentDispatcher",
    "OpenOrder",
    "ResolvedAction",
    "SwitchCategory",
    "EntityExtractor",
    "ParsedOrderIntent",
    "ProductResolver",
    "Branch",
    "Classification",
    "IntentClassifier",
    "CanonicalSize",
    "get_lexicon",
    "MenuLoader",
    "ProductCatalogEntry",
    "SizeVariant",
    "Utterance",
    "SessionController",
    "SessionError",
    "SessionErrorKind",
    "SessionState",
]
