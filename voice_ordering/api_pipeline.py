# voice_ordering/api_pipeline.py
"""
Pipeline that returns JSON instead of printing.
Utterance → classify → (category | parse → resolve) → action → UI callbacks.
"""

import logging
from typing import Callable, Dict, Optional

from . import config
from .dispatcher import (
    Dispatch,
    DispatchMode,
    FallbackSearch,
    IntentDispatcher,
    OpenOrder,
    ResolvedAction,
    SwitchCategory,
)
from .intent_classifier import IntentClassifier
from .lexicon import get_lexicon
from .menu_loader import MenuLoader
from .normalizer import Utterance
from .session import Speaker

logger = logging.getLogger(__name__)


class VoicePipeline:
    """Runs one utterance at a time through the intent pipeline"""

    def __init__(
        self,
        menu: MenuLoader,
        locale: str = config.DEFAULT_LOCALE,
        mode: DispatchMode = DispatchMode.COMMAND,
        speaker: Optional[Speaker] = None,
        on_search: Optional[Callable[[str], None]] = None,
        on_command: Optional[Callable[[ResolvedAction], None]] = None,
        suggestion_threshold: float = config.SUGGESTION_THRESHOLD,
    ):
        """Initialize all components

        Args:
            menu: Loaded catalog
            locale: Picks the word tables and response language
            mode: VOICE_SEARCH or COMMAND
            speaker: Text-to-speech collaborator
            on_search: UI hook for FallbackSearch
            on_command: UI hook for SwitchCategory / OpenOrder
        """
        self.menu = menu
        self.locale = locale
        self.mode = mode
        self.speaker = speaker
        self.on_search = on_search
        self.on_command = on_command

        lexicon = get_lexicon(locale)
        self.classifier = IntentClassifier(lexicon)
        self.dispatcher = IntentDispatcher(
            menu.get_all_products(),
            lexicon=lexicon,
            mode=mode,
            locale=locale,
            suggestion_threshold=suggestion_threshold,
        )

    def process_utterance(self, utterance: Utterance) -> Dict:
        if utterance.locale != self.locale:
            logger.debug("Utterance locale %s differs from pipeline locale %s", utterance.locale, self.locale)
        return self.process_text(utterance.transcript)

    def process_text(self, text: str, verbose=False) -> Dict:
        """Process a transcript and return the complete result

        Returns:
            JSON-serializable dict: transcription, classification, parsing,
            action and the spoken response (None when silent)
        """
        classification = self.classifier.classify(text, verbose=verbose)
        dispatch = self.dispatcher.dispatch(classification)

        self._respond(dispatch)
        self._notify_ui(dispatch.action)

        logger.info("🎯 %r -> %s", text, dispatch.action.kind)

        return {
            "success": True,
            "transcription": {"text": text, "locale": self.locale},
            "classification": classification.to_dict(),
            "parsing": dispatch.parsed.to_dict() if dispatch.parsed else None,
            "action": dispatch.action.to_dict(),
            "speech": dispatch.speech,
        }

    def _respond(self, dispatch: Dispatch):
        if dispatch.speech and self.speaker is not None:
            self.speaker.speak(dispatch.speech)

    def _notify_ui(self, action: ResolvedAction):
        if isinstance(action, FallbackSearch):
            if self.on_search:
                self.on_search(action.term)
        elif isinstance(action, (SwitchCategory, OpenOrder)):
            if self.on_command:
                self.on_command(action)
        else:
            raise TypeError(f"Unhandled action type: {type(action).__name__}")
