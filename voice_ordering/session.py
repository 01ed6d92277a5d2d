# voice_ordering/session.py
"""
Lifecycle of one speech-capture session.

    IDLE --start()--> LISTENING --result / end / error--> IDLE

At most one capture is in flight. Errors are values kept on the controller
(never raised) until the next start() clears them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from .lexicon import FILIPINO_LANGUAGES, language_of
from .normalizer import Utterance

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    LISTENING = "listening"


class SessionErrorKind(Enum):
    NO_CONNECTIVITY = "no_connectivity"
    NETWORK = "network"
    PERMISSION_DENIED = "permission_denied"
    NO_SPEECH = "no_speech"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SessionError:
    kind: SessionErrorKind
    message: str
    spoken: bool = True

    def to_dict(self):
        return {"kind": self.kind.value, "message": self.message, "spoken": self.spoken}


class SpeechCapture(Protocol):
    """Host speech-to-text facility

    The controller installs its handlers as on_start / on_end / on_result /
    on_error. Exactly one on_result or on_error per session, then on_end.
    """
    on_start: Optional[Callable[[], None]]
    on_end: Optional[Callable[[], None]]
    on_result: Optional[Callable[[str], None]]
    on_error: Optional[Callable[[str], None]]

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def abort(self) -> None: ...


class Speaker(Protocol):
    def speak(self, text: str) -> None: ...


def classify_error(code: str, locale: str = "en-US") -> SessionError:
    """Map a capture error code onto the user-facing taxonomy"""
    if code == "network":
        if language_of(locale) in FILIPINO_LANGUAGES:
            return SessionError(SessionErrorKind.NETWORK, "Tagalog mode requires internet.")
        return SessionError(SessionErrorKind.NETWORK, "Network error. Check internet or permissions.")
    if code == "not-allowed":
        return SessionError(SessionErrorKind.PERMISSION_DENIED, "Mic access denied.")
    if code == "no-speech":
        # Stay quiet: this is usually an accidental tap
        return SessionError(SessionErrorKind.NO_SPEECH, "No speech detected.", spoken=False)
    return SessionError(SessionErrorKind.UNKNOWN, "Voice error. Try again.")


NO_CONNECTIVITY = SessionError(SessionErrorKind.NO_CONNECTIVITY, "No Internet Connection")


class SessionController:
    """Owns start/stop/toggle for one capture facility"""

    def __init__(
        self,
        capture: Optional[SpeechCapture],
        on_utterance: Callable[[Utterance], None],
        locale: str = "en-US",
        is_online: Callable[[], bool] = lambda: True,
        speaker: Optional[Speaker] = None,
        on_change: Optional[Callable[["SessionController"], None]] = None,
    ):
        """
        Args:
            capture: Speech capture facility, or None if the host has none
            on_utterance: Called once per finalized transcript
            locale: Locale tag passed along with every utterance
            is_online: Connectivity probe checked before each start
            speaker: Optional text-to-speech for spoken error messages
            on_change: Called after every state or error change
        """
        self.capture = capture
        self.on_utterance = on_utterance
        self.locale = locale
        self.is_online = is_online
        self.speaker = speaker
        self.on_change = on_change

        self.state = SessionState.IDLE
        self.error: Optional[SessionError] = None

        if capture is not None:
            capture.on_start = self.handle_start
            capture.on_end = self.handle_end
            capture.on_result = self.handle_result
            capture.on_error = self.handle_error

    @property
    def is_supported(self) -> bool:
        return self.capture is not None

    @property
    def is_listening(self) -> bool:
        return self.state is SessionState.LISTENING

    def start(self) -> bool:
        """Begin a capture session. Returns True if one was started."""
        if not self.is_supported:
            logger.warning("Speech capture is not available on this host")
            return False
        if self.is_listening:
            return False

        self.error = None
        if not self.is_online():
            self._fail(NO_CONNECTIVITY)
            return False

        self.state = SessionState.LISTENING
        logger.info("🎙️ Listening (%s)", self.locale)
        try:
            self.capture.start()
        except Exception as e:
            logger.error("Capture failed to start: %s", e)
            self.state = SessionState.IDLE
            self._fail(classify_error("other", self.locale))
            return False
        self._changed()
        return True

    def stop(self):
        """End the active session; a pending result may still arrive"""
        if self.is_listening:
            self.capture.stop()

    def toggle(self):
        self.error = None
        if self.is_listening:
            self.stop()
        else:
            self.start()

    def close(self):
        """Teardown: abort so no capture outlives its owner"""
        if self.is_listening:
            logger.info("Aborting active capture on teardown")
            self.capture.abort()
            self.state = SessionState.IDLE
            self._changed()

    # --- capture events ---

    def handle_start(self):
        self.state = SessionState.LISTENING
        self.error = None
        self._changed()

    def handle_end(self):
        self.state = SessionState.IDLE
        self._changed()

    def handle_result(self, transcript: str):
        if not self.is_listening:
            logger.debug("Ignoring result outside a session: %r", transcript)
            return
        self.state = SessionState.IDLE
        logger.info("Voice result: %r", transcript)
        self.on_utterance(Utterance(transcript=transcript, locale=self.locale))
        self._changed()

    def handle_error(self, code: str):
        logger.warning("Speech recognition error: %s", code)
        self.state = SessionState.IDLE
        self._fail(classify_error(code, self.locale))

    def _fail(self, error: SessionError):
        self.error = error
        if error.spoken and self.speaker is not None:
            self.speaker.speak(error.message)
        self._changed()

    def _changed(self):
        if self.on_change is not None:
            self.on_change(self)
