# voice_ordering/transcribe.py
"""Speech capture backed by AWS Transcribe streaming."""

import asyncio
import logging
from typing import Callable, List, Optional

from amazon_transcribe.client import TranscribeStreamingClient
from amazon_transcribe.exceptions import BadRequestException, ServiceUnavailableException
from amazon_transcribe.handlers import TranscriptResultStreamHandler
from amazon_transcribe.model import TranscriptEvent

from . import config
from .lexicon import language_of

logger = logging.getLogger(__name__)

PERMISSION_MARKERS = ("accessdenied", "access denied", "credential", "unrecognizedclient", "forbidden", "not authorized")
NETWORK_MARKERS = ("network", "connection", "socket", "timed out", "dns")


def capture_error_code(exc: BaseException) -> str:
    """Map an SDK/transport exception to network | not-allowed | other"""
    if isinstance(exc, (ConnectionError, TimeoutError, asyncio.TimeoutError, ServiceUnavailableException)):
        return "network"

    text = f"{type(exc).__name__} {exc}".lower()
    if any(marker in text for marker in PERMISSION_MARKERS):
        return "not-allowed"
    if isinstance(exc, BadRequestException):
        return "other"
    if any(marker in text for marker in NETWORK_MARKERS):
        return "network"
    return "other"


async def audio_stream_generator(audio_queue: asyncio.Queue):
    """Pull audio chunks off the queue until the None end marker"""
    while True:
        chunk = await audio_queue.get()
        if chunk is None:
            break
        yield chunk


class FinalSegmentCollector(TranscriptResultStreamHandler):
    """Keeps final (non-partial) transcript segments in order"""

    def __init__(self, transcript_result_stream, on_partial: Optional[Callable[[str], None]] = None):
        super().__init__(transcript_result_stream)
        self.segments: List[str] = []
        self.on_partial = on_partial

    async def handle_transcript_event(self, transcript_event: TranscriptEvent):
        for result in transcript_event.transcript.results:
            if not result.alternatives:
                continue
            text = result.alternatives[0].transcript
            if result.is_partial:
                if self.on_partial:
                    self.on_partial(text)
            else:
                self.segments.append(text)


class TranscribeCapture:
    """One-utterance capture sessions over Transcribe streaming

    Feed PCM chunks with feed(); stop() ends the audio and lets the final
    transcript arrive; abort() drops the session. Emits on_start, then
    exactly one of on_result / on_error, then on_end.
    """

    def __init__(
        self,
        locale: str = config.DEFAULT_LOCALE,
        region: str = config.AWS_REGION,
        sample_rate: int = config.TRANSCRIBE_SAMPLE_RATE,
        client_factory: Optional[Callable[[str], TranscribeStreamingClient]] = None,
        on_partial: Optional[Callable[[str], None]] = None,
    ):
        # Filipino sessions run through the English model
        self.language_code = locale if language_of(locale) == "en" else "en-US"
        self.region = region
        self.sample_rate = sample_rate
        self.client_factory = client_factory or (lambda r: TranscribeStreamingClient(region=r))
        self.on_partial = on_partial

        self.on_start: Optional[Callable[[], None]] = None
        self.on_end: Optional[Callable[[], None]] = None
        self.on_result: Optional[Callable[[str], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None

        self._audio: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None

    def start(self):
        self._audio = asyncio.Queue()
        self._task = asyncio.get_running_loop().create_task(self._run(self._audio))

    def feed(self, chunk: bytes):
        if self._audio is not None:
            self._audio.put_nowait(chunk)

    def stop(self):
        if self._audio is not None:
            self._audio.put_nowait(None)

    def abort(self):
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self):
        """Wait for the current session to finish"""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self, audio: asyncio.Queue):
        self._emit(self.on_start)
        try:
            try:
                transcript = await self._transcribe(audio)
            except asyncio.CancelledError:
                logger.info("Transcription aborted")
                raise
            except Exception as e:
                logger.error("❌ Transcription error: %s", e)
                self._emit(self.on_error, capture_error_code(e))
            else:
                if transcript:
                    self._emit(self.on_result, transcript)
                else:
                    self._emit(self.on_error, "no-speech")
        finally:
            self._audio = None
            self._emit(self.on_end)

    async def _transcribe(self, audio: asyncio.Queue) -> str:
        client = self.client_factory(self.region)
        stream = await client.start_stream_transcription(
            language_code=self.language_code,
            media_sample_rate_hz=self.sample_rate,
            media_encoding="pcm",
        )
        handler = FinalSegmentCollector(stream.output_stream, on_partial=self.on_partial)

        async def write_audio():
            try:
                async for chunk in audio_stream_generator(audio):
                    await stream.input_stream.send_audio_event(audio_chunk=chunk)
            finally:
                # tell AWS we are done sending audio
                await stream.input_stream.end_stream()

        await asyncio.gather(write_audio(), handler.handle_events())
        return " ".join(s.strip() for s in handler.segments if s.strip())

    @staticmethod
    def _emit(callback, *args):
        if callback is not None:
            callback(*args)
