# voice_ordering/responder.py
"""Text-to-speech collaborators: speak(text), fire-and-forget."""

import logging
from contextlib import closing
from typing import Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from . import config

logger = logging.getLogger(__name__)


class RecordingResponder:
    """Remembers what would have been spoken

    A new utterance cancels the unfinished one, so only the latest is
    pending. The live session attaches it to error messages.
    """

    def __init__(self):
        self.pending: Optional[str] = None

    def speak(self, text: str) -> None:
        self.pending = text

    def take(self) -> Optional[str]:
        """Pop the pending utterance"""
        text, self.pending = self.pending, None
        return text


class PollyResponder:
    """Speak through AWS Polly"""

    def __init__(
        self,
        voice_id: str = config.POLLY_VOICE_ID,
        output_format: str = "mp3",
        sink: Optional[Callable[[bytes], None]] = None,
        client=None,
    ):
        """
        Args:
            voice_id: Polly voice
            output_format: mp3 | ogg_vorbis | pcm
            sink: Receives synthesized audio from speak()
            client: Pre-built polly client (tests)
        """
        self.voice_id = voice_id
        self.output_format = output_format
        self.sink = sink
        self.polly = client or boto3.client(
            "polly",
            region_name=config.AWS_REGION,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        )

    def synthesize(self, text: str) -> bytes:
        """Return audio bytes for text. Raises botocore errors."""
        response = self.polly.synthesize_speech(
            Text=text,
            OutputFormat=self.output_format,
            VoiceId=self.voice_id,
        )
        with closing(response["AudioStream"]) as stream:
            return stream.read()

    def speak(self, text: str) -> None:
        try:
            audio = self.synthesize(text)
        except (BotoCoreError, ClientError) as e:
            logger.error("❌ Polly synthesis failed: %s", e)
            return
        if self.sink is not None:
            self.sink(audio)
