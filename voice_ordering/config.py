# voice_ordering/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
AWS_REGION = os.getenv("AWS_REGION", "us-west-2")

MENU_PATH = os.getenv("MENU_PATH")  # None -> bundled menu
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en-US")
TRANSCRIBE_SAMPLE_RATE = int(os.getenv("TRANSCRIBE_SAMPLE_RATE", "16000"))
POLLY_VOICE_ID = os.getenv("POLLY_VOICE_ID", "Joanna")
SUGGESTION_THRESHOLD = float(os.getenv("SUGGESTION_THRESHOLD", "0.6"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:4200").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def check_aws_config() -> bool:
    """Warn (don't fail) when live transcription / Polly can't work"""
    if not all([AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY]):
        logger.warning("Missing AWS credentials in .env; live transcription and speech synthesis are disabled")
        return False
    return True
