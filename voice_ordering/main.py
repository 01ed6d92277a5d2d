# voice_ordering/main.py
import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Literal, Optional

import uvicorn
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from . import config
from .api_pipeline import VoicePipeline
from .dispatcher import DispatchMode
from .menu_loader import MenuLoader
from .responder import PollyResponder, RecordingResponder
from .session import SessionController, classify_error
from .transcribe import TranscribeCapture

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

config.check_aws_config()

# --- FastAPI App ---
app = FastAPI(title="Voice Ordering")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Models ---
class VoiceRequest(BaseModel):
    transcript: str
    locale: str = config.DEFAULT_LOCALE
    mode: Literal["voice_search", "command"] = "command"


class VoiceResponse(BaseModel):
    success: bool
    transcription: Dict[str, Any]
    classification: Dict[str, Any]
    parsing: Optional[Dict[str, Any]] = None
    action: Dict[str, Any]
    speech: Optional[str] = None


class CaptureErrorRequest(BaseModel):
    code: str
    locale: str = config.DEFAULT_LOCALE


class SpeechRequest(BaseModel):
    text: str = Field(min_length=1, max_length=3000)


# --- Helper Functions ---
@lru_cache(maxsize=1)
def get_menu() -> MenuLoader:
    return MenuLoader(config.MENU_PATH)


@lru_cache(maxsize=1)
def get_polly() -> PollyResponder:
    return PollyResponder()


def build_pipeline(locale: str, mode: str, speaker=None) -> VoicePipeline:
    return VoicePipeline(
        get_menu(),
        locale=locale,
        mode=DispatchMode(mode),
        speaker=speaker,
    )


@lru_cache(maxsize=32)
def get_pipeline(locale: str, mode: str) -> VoicePipeline:
    """Shared speaker-less pipeline for one-shot requests"""
    return build_pipeline(locale, mode)


# --- Menu Endpoint ---
@app.get("/api/menu")
async def get_menu_api():
    menu = get_menu()
    return {
        "categories": menu.get_category_names(),
        "products": [p.model_dump(mode="json") for p in menu.get_all_products()],
    }


# --- Voice Endpoints ---
@app.post("/api/voice/process", response_model=VoiceResponse)
async def process_voice(request: VoiceRequest):
    """Run one transcript through the pipeline"""
    if not request.transcript.strip():
        raise HTTPException(status_code=400, detail="Transcript is empty")

    return get_pipeline(request.locale, request.mode).process_text(request.transcript)


@app.post("/api/voice/error")
async def classify_capture_error(request: CaptureErrorRequest):
    """Classify an error reported by a client-side recognizer"""
    return classify_error(request.code, request.locale).to_dict()


@app.post("/api/speech/synthesize")
async def synthesize_speech(request: SpeechRequest):
    if not config.check_aws_config():
        raise HTTPException(status_code=503, detail="Speech synthesis is not configured")
    try:
        audio = await asyncio.to_thread(get_polly().synthesize, request.text)
    except (BotoCoreError, ClientError) as e:
        logger.error("✗ Polly error: %s", e)
        raise HTTPException(status_code=502, detail=f"Speech synthesis failed: {e}")
    return Response(content=audio, media_type="audio/mpeg")


# --- WebSocket Audio Stream ---
def session_status(controller: SessionController) -> Dict:
    return {
        "status": "STATE",
        "state": controller.state.value,
        "error": controller.error.to_dict() if controller.error else None,
    }


@app.websocket("/ws/transcribe-live")
async def websocket_transcribe_live(
    websocket: WebSocket,
    locale: str = config.DEFAULT_LOCALE,
    mode: Literal["voice_search", "command"] = "command",
):
    """Live capture: binary frames are PCM audio, text frames are
    {"action": "start" | "stop" | "toggle"}"""
    await websocket.accept()
    logger.info("🔌 Transcription connection open (%s, %s)", locale, mode)

    outbox: asyncio.Queue = asyncio.Queue()
    responder = RecordingResponder()
    pipeline = build_pipeline(locale, mode, speaker=responder)

    def on_utterance(utterance):
        result = pipeline.process_utterance(utterance)
        outbox.put_nowait({"status": "RESULT", "data": result})

    def on_change(controller: SessionController):
        message = session_status(controller)
        spoken = responder.take()
        if controller.error and spoken:
            message["speech"] = spoken
        outbox.put_nowait(message)

    capture = TranscribeCapture(
        locale=locale,
        on_partial=lambda text: outbox.put_nowait({"status": "PARTIAL_SEGMENT", "transcript": text}),
    )
    controller = SessionController(
        capture,
        on_utterance,
        locale=locale,
        speaker=responder,
        on_change=on_change,
    )

    async def send_to_client():
        while True:
            message = await outbox.get()
            await websocket.send_json(message)

    sender = asyncio.create_task(send_to_client())

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            if message.get("bytes") is not None:
                capture.feed(message["bytes"])
                continue

            try:
                data = json.loads(message.get("text") or "{}")
            except json.JSONDecodeError:
                outbox.put_nowait({"status": "ERROR", "detail": "Expected JSON control message"})
                continue

            action = data.get("action") if isinstance(data, dict) else None
            if action == "start":
                controller.start()
            elif action == "stop":
                controller.stop()
            elif action == "toggle":
                controller.toggle()
            else:
                outbox.put_nowait({"status": "ERROR", "detail": f"Unknown action: {action!r}"})
    except WebSocketDisconnect:
        logger.info("🔌 Client disconnected")
    finally:
        controller.close()
        await capture.wait()
        sender.cancel()
        logger.info("Live transcription websocket closed.")


# --- Run the Server ---
def run(host: str = "0.0.0.0", port: int = 8000):
    logger.info("Starting voice ordering server at http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
