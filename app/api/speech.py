"""Speech-to-text and text-to-speech relay endpoints."""

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.core.config import get_settings
from app.core.errors import MissingInputError, UpstreamError
from app.core.logging import get_logger
from app.core.schemas_relay import (
    LegacySpeechResponse,
    SpeechResponse,
    SynthesizeRequest,
    TranscribeResponse,
)
from app.services.openai_relay import SpeechPayload, synthesize_speech, transcribe_audio

logger = get_logger(__name__)

router = APIRouter(tags=["speech"])


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(audio: UploadFile | None = File(default=None)) -> TranscribeResponse:
    """Relay an audio recording to the transcription model.

    Raises:
        HTTPException 400: If no audio file was sent
        HTTPException 413: If the file exceeds MAX_AUDIO_UPLOAD_BYTES
        HTTPException 500: If the upstream call fails
    """
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file")

    settings = get_settings()
    if audio.size is not None and audio.size > settings.MAX_AUDIO_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Audio file too large")

    try:
        audio_bytes = await audio.read()
        if len(audio_bytes) > settings.MAX_AUDIO_UPLOAD_BYTES:
            raise HTTPException(status_code=413, detail="Audio file too large")
        text = await transcribe_audio(
            audio_bytes,
            filename=audio.filename,
            content_type=audio.content_type,
        )
    except HTTPException:
        raise
    except MissingInputError as e:
        raise HTTPException(status_code=400, detail="No audio file") from e
    except UpstreamError as e:
        raise HTTPException(status_code=500, detail="Transcription failed") from e
    except Exception as e:
        logger.exception("Server error /transcribe")
        raise HTTPException(status_code=500, detail="Server error") from e

    return TranscribeResponse(text=text)


async def _synthesize(request: SynthesizeRequest, route: str) -> SpeechPayload:
    """Run one synthesis call, mapping failures to HTTP errors."""
    try:
        return await synthesize_speech(request.text, voice=request.voice)
    except UpstreamError as e:
        raise HTTPException(status_code=500, detail="TTS request failed") from e
    except Exception as e:
        logger.exception(f"Server error {route}")
        raise HTTPException(status_code=500, detail="Server error") from e


@router.post("/tts", response_model=LegacySpeechResponse)
async def tts(request: SynthesizeRequest) -> LegacySpeechResponse:
    """Synthesize speech, returned as ``{audio, mime}``."""
    payload = await _synthesize(request, "/tts")
    return LegacySpeechResponse(audio=payload.base64, mime=payload.mime)


@router.post("/synthesize", response_model=SpeechResponse)
async def synthesize(request: SynthesizeRequest) -> SpeechResponse:
    """Synthesize speech, returned as ``{base64, mime}``."""
    payload = await _synthesize(request, "/synthesize")
    return SpeechResponse(base64=payload.base64, mime=payload.mime)
