"""Single-attempt relay calls to the OpenAI chat, transcription and speech APIs."""

import base64
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from app.core.config import get_settings
from app.core.errors import MissingInputError, UpstreamError
from app.core.logging import get_logger, log_with_context
from app.core.schemas_relay import AUDIO_MIME

logger = get_logger(__name__)

DEFAULT_AUDIO_FILENAME = "audio.m4a"
DEFAULT_AUDIO_CONTENT_TYPE = "audio/mpeg"


@dataclass(frozen=True)
class SpeechPayload:
    """Synthesized audio, independent of the response envelope."""

    base64: str
    mime: str = AUDIO_MIME


@lru_cache
def _get_client() -> AsyncOpenAI:
    """Get OpenAI client instance. Retries are disabled."""
    settings = get_settings()
    return AsyncOpenAI(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        timeout=httpx.Timeout(settings.OPENAI_TIMEOUT_SECONDS, connect=10.0),
        max_retries=0,
    )


def _upstream_error(operation: str, e: Exception) -> UpstreamError:
    """Log an upstream failure in full and wrap it for the caller."""
    if isinstance(e, APIStatusError):
        body = e.response.text if e.response is not None else None
        log_with_context(
            logger,
            logging.ERROR,
            f"{operation} error",
            status_code=e.status_code,
            body=body,
        )
        return UpstreamError(f"{operation} request failed", status_code=e.status_code, body=body)

    log_with_context(logger, logging.ERROR, f"{operation} transport error", error=str(e))
    return UpstreamError(f"{operation} request failed")


async def complete_chat(messages: list[dict[str, Any]]) -> str:
    """
    Forward a message list to the chat completion endpoint.

    Args:
        messages: Already-augmented conversation, sent verbatim

    Returns:
        Text of the first choice, or "" if the response has none

    Raises:
        UpstreamError: If the provider call fails
    """
    settings = get_settings()
    client = _get_client()

    try:
        response = await client.chat.completions.create(
            model=settings.CHAT_MODEL,
            messages=messages,
        )
    except (APIStatusError, APIConnectionError) as e:
        raise _upstream_error("Chat", e) from e

    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


async def transcribe_audio(
    audio_bytes: bytes,
    filename: str | None = None,
    content_type: str | None = None,
) -> str:
    """
    Forward recorded audio to the transcription endpoint.

    Args:
        audio_bytes: Raw audio content
        filename: Original filename (default audio.m4a)
        content_type: Original MIME type (default audio/mpeg)

    Returns:
        Transcript text, or "" if the provider returned none

    Raises:
        MissingInputError: If no audio bytes were supplied
        UpstreamError: If the provider call fails
    """
    if not audio_bytes:
        raise MissingInputError("No audio file")

    settings = get_settings()
    client = _get_client()
    upload = (
        filename or DEFAULT_AUDIO_FILENAME,
        audio_bytes,
        content_type or DEFAULT_AUDIO_CONTENT_TYPE,
    )

    try:
        transcription = await client.audio.transcriptions.create(
            model=settings.TRANSCRIBE_MODEL,
            file=upload,
        )
    except (APIStatusError, APIConnectionError) as e:
        raise _upstream_error("STT", e) from e

    text = getattr(transcription, "text", None) or ""
    logger.debug(f"Transcribed {len(audio_bytes)} bytes into {len(text)} chars")
    return text


async def synthesize_speech(text: str, voice: str | None = None) -> SpeechPayload:
    """
    Turn text into speech.

    Args:
        text: Text to speak
        voice: Upstream voice id (TTS_DEFAULT_VOICE if omitted)

    Returns:
        SpeechPayload with base64-encoded MP3 audio

    Raises:
        UpstreamError: If the provider call fails
    """
    settings = get_settings()
    client = _get_client()

    try:
        response = await client.audio.speech.create(
            model=settings.TTS_MODEL,
            voice=voice if voice is not None else settings.TTS_DEFAULT_VOICE,
            input=text,
        )
    except (APIStatusError, APIConnectionError) as e:
        raise _upstream_error("TTS", e) from e

    audio = response.content
    logger.debug(f"Synthesized {len(text)} chars into {len(audio)} audio bytes")
    return SpeechPayload(base64=base64.b64encode(audio).decode("ascii"))
