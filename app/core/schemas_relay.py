"""Pydantic models for the relay endpoints.

Field names are the wire contract with the mobile client.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AUDIO_MIME = "audio/mpeg"


# ---------------------------------------------------------------------------
# Knowledge base
# ---------------------------------------------------------------------------


class KbUploadResponse(BaseModel):
    ok: bool = True
    chars: int
    preview: str = Field(..., description="First characters of the cached text")


class KbStatusResponse(BaseModel):
    loaded: bool
    chars: int


class OkResponse(BaseModel):
    ok: bool = True


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """One conversation turn, forwarded upstream as-is."""

    model_config = ConfigDict(extra="allow")

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] | None = None


class ChatResponse(BaseModel):
    content: str


# ---------------------------------------------------------------------------
# Speech
# ---------------------------------------------------------------------------


class TranscribeResponse(BaseModel):
    text: str


class SynthesizeRequest(BaseModel):
    text: str
    voice: str | None = Field(default=None, description="Upstream voice id; server default if omitted")


class LegacySpeechResponse(BaseModel):
    """Envelope returned by /tts."""

    audio: str
    mime: str = AUDIO_MIME


class SpeechResponse(BaseModel):
    """Envelope returned by /synthesize."""

    base64: str
    mime: str = AUDIO_MIME
