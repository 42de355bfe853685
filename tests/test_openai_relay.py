"""Tests for the OpenAI relay calls with a mocked client."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from openai import APIConnectionError, APIStatusError

from app.core.errors import MissingInputError, UpstreamError
from app.services.openai_relay import (
    complete_chat,
    synthesize_speech,
    transcribe_audio,
)


def _status_error(status_code: int = 500, body: str = '{"error": "boom"}') -> APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request, text=body)
    return APIStatusError("upstream failure", response=response, body=None)


def _chat_response(content):
    response = MagicMock()
    if content is None:
        response.choices = []
    else:
        choice = MagicMock()
        choice.message.content = content
        response.choices = [choice]
    return response


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.audio.transcriptions.create = AsyncMock()
    client.audio.speech.create = AsyncMock()
    with patch("app.services.openai_relay._get_client", return_value=client):
        yield client


class TestCompleteChat:
    @pytest.mark.asyncio
    async def test_returns_first_choice_content(self, mock_client):
        mock_client.chat.completions.create.return_value = _chat_response("Hello!")
        messages = [{"role": "user", "content": "Hi"}]

        content = await complete_chat(messages)

        assert content == "Hello!"
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"] == messages

    @pytest.mark.asyncio
    async def test_no_choices_returns_empty_string(self, mock_client):
        mock_client.chat.completions.create.return_value = _chat_response(None)

        assert await complete_chat([{"role": "user", "content": "Hi"}]) == ""

    @pytest.mark.asyncio
    async def test_null_content_returns_empty_string(self, mock_client):
        mock_client.chat.completions.create.return_value = _chat_response(None)
        mock_client.chat.completions.create.return_value.choices = [MagicMock()]
        mock_client.chat.completions.create.return_value.choices[0].message.content = None

        assert await complete_chat([]) == ""

    @pytest.mark.asyncio
    async def test_status_error_becomes_upstream_error(self, mock_client):
        mock_client.chat.completions.create.side_effect = _status_error(401, "bad key")

        with pytest.raises(UpstreamError) as exc_info:
            await complete_chat([{"role": "user", "content": "Hi"}])

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "bad key"

    @pytest.mark.asyncio
    async def test_connection_error_becomes_upstream_error(self, mock_client):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_client.chat.completions.create.side_effect = APIConnectionError(request=request)

        with pytest.raises(UpstreamError) as exc_info:
            await complete_chat([{"role": "user", "content": "Hi"}])

        assert exc_info.value.status_code is None


class TestTranscribeAudio:
    @pytest.mark.asyncio
    async def test_forwards_file_with_metadata(self, mock_client):
        mock_client.audio.transcriptions.create.return_value = MagicMock(text="hola")

        text = await transcribe_audio(b"RIFF...", filename="clip.wav", content_type="audio/wav")

        assert text == "hola"
        kwargs = mock_client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini-transcribe"
        assert kwargs["file"] == ("clip.wav", b"RIFF...", "audio/wav")

    @pytest.mark.asyncio
    async def test_defaults_filename_and_content_type(self, mock_client):
        mock_client.audio.transcriptions.create.return_value = MagicMock(text="ok")

        await transcribe_audio(b"data")

        kwargs = mock_client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["file"] == ("audio.m4a", b"data", "audio/mpeg")

    @pytest.mark.asyncio
    async def test_missing_text_returns_empty_string(self, mock_client):
        mock_client.audio.transcriptions.create.return_value = MagicMock(text=None)

        assert await transcribe_audio(b"data") == ""

    @pytest.mark.asyncio
    async def test_empty_audio_raises_without_upstream_call(self, mock_client):
        with pytest.raises(MissingInputError):
            await transcribe_audio(b"")

        mock_client.audio.transcriptions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_status_error_becomes_upstream_error(self, mock_client):
        mock_client.audio.transcriptions.create.side_effect = _status_error(400)

        with pytest.raises(UpstreamError):
            await transcribe_audio(b"data")


class TestSynthesizeSpeech:
    @pytest.mark.asyncio
    async def test_encodes_audio_as_base64(self, mock_client):
        mock_client.audio.speech.create.return_value = MagicMock(content=b"ID3audio")

        payload = await synthesize_speech("hello", voice="nova")

        assert payload.base64 == base64.b64encode(b"ID3audio").decode("ascii")
        assert payload.mime == "audio/mpeg"
        kwargs = mock_client.audio.speech.create.call_args.kwargs
        assert kwargs == {"model": "gpt-4o-mini-tts", "voice": "nova", "input": "hello"}

    @pytest.mark.asyncio
    async def test_default_voice(self, mock_client):
        mock_client.audio.speech.create.return_value = MagicMock(content=b"x")

        await synthesize_speech("hello")

        assert mock_client.audio.speech.create.call_args.kwargs["voice"] == "alloy"

    @pytest.mark.asyncio
    async def test_empty_voice_is_forwarded_as_given(self, mock_client):
        mock_client.audio.speech.create.return_value = MagicMock(content=b"x")

        await synthesize_speech("hello", voice="")

        assert mock_client.audio.speech.create.call_args.kwargs["voice"] == ""

    @pytest.mark.asyncio
    async def test_status_error_becomes_upstream_error(self, mock_client):
        mock_client.audio.speech.create.side_effect = _status_error(429)

        with pytest.raises(UpstreamError) as exc_info:
            await synthesize_speech("hello")

        assert exc_info.value.status_code == 429
