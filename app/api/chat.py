"""Chat relay endpoint with reference-document augmentation."""

from fastapi import APIRouter, HTTPException

from app.core.config import get_settings
from app.core.document_cache import document_cache
from app.core.errors import UpstreamError
from app.core.logging import get_logger
from app.core.prompt_augment import augment_messages
from app.core.schemas_relay import ChatRequest, ChatResponse
from app.services.openai_relay import complete_chat

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """Relay a conversation to the chat model and return the reply text.

    Raises:
        HTTPException 500: If the upstream call fails or anything else breaks
    """
    settings = get_settings()

    try:
        messages = [m.model_dump() for m in request.messages or []]
        cached_text = document_cache.text
        augmented = augment_messages(
            messages,
            cached_text,
            max_chars=settings.KB_MAX_CHARS,
            contact_hint=settings.KB_CONTACT_HINT,
        )
        logger.debug(
            f"Chat relay: {len(messages)} messages, "
            f"augmented={len(augmented) != len(messages)}"
        )
        content = await complete_chat(augmented)
    except UpstreamError as e:
        raise HTTPException(status_code=500, detail="Chat request failed") from e
    except Exception as e:
        logger.exception("Server error /chat")
        raise HTTPException(status_code=500, detail="Server error") from e

    return ChatResponse(content=content)
