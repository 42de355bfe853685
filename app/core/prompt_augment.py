"""Injection of the cached reference document into chat prompts."""

from typing import Any

DEFAULT_MAX_CHARS = 50_000
DEFAULT_CONTACT_HINT = "the museum staff"


def build_document_block(
    cached_text: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    contact_hint: str = DEFAULT_CONTACT_HINT,
) -> str:
    """
    Build the system instruction block carrying the reference document.

    The document is cut to its first ``max_chars`` characters with no
    regard to word or sentence boundaries.

    Args:
        cached_text: Normalized document text
        max_chars: Character budget for the document text
        contact_hint: Who to refer users to when the document has no answer

    Returns:
        System message content
    """
    excerpt = cached_text[: max(max_chars, 0)]
    return (
        "[REFERENCE DOCUMENT]\n"
        f"{excerpt}\n"
        "\n"
        "INSTRUCTIONS:\n"
        "- Prioritize the information in this document when answering.\n"
        "- If the question is not covered by the document, say so clearly "
        f"and suggest speaking with {contact_hint}.\n"
        "- Keep a friendly and concise tone."
    )


def augment_messages(
    messages: list[dict[str, Any]] | None,
    cached_text: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    contact_hint: str = DEFAULT_CONTACT_HINT,
) -> list[dict[str, Any]]:
    """
    Insert the document block into a conversation.

    The block goes right after a leading system message, or first when
    there is none. Caller messages are never reordered or modified.

    Args:
        messages: Conversation in order (None is treated as empty)
        cached_text: Current document text; empty means no augmentation
        max_chars: Character budget for the document text
        contact_hint: Who to refer users to when the document has no answer

    Returns:
        The input unchanged when there is no document, otherwise a new list
        with one extra system message
    """
    if not cached_text:
        return messages if messages is not None else []

    messages = list(messages or [])
    block = {
        "role": "system",
        "content": build_document_block(cached_text, max_chars, contact_hint),
    }

    if messages and messages[0].get("role") == "system":
        return [messages[0], block, *messages[1:]]
    return [block, *messages]
