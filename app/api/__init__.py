"""API router for relay endpoints."""

from fastapi import APIRouter

from app.api import chat, kb, speech

router = APIRouter()

# Knowledge-base document upload, status and clear
router.include_router(kb.router)

# Chat relay with document augmentation
router.include_router(chat.router)

# Speech-to-text and text-to-speech relays
router.include_router(speech.router)
