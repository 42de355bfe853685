"""Pytest configuration and fixtures."""

import os

import pytest

# Settings are read at app import time, before session fixtures run
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("RELAY_ENV", "test")
os.environ.pop("KB_PDF_PATH", None)


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["RELAY_ENV"] = "test"


@pytest.fixture(autouse=True)
def reset_document_cache():
    """Start every test with an empty document cache."""
    from app.core.document_cache import document_cache

    document_cache.clear()
    yield
    document_cache.clear()


@pytest.fixture
def make_pdf():
    """Build an in-memory PDF with one page per text."""
    import fitz

    def _make_pdf(*pages: str) -> bytes:
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text)
        data = doc.tobytes()
        doc.close()
        return data

    return _make_pdf


@pytest.fixture
def large_pdf():
    """A valid one-page PDF padded past 40 MiB with an incompressible attachment."""
    import fitz

    doc = fitz.open()
    doc.new_page().insert_text((72, 72), "Large guide")
    doc.embfile_add("padding.bin", os.urandom(41 * 1024 * 1024))
    data = doc.tobytes()
    doc.close()
    return data
