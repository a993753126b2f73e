"""
Pytest configuration and shared fixtures for all tests.

This module provides the fake provider agents, an isolated data directory,
credential helpers and sample documents used across the unit tests.
"""
import io
import os
import time
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Before any project import reads settings
os.environ["APP_ENV"] = "test"
os.environ["LANGSMITH_TRACING"] = "0"  # Disable tracing in tests

import jwt
import pytest
from pypdf import PdfWriter

from backend.app.models.schemas import OwnerContext
from backend.app.services.agent_registry import agent_registry
from shared.config import settings


def agent_reply(text):
    """Shape of an AutoGen TaskResult as far as the workflows read it."""
    return SimpleNamespace(messages=[SimpleNamespace(content=text)])


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point the JSON store and document blobs at a per-test directory."""
    monkeypatch.setattr(settings, "data_dir", str(tmp_path))
    yield tmp_path


@pytest.fixture
def fake_provider(monkeypatch):
    """
    Replace the provider agents with AsyncMocks.

    Tests read `summarize` / `translate` to script replies and assert call counts.
    """
    provider = SimpleNamespace(
        summarize=AsyncMock(return_value=agent_reply(
            "Title: Tariff Reduction Policy\n\nPolicy X reduces tariffs."
        )),
        translate=AsyncMock(return_value=agent_reply("नीति X शुल्क कम करती है।")),
    )
    monkeypatch.setattr(agent_registry, "summarizer", lambda: SimpleNamespace(run=provider.summarize))
    monkeypatch.setattr(agent_registry, "translator", lambda: SimpleNamespace(run=provider.translate))
    yield provider


@pytest.fixture
def make_token():
    """Issue bearer credentials the way the auth service does."""
    def _make(identity="user-a", expires_in=3600, secret=None, **claims):
        payload = {"_id": identity, "exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return _make


@pytest.fixture
def owner_a():
    return OwnerContext(identity="user-a", token="token-a")


@pytest.fixture
def owner_b():
    return OwnerContext(identity="user-b", token="token-b")


@pytest.fixture
def blank_pdf_bytes():
    """A well-formed one-page PDF without any text layer."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def sample_policy_text():
    """Sample extracted policy text for testing."""
    return """
    Section 1: Purpose
    Policy X reduces import tariffs on agricultural equipment from 12% to 5%.

    Section 2: Eligibility
    Registered farmer producer organisations may claim the reduced rate from 1 April.
    """


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
