"""
Unit tests for the pipeline orchestrator.

Covers the create and translate sequences end to end against the JSON store,
with the provider mocked: all-or-nothing creation, the single-slot translation
cache, and ownership scoping.
"""
import asyncio
import os
from unittest.mock import patch

import pytest
import pytest_asyncio
from conftest import agent_reply
from backend.app.models.schemas import UploadedDocument
from backend.app.services import orchestrator
from backend.app.services.exceptions import (
    EmptyDocumentError,
    ExtractionError,
    InvalidUploadError,
    NotFoundError,
    SummarizationError,
    TranslationError,
    UnsupportedLanguageError,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def upload(blank_pdf_bytes):
    return UploadedDocument(filename="tariff_policy.pdf", content_type="application/pdf", data=blank_pdf_bytes)


@pytest.fixture
def policy_text(sample_policy_text):
    """Pretend the uploaded PDF has a text layer."""
    with patch("backend.app.services.orchestrator.extract_text", return_value=sample_policy_text):
        yield sample_policy_text


def _documents(data_dir):
    path = os.path.join(str(data_dir), "documents")
    return os.listdir(path) if os.path.isdir(path) else []


class TestCreateSummary:

    @pytest.mark.asyncio
    async def test_create_persists_record(self, fake_provider, policy_text, upload, owner_a):
        rec = await orchestrator.create_summary(owner_a, upload)

        assert rec.owner == "user-a"
        assert rec.title == "Tariff Reduction Policy"
        assert rec.summarized_text == "Policy X reduces tariffs."
        assert rec.translation is None
        assert os.path.exists(rec.source_document_ref)
        listed = await orchestrator.list_summaries(owner_a)
        assert [s.id for s in listed] == [rec.id]

    @pytest.mark.asyncio
    async def test_missing_file(self, fake_provider, owner_a):
        with pytest.raises(InvalidUploadError) as exc:
            await orchestrator.create_summary(owner_a, UploadedDocument())

        assert exc.value.details["reason"] == "missing_file"
        fake_provider.summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oversized_file(self, fake_provider, upload, owner_a, monkeypatch):
        monkeypatch.setattr(orchestrator.settings, "max_upload_bytes", 10)

        with pytest.raises(InvalidUploadError) as exc:
            await orchestrator.create_summary(owner_a, upload)

        assert exc.value.details["reason"] == "too_large"

    @pytest.mark.asyncio
    async def test_empty_document_creates_nothing(self, fake_provider, upload, owner_a, data_dir):
        # Real extraction of a PDF without a text layer yields ""
        with pytest.raises(EmptyDocumentError):
            await orchestrator.create_summary(owner_a, upload)

        fake_provider.summarize.assert_not_awaited()
        assert await orchestrator.list_summaries(owner_a) == []
        assert _documents(data_dir) == []

    @pytest.mark.asyncio
    async def test_unreadable_document_creates_nothing(self, fake_provider, owner_a):
        corrupt = UploadedDocument(filename="bad.pdf", content_type="application/pdf", data=b"%PDF-1.4 garbage")

        with pytest.raises(ExtractionError):
            await orchestrator.create_summary(owner_a, corrupt)

        assert await orchestrator.list_summaries(owner_a) == []

    @pytest.mark.asyncio
    async def test_provider_failure_creates_nothing(self, fake_provider, policy_text, upload, owner_a, data_dir):
        fake_provider.summarize.side_effect = RuntimeError("503 from provider")

        with pytest.raises(SummarizationError):
            await orchestrator.create_summary(owner_a, upload)

        assert fake_provider.summarize.await_count == 1
        assert await orchestrator.list_summaries(owner_a) == []
        assert _documents(data_dir) == []

    @pytest.mark.asyncio
    async def test_store_failure_discards_source_document(self, fake_provider, policy_text, upload, owner_a, data_dir):
        with patch("storage.local_store.put_summary", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                await orchestrator.create_summary(owner_a, upload)

        assert _documents(data_dir) == []

    @pytest.mark.asyncio
    async def test_concurrent_creates_all_persist(self, fake_provider, policy_text, upload, owner_a, owner_b):
        results = await asyncio.gather(
            orchestrator.create_summary(owner_a, upload),
            orchestrator.create_summary(owner_a, upload),
            orchestrator.create_summary(owner_b, upload),
        )

        assert len({r.id for r in results}) == 3
        assert len(await orchestrator.list_summaries(owner_a)) == 2
        assert len(await orchestrator.list_summaries(owner_b)) == 1


class TestTranslateSummary:

    @pytest_asyncio.fixture
    async def summary(self, fake_provider, policy_text, upload, owner_a):
        return await orchestrator.create_summary(owner_a, upload)

    @pytest.mark.asyncio
    async def test_translate_then_cache_hit(self, fake_provider, summary, owner_a):
        first = await orchestrator.translate_summary(owner_a, summary.id, "Hindi")
        second = await orchestrator.translate_summary(owner_a, summary.id, "Hindi")

        assert fake_provider.translate.await_count == 1
        assert first.cached is False and second.cached is True
        assert first.translation == second.translation
        stored = await orchestrator.get_summary(owner_a, summary.id)
        assert stored.translation.language == "Hindi"
        assert stored.translation.translated_text == "नीति X शुल्क कम करती है।"

    @pytest.mark.asyncio
    async def test_new_language_replaces_cached_one(self, fake_provider, summary, owner_a):
        await orchestrator.translate_summary(owner_a, summary.id, "Hindi")
        fake_provider.translate.return_value = agent_reply("கொள்கை X வரிகளை குறைக்கிறது.")

        result = await orchestrator.translate_summary(owner_a, summary.id, "Tamil")

        stored = await orchestrator.get_summary(owner_a, summary.id)
        assert stored.translation == result.translation
        assert stored.translation.language == "Tamil"
        # Hindi was discarded, so asking again goes back to the provider
        await orchestrator.translate_summary(owner_a, summary.id, "Hindi")
        assert fake_provider.translate.await_count == 3

    @pytest.mark.asyncio
    async def test_unsupported_language_before_any_lookup(self, fake_provider, summary, owner_a):
        with pytest.raises(UnsupportedLanguageError):
            await orchestrator.translate_summary(owner_a, summary.id, "Klingon")
        with pytest.raises(UnsupportedLanguageError):
            await orchestrator.translate_summary(owner_a, "does-not-exist", "Klingon")

        fake_provider.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_summary_is_not_found(self, fake_provider, summary, owner_b):
        with pytest.raises(NotFoundError):
            await orchestrator.translate_summary(owner_b, summary.id, "Hindi")

        fake_provider.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_translation_keeps_previous_cache(self, fake_provider, summary, owner_a):
        good = await orchestrator.translate_summary(owner_a, summary.id, "Hindi")
        fake_provider.translate.side_effect = RuntimeError("rate limited")

        with pytest.raises(TranslationError):
            await orchestrator.translate_summary(owner_a, summary.id, "Bengali")

        stored = await orchestrator.get_summary(owner_a, summary.id)
        assert stored.translation == good.translation

    @pytest.mark.asyncio
    async def test_blank_translation_never_persisted(self, fake_provider, summary, owner_a):
        fake_provider.translate.return_value = agent_reply("")

        with pytest.raises(TranslationError):
            await orchestrator.translate_summary(owner_a, summary.id, "Urdu")

        assert (await orchestrator.get_summary(owner_a, summary.id)).translation is None


class TestDeleteSummary:

    @pytest.mark.asyncio
    async def test_delete_own_summary(self, fake_provider, policy_text, upload, owner_a):
        rec = await orchestrator.create_summary(owner_a, upload)

        await orchestrator.delete_summary(owner_a, rec.id)

        assert await orchestrator.list_summaries(owner_a) == []
        assert not os.path.exists(rec.source_document_ref)

    @pytest.mark.asyncio
    async def test_delete_foreign_matches_missing(self, fake_provider, policy_text, upload, owner_a, owner_b):
        rec = await orchestrator.create_summary(owner_a, upload)

        with pytest.raises(NotFoundError) as foreign:
            await orchestrator.delete_summary(owner_b, rec.id)
        with pytest.raises(NotFoundError) as missing:
            await orchestrator.delete_summary(owner_b, "no-such-id")

        assert type(foreign.value) is type(missing.value)
        assert len(await orchestrator.list_summaries(owner_a)) == 1
