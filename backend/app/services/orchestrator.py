import asyncio
import logging
from dataclasses import dataclass
from typing import List

from backend.app.services.langsmith_logger import traceable
from backend.app.services.extractor import extract_text
from backend.app.services.summary_store import SummaryStore
from backend.app.services.validators import UploadValidator
from backend.app.services.exceptions import (
    InvalidUploadError,
    UnsupportedLanguageError,
)
from backend.app.models.schemas import (
    NewSummary,
    OwnerContext,
    Summary,
    Translation,
    UploadedDocument,
)
from shared.config import settings

# Workflows
from agents.workflows import DocumentSummarizationWorkflow, TranslationWorkflow

logger = logging.getLogger(__name__)

# Initialize singletons; none of them hold per-request state
doc_summarizer = DocumentSummarizationWorkflow()
translator = TranslationWorkflow()
summary_store = SummaryStore()


@dataclass
class TranslationResult:
    summary: Summary
    translation: Translation
    cached: bool


@traceable("create_summary")
async def create_summary(owner: OwnerContext, upload: UploadedDocument) -> Summary:
    """
    Validate -> Extract -> Summarize -> Persist.
    All-or-nothing: any failure before the final store write leaves no record behind.
    """
    # 1) Validate the upload
    ok, info = UploadValidator.validate(
        upload.filename, upload.content_type, upload.data, settings.max_upload_bytes
    )
    if not ok:
        logger.info(f"Rejected upload owner={owner.identity} reason={info.get('reason')}")
        raise InvalidUploadError(f"Invalid upload: {info.get('reason')}", info)

    # 2) Extract text (CPU-bound; keep the event loop free)
    logger.info(f"Extracting text owner={owner.identity} file={upload.filename} bytes={len(upload.data)}")
    raw_text = await asyncio.to_thread(extract_text, upload.data)

    # 3) Summarize (raises EmptyDocumentError / SummarizationError)
    draft = await doc_summarizer.run(raw_text, upload.filename)

    # 4) Persist source blob + record; drop the blob if the record write fails
    ref = await summary_store.save_source_document(upload.data)
    try:
        stored = await summary_store.create(
            NewSummary(
                owner=owner.identity,
                title=draft.title,
                source_document_ref=ref,
                summarized_text=draft.summarized_text,
            )
        )
    except Exception:
        await summary_store.discard_source_document(ref)
        raise
    return stored


@traceable("translate_summary")
async def translate_summary(owner: OwnerContext, summary_id: str, language: str) -> TranslationResult:
    """
    Lookup -> cache check -> Translate -> Persist.
    A failed translation leaves the previously cached one untouched.
    """
    if language not in settings.supported_languages:
        raise UnsupportedLanguageError(
            f"Unsupported language: {language}",
            {"language": language, "supported": list(settings.supported_languages)},
        )

    # 1) Ownership-scoped lookup (NotFoundError for absent or foreign ids)
    record = await summary_store.get_by_id_and_owner(summary_id, owner.identity)

    # 2) Cache hit: same language already attached
    if record.translation is not None and record.translation.language == language:
        logger.info(f"Translation cache hit id={summary_id} language={language}")
        return TranslationResult(summary=record, translation=record.translation, cached=True)

    # 3) Provider call (raises TranslationError)
    logger.info(
        f"Translation cache miss id={summary_id} language={language} "
        f"previous={record.translation.language if record.translation else None}"
    )
    translated = await translator.run(record.summarized_text, language)

    # 4) Overwrite the single translation slot
    translation = Translation(language=language, translated_text=translated)
    updated = await summary_store.attach_translation(summary_id, owner.identity, translation)
    return TranslationResult(summary=updated, translation=translation, cached=False)


async def list_summaries(owner: OwnerContext) -> List[Summary]:
    return await summary_store.list_by_owner(owner.identity)


async def get_summary(owner: OwnerContext, summary_id: str) -> Summary:
    return await summary_store.get_by_id_and_owner(summary_id, owner.identity)


async def delete_summary(owner: OwnerContext, summary_id: str) -> None:
    await summary_store.delete_by_id_and_owner(summary_id, owner.identity)
