"""
Workflow classes wrapping the provider agents with validation.

Each workflow exposes a `run(...)` coroutine that:
1) checks its preconditions without touching the provider,
2) makes exactly one provider call (no retries),
3) validates the output and raises a pipeline error on failure.

Persistence and caching are the orchestrator's job, not the workflows'.
"""
from __future__ import annotations
import logging
import os
import re
from typing import Optional, Tuple
from backend.app.services.agent_registry import agent_registry
from backend.app.services.validators import SummaryValidator, TranslationValidator
from backend.app.services.exceptions import (
    EmptyDocumentError,
    SummarizationError,
    TranslationError,
    UnsupportedLanguageError,
)
from backend.app.models.schemas import SummaryDraft
from shared.config import settings

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"^\s*\**\s*title\s*\**\s*:\s*(.*)$", re.IGNORECASE)


def _last_message(res) -> str:
    content = res.messages[-1].content
    return content if isinstance(content, str) else str(content)


def split_title(answer: str) -> Tuple[Optional[str], str]:
    """Split a `Title: ...` first line off the provider answer. Title is None when absent."""
    lines = answer.strip().splitlines()
    if lines:
        m = _TITLE_RE.match(lines[0])
        if m:
            title = m.group(1).strip().strip("*").strip()
            return title, "\n".join(lines[1:]).strip()
    return None, answer.strip()


def title_from_filename(filename: Optional[str]) -> str:
    stem = os.path.splitext(os.path.basename(filename or ""))[0]
    return re.sub(r"[_\-]+", " ", stem).strip()


class DocumentSummarizationWorkflow:
    async def run(self, raw_text: str, filename: Optional[str] = None) -> SummaryDraft:
        if not raw_text or not raw_text.strip():
            raise EmptyDocumentError("The document contains no extractable text")
        try:
            res = await agent_registry.summarizer().run(
                task="Summarize the following policy document:\n" + raw_text[:settings.max_prompt_chars]
            )
            answer = _last_message(res)
        except Exception as e:
            logger.error(f"Summarization provider call failed: {e}")
            raise SummarizationError(f"Summarization failed: {e}", {"cause": str(e)}) from e

        title, summary = split_title(answer)
        ok, info = SummaryValidator.validate(summary)
        if not ok:
            raise SummarizationError("Provider returned an unusable summary", info)
        return SummaryDraft(title=title or title_from_filename(filename), summarized_text=summary)


class TranslationWorkflow:
    async def run(self, summarized_text: str, target_language: str) -> str:
        if target_language not in settings.supported_languages:
            raise UnsupportedLanguageError(
                f"Unsupported language: {target_language}",
                {"language": target_language, "supported": list(settings.supported_languages)},
            )
        try:
            res = await agent_registry.translator().run(
                task=f"Target language: {target_language}\n\nSUMMARY:\n{summarized_text}"
            )
            translated = _last_message(res).strip()
        except Exception as e:
            logger.error(f"Translation provider call failed (language={target_language}): {e}")
            raise TranslationError(f"Translation failed: {e}", {"cause": str(e), "language": target_language}) from e

        ok, info = TranslationValidator.validate(translated)
        if not ok:
            raise TranslationError("Provider returned an unusable translation", {**info, "language": target_language})
        return translated
