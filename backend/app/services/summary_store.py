"""
Summary Store Gateway: the only component that writes summary records.

Every operation is scoped to an owner. A record owned by someone else is
reported exactly like a record that does not exist, so callers cannot test
for other users' summaries. Blocking file I/O runs in worker threads.
"""
from __future__ import annotations
import asyncio
import logging
from datetime import datetime, timezone
from typing import List
from backend.app.models.schemas import NewSummary, Summary, Translation
from backend.app.services.exceptions import NotFoundError
from storage import local_store

logger = logging.getLogger(__name__)


def _now() -> str:
    # Fixed-width ISO timestamps so the store can order them as strings
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _not_found(summary_id: str) -> NotFoundError:
    return NotFoundError(f"Summary not found: {summary_id}", {"id": summary_id})


class SummaryStore:
    async def create(self, record: NewSummary) -> Summary:
        ts = _now()
        doc = {
            **record.model_dump(),
            "id": local_store.make_summary_id(),
            "translation": None,
            "created_at": ts,
            "updated_at": ts,
        }
        stored = await asyncio.to_thread(local_store.put_summary, doc)
        logger.info(f"Stored summary id={stored['id']} owner={record.owner}")
        return Summary.model_validate(stored)

    async def list_by_owner(self, owner: str) -> List[Summary]:
        recs = await asyncio.to_thread(local_store.list_summaries, owner)
        return [Summary.model_validate(r) for r in recs]

    async def get_by_id_and_owner(self, summary_id: str, owner: str) -> Summary:
        rec = await asyncio.to_thread(local_store.get_summary, summary_id, owner)
        if rec is None:
            raise _not_found(summary_id)
        return Summary.model_validate(rec)

    async def delete_by_id_and_owner(self, summary_id: str, owner: str) -> None:
        rec = await asyncio.to_thread(local_store.delete_summary, summary_id, owner)
        if rec is None:
            raise _not_found(summary_id)
        await self.discard_source_document(rec.get("source_document_ref", ""))
        logger.info(f"Deleted summary id={summary_id} owner={owner}")

    async def attach_translation(self, summary_id: str, owner: str, translation: Translation) -> Summary:
        rec = await asyncio.to_thread(
            local_store.set_translation, summary_id, owner, translation.model_dump(), _now()
        )
        if rec is None:
            raise _not_found(summary_id)
        logger.info(f"Attached translation id={summary_id} language={translation.language}")
        return Summary.model_validate(rec)

    async def save_source_document(self, data: bytes, suffix: str = ".pdf") -> str:
        return await asyncio.to_thread(local_store.put_source_document, data, suffix)

    async def discard_source_document(self, ref: str) -> None:
        if ref:
            await asyncio.to_thread(local_store.remove_source_document, ref)
