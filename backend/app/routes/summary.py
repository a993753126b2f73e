from typing import List, Optional
from fastapi import APIRouter, Depends, File, UploadFile
from backend.app.models.schemas import (
    DeleteResponse,
    ErrorResponse,
    LanguagesResponse,
    OwnerContext,
    SummaryOut,
    TranslateRequest,
    TranslateResponse,
    UploadedDocument,
)
from backend.app.services import orchestrator
from backend.app.services.auth import get_owner_context
from backend.app.services.exceptions import InvalidUploadError
from shared.config import settings

router = APIRouter(
    prefix="/summary",
    tags=["summary"],
    responses={401: {"model": ErrorResponse}},
)

@router.post(
    "/create",
    response_model=SummaryOut,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_summary(
    policy_pdf: Optional[UploadFile] = File(default=None, alias=settings.upload_field_name),
    owner: OwnerContext = Depends(get_owner_context),
):
    upload = UploadedDocument()
    if policy_pdf is not None:
        # Reject by declared size before pulling the body into memory
        if policy_pdf.size is not None and policy_pdf.size > settings.max_upload_bytes:
            raise InvalidUploadError(
                "Invalid upload: too_large",
                {"reason": "too_large", "size": policy_pdf.size, "max_bytes": settings.max_upload_bytes},
            )
        upload = UploadedDocument(
            filename=policy_pdf.filename,
            content_type=policy_pdf.content_type,
            data=await policy_pdf.read(),
        )
    return await orchestrator.create_summary(owner, upload)

@router.get("/get/all", response_model=List[SummaryOut])
async def get_all_summaries(owner: OwnerContext = Depends(get_owner_context)):
    return await orchestrator.list_summaries(owner)

@router.get("/get/{summary_id}", response_model=SummaryOut, responses={404: {"model": ErrorResponse}})
async def get_summary(summary_id: str, owner: OwnerContext = Depends(get_owner_context)):
    return await orchestrator.get_summary(owner, summary_id)

@router.delete("/delete/{summary_id}", response_model=DeleteResponse, responses={404: {"model": ErrorResponse}})
async def delete_summary(summary_id: str, owner: OwnerContext = Depends(get_owner_context)):
    await orchestrator.delete_summary(owner, summary_id)
    return DeleteResponse(ok=True, id=summary_id)

@router.post(
    "/translate/{summary_id}",
    response_model=TranslateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def translate_summary(
    summary_id: str,
    payload: TranslateRequest,
    owner: OwnerContext = Depends(get_owner_context),
):
    result = await orchestrator.translate_summary(owner, summary_id, payload.language)
    return TranslateResponse(
        id=summary_id,
        language=result.translation.language,
        translated_text=result.translation.translated_text,
        cached=result.cached,
    )

@router.get("/languages", response_model=LanguagesResponse)
async def supported_languages():
    return LanguagesResponse(languages=list(settings.supported_languages))
