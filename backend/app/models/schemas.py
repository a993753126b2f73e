from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class Translation(BaseModel):
    language: str
    translated_text: str

class NewSummary(BaseModel):
    owner: str
    title: str = ""
    source_document_ref: str
    summarized_text: str

class Summary(NewSummary):
    id: str
    translation: Optional[Translation] = None   # None means "not yet translated"
    created_at: datetime
    updated_at: datetime

class SummaryDraft(BaseModel):
    title: str = ""
    summarized_text: str

class UploadedDocument(BaseModel):
    filename: Optional[str] = None
    content_type: Optional[str] = None
    data: Optional[bytes] = None

class OwnerContext(BaseModel):
    identity: str
    token: str

class SummaryOut(BaseModel):
    id: str
    title: str
    summarized_text: str
    translation: Optional[Translation] = None
    created_at: datetime
    updated_at: datetime

class TranslateRequest(BaseModel):
    language: str

class TranslateResponse(BaseModel):
    id: str
    language: str
    translated_text: str
    cached: bool = False

class DeleteResponse(BaseModel):
    ok: bool
    id: str

class LanguagesResponse(BaseModel):
    languages: List[str]

class ErrorBody(BaseModel):
    kind: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)

class ErrorResponse(BaseModel):
    error: ErrorBody
