"""
Validation modules for the summarization pipeline.

Uploads are checked before any work is done; summaries and translations are
checked after the provider answers so unusable output is never persisted.
"""
from __future__ import annotations
import os
from typing import Dict, Optional, Tuple

PDF_MAGIC = b"%PDF-"
PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf")


class UploadValidator:
    """
    Validator for uploaded policy documents.

    Checks presence, size and type. Type is accepted when either the filename
    or the declared content type says PDF, and the bytes carry a PDF header.
    """

    @staticmethod
    def validate(
        filename: Optional[str],
        content_type: Optional[str],
        data: Optional[bytes],
        max_bytes: int,
    ) -> Tuple[bool, Dict]:
        """
        Validate an upload.

        Args:
            filename: Client-supplied filename, may be None
            content_type: Client-supplied MIME type, may be None
            data: Raw file bytes, None when no file was sent
            max_bytes: Upper size bound

        Returns:
            Tuple of (is_valid, details) where details carries a `reason` on failure
        """
        if data is None:
            return False, {"reason": "missing_file"}
        if len(data) == 0:
            return False, {"reason": "empty_file"}
        if len(data) > max_bytes:
            return False, {"reason": "too_large", "size": len(data), "max_bytes": max_bytes}
        ext = os.path.splitext(filename or "")[1].lower()
        ctype = (content_type or "").split(";")[0].strip().lower()
        if ext != ".pdf" and ctype not in PDF_CONTENT_TYPES:
            return False, {"reason": "unsupported_type", "filename": filename, "content_type": content_type}
        if not data[:1024].lstrip().startswith(PDF_MAGIC):
            return False, {"reason": "not_pdf"}
        return True, {}


class SummaryValidator:
    """Check the provider produced a usable summary body."""
    @staticmethod
    def validate(summary: Optional[str]) -> Tuple[bool, Dict]:
        if not summary or not summary.strip():
            return False, {"reason": "empty_summary"}
        return True, {}


class TranslationValidator:
    """Check the provider produced a usable translation."""
    @staticmethod
    def validate(translated: Optional[str]) -> Tuple[bool, Dict]:
        if not translated or not translated.strip():
            return False, {"reason": "empty_translation"}
        return True, {}
