class PipelineError(Exception):
    """Base class for pipeline exceptions; include details in message."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class InvalidUploadError(PipelineError):
    """Raised when the uploaded file is missing, too large or not a PDF."""

class ExtractionError(PipelineError):
    """Raised when the document cannot be read."""

class EmptyDocumentError(PipelineError):
    """Raised when the document has no extractable text."""

class SummarizationError(PipelineError):
    """Raised when summarization fails or returns unusable output."""

class TranslationError(PipelineError):
    """Raised when translation fails or returns unusable output."""

class UnsupportedLanguageError(PipelineError):
    """Raised when the target language is not in the configured set."""

class NotFoundError(PipelineError):
    """Raised when a summary does not exist for the calling owner."""

class AuthenticationError(PipelineError):
    """Raised when the bearer credential is missing or invalid."""
