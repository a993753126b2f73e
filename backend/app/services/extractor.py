import io
import logging
from pypdf import PdfReader
from backend.app.services.exceptions import ExtractionError

logger = logging.getLogger(__name__)

def extract_text(data: bytes) -> str:
    """Extract plain text from PDF bytes. Returns "" when the PDF has no text layer."""
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            reader.decrypt("")
        pages = [p.extract_text() or "" for p in reader.pages]
    except Exception as e:
        # pypdf raises a mix of PdfReadError, ValueError, KeyError... on bad input
        logger.warning(f"PDF extraction failed: {e}")
        raise ExtractionError(f"Could not read the uploaded document: {e}", {"cause": str(e)}) from e
    return "\n\n".join(p.strip() for p in pages if p.strip())
