"""
Plain-text extraction from uploaded documents.

PDF goes through LangChain's PyPDFLoader, plain text is decoded as UTF-8.
DOCX uploads are accepted elsewhere but not extracted here: their text
stays None.
"""

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader

from study_buddy.core.exceptions import ExtractionError
from study_buddy.core.uploads import PDF_MIME, TEXT_MIME

logger = logging.getLogger(__name__)


def extract_pdf_text(file_bytes: bytes) -> str:
    """Extract the text of every page of a PDF.

    PyPDFLoader needs a file path, so the bytes go through a temp file.

    Raises:
        ExtractionError: If the PDF cannot be parsed.
    """
    with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as temp_file:
        temp_file.write(file_bytes)
        temp_path = temp_file.name

    try:
        pages = PyPDFLoader(temp_path).load()
    except Exception as e:
        logger.error(f"PDF parsing error: {e}")
        raise ExtractionError("Failed to parse PDF", detail=str(e)) from e
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)

    return "\n".join(page.page_content for page in pages)


def extract_file_text(file_bytes: bytes, content_type: str) -> str | None:
    """Extract plain text for an accepted upload.

    Returns:
        The text, or None when the type has no extractor or nothing was found.
    """
    if content_type == PDF_MIME:
        text = extract_pdf_text(file_bytes)
    elif content_type == TEXT_MIME:
        text = file_bytes.decode("utf-8", errors="replace")
    else:
        return None
    return text or None
