"""
Upload validation and naming shared by chat attachments and study materials.
"""

import re
import time
import unicodedata
from dataclasses import dataclass

from fastapi import UploadFile

from study_buddy.core.exceptions import FileTooLargeError, InvalidFileTypeError

PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ALLOWED_FILE_TYPES = frozenset({PDF_MIME, TEXT_MIME, DOCX_MIME})
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file fully read into memory."""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


async def read_upload(file: UploadFile) -> UploadedFile:
    """Read a multipart upload into an UploadedFile."""
    data = await file.read()
    return UploadedFile(
        filename=file.filename or "upload",
        content_type=file.content_type or "",
        data=data,
    )


def validate_upload(upload: UploadedFile) -> None:
    """Check MIME type, then size.

    Raises:
        InvalidFileTypeError: Type is not PDF, TXT or DOCX.
        FileTooLargeError: More than 10 MiB.
    """
    if upload.content_type not in ALLOWED_FILE_TYPES:
        raise InvalidFileTypeError(upload.content_type)
    if upload.size > MAX_UPLOAD_BYTES:
        raise FileTooLargeError(upload.size)


def secure_filename(filename: str) -> str:
    """Strip accents and special characters, replace spaces with underscores."""
    filename = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    filename = re.sub(r"[^\w\.-]", "_", filename)
    return filename or "file"


def object_name(filename: str) -> str:
    """Collision-resistant object name: epoch milliseconds prefix + safe filename."""
    return f"{int(time.time() * 1000)}-{secure_filename(filename)}"
