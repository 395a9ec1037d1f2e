"""
Materials feature: grounding documents uploaded by a user.

Extracted text is stored with the row and read by the chat context
assembler; it is never returned by the listing endpoint.
"""

import logging

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.extraction import extract_file_text
from study_buddy.core.ownership import fetch_owned
from study_buddy.core.storage import ObjectStorage
from study_buddy.core.uploads import UploadedFile, object_name, validate_upload

logger = logging.getLogger(__name__)

LIST_COLUMNS = "id, file_name, file_type, file_size, file_url, created_at"


class MaterialsService:
    """Upload, list and delete study materials."""

    def __init__(self, db: Client, storage: ObjectStorage):
        self.db = db
        self.storage = storage

    def upload_material(self, user_id: str, file: UploadedFile) -> dict:
        """Validate, extract, store the object, then record the material.

        Raises:
            InvalidFileTypeError / FileTooLargeError: Rejected file.
            ExtractionError: PDF could not be parsed.
            StorageError: Bucket upload failed.
        """
        validate_upload(file)
        extracted_text = extract_file_text(file.data, file.content_type)

        storage_path = f"materials/{user_id}/{object_name(file.filename)}"
        file_url = self.storage.upload(storage_path, file.data, file.content_type)

        result = self.db.table("materials").insert({
            "user_id": user_id,
            "file_name": file.filename,
            "file_url": file_url,
            "storage_path": storage_path,
            "file_type": file.content_type,
            "file_size": file.size,
            "extracted_text": extracted_text,
            "created_at": now_iso(),
        }).execute()
        material = result.data[0]
        logger.info(
            f"Material {material['id']} stored for user {user_id} "
            f"({file.size} bytes, text={extracted_text is not None})"
        )
        return {key: material.get(key) for key in LIST_COLUMNS.split(", ")}

    def list_materials(self, user_id: str) -> list[dict]:
        result = (
            self.db.table("materials")
            .select(LIST_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data

    def delete_material(self, user_id: str, material_id: str) -> None:
        """Delete a material. The stored object is removed best-effort first."""
        material = fetch_owned(self.db, "materials", material_id, user_id, "Material")
        if material.get("storage_path"):
            self.storage.remove(material["storage_path"])
        self.db.table("materials").delete().eq("id", material_id).execute()
