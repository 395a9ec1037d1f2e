"""
Materials feature: API routes.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity, get_storage
from study_buddy.core.storage import ObjectStorage
from study_buddy.core.uploads import read_upload
from study_buddy.features.materials.service import MaterialsService

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def upload_material(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """Upload a PDF, TXT or DOCX file (max 10MB) to ground the assistant's answers."""
    upload = await read_upload(file)
    material = MaterialsService(db, storage).upload_material(identity.user_id, upload)
    return {"message": "File uploaded successfully", "data": material}


@router.get("/")
async def list_materials(
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    return {"data": MaterialsService(db, storage).list_materials(identity.user_id)}


@router.delete("/{material_id}")
async def delete_material(
    material_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    MaterialsService(db, storage).delete_material(identity.user_id, material_id)
    return {"message": "Material deleted successfully"}
