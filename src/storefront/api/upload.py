"""FastAPI endpoints for product image uploads (administrators only)."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, File, UploadFile

from storefront.api.schemas import MessageResponse, UploadResponse
from storefront.auth.dependencies import admin_user
from storefront.upload.images import discard_image, store_image, store_images

upload_router = APIRouter(prefix="/upload", tags=["upload"], dependencies=[Depends(admin_user)])


@upload_router.post("/image", status_code=201, response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...)):
    data = await file.read()
    return asdict(store_image(data, file.filename or "upload", file.content_type))


@upload_router.post("/images", status_code=201, response_model=list[UploadResponse])
async def upload_images(files: list[UploadFile] = File(...)):
    payload = [(await f.read(), f.filename or "upload", f.content_type) for f in files]
    return [asdict(image) for image in store_images(payload)]


@upload_router.delete("/image", response_model=MessageResponse)
async def delete_image(public_id: str):
    discard_image(public_id)
    return {"message": "Image deleted"}
