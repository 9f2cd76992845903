"""
Item Routes
Catalog items and photo uploads
"""

from typing import List, Optional

from fastapi import APIRouter, File, UploadFile

from shared.schemas.item import (
    ItemCreateSchema,
    ItemUpdateSchema,
    ItemResponseSchema,
    PhotoResponseSchema,
)

from app.utils.dependencies import ItemServiceDep, PhotoStorageDep

router = APIRouter()
photos_router = APIRouter()


@router.post("", response_model=ItemResponseSchema)
async def create_item(item_data: ItemCreateSchema, service: ItemServiceDep):
    """Create a new item from an uploaded photo path"""
    item = await service.create_item(item_data.path, item_data.model_dump(exclude={'path'}))
    return ItemResponseSchema.model_validate(item)


@router.get("", response_model=List[ItemResponseSchema])
async def list_items(service: ItemServiceDep):
    """List all items"""
    items = await service.list_items()
    return [ItemResponseSchema.model_validate(item) for item in items]


@router.put("/{item_id}", response_model=ItemResponseSchema)
async def update_item(item_id: str, item_data: ItemUpdateSchema, service: ItemServiceDep):
    """Update an item's descriptive fields"""
    item = await service.update_item(item_id, item_data.model_dump())
    return ItemResponseSchema.model_validate(item)


@router.delete("/{item_id}", response_model=dict)
async def delete_item(item_id: str, service: ItemServiceDep):
    """Delete an item"""
    await service.delete_item(item_id)
    return {
        "success": True,
        "message": "Item deleted successfully"
    }


@photos_router.post("", response_model=PhotoResponseSchema)
async def upload_photo(storage: PhotoStorageDep, photo: Optional[UploadFile] = File(None)):
    """
    Upload a photo

    Returns the path the photo is served from
    """
    path = await storage.save(photo)
    return PhotoResponseSchema(path=path)
