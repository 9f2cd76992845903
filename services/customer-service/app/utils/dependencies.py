"""
FastAPI Dependencies
Services built on the stores created at startup
"""

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from app.services.account_service import AccountService
from app.services.item_service import ItemService
from app.utils.store import AccountStore
from app.utils.uploads import PhotoStorage


def get_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_account_store(request: Request) -> AccountStore:
    """Account store dependency"""
    return request.app.state.account_store


def get_account_service(request: Request) -> AccountService:
    """Account service over the application's account store"""
    return AccountService(
        request.app.state.account_store,
        bcrypt_rounds=request.app.state.settings.bcrypt_rounds,
    )


def get_item_service(request: Request) -> ItemService:
    """Item service over the application's item store"""
    return ItemService(request.app.state.item_store)


def get_photo_storage(request: Request) -> PhotoStorage:
    settings = request.app.state.settings
    return PhotoStorage(
        settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_bytes=settings.max_upload_bytes,
    )


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
AccountStoreDep = Annotated[AccountStore, Depends(get_account_store)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
PhotoStorageDep = Annotated[PhotoStorage, Depends(get_photo_storage)]
