"""
Account Routes
Registration, login, listing, update and deletion of accounts
"""

from typing import List

from fastapi import APIRouter

from shared.schemas.account import (
    AccountCreateSchema,
    AccountLoginSchema,
    AccountUpdateSchema,
    AccountEnvelopeSchema,
    AccountResponseSchema,
    ProfileResponseSchema,
)

from app.models import AccountView, Profile
from app.utils.dependencies import AccountServiceDep

router = APIRouter()


def _envelope(account: AccountView, profile: Profile, message: str) -> AccountEnvelopeSchema:
    return AccountEnvelopeSchema(
        success=True,
        message=message,
        account=AccountResponseSchema.model_validate(account),
        profile=ProfileResponseSchema.model_validate(profile) if profile else None,
    )


@router.post("", response_model=AccountEnvelopeSchema)
async def register_account(account_data: AccountCreateSchema, service: AccountServiceDep):
    """
    Register new account

    Creates the account and its public profile together
    """
    account, profile = await service.register(
        account_data.username,
        account_data.password,
        first_name=account_data.first_name,
        last_name=account_data.last_name,
    )
    return _envelope(account, profile, "Account registered successfully")


@router.post("/login", response_model=AccountEnvelopeSchema)
async def login_account(login_data: AccountLoginSchema, service: AccountServiceDep):
    """
    Account login

    Returns the account and profile; no session token is issued
    """
    account, profile = await service.login(login_data.username, login_data.password)
    return _envelope(account, profile, "Login successful")


@router.get("", response_model=List[ProfileResponseSchema])
async def list_profiles(service: AccountServiceDep):
    """List public profiles of all accounts"""
    profiles = await service.list_profiles()
    return [ProfileResponseSchema.model_validate(p) for p in profiles]


@router.get("/{username}", response_model=AccountEnvelopeSchema)
async def get_account(username: str, service: AccountServiceDep):
    """Get one account and its profile"""
    account, profile = await service.get_account(username)
    return _envelope(account, profile, None)


@router.put("/{username}", response_model=AccountEnvelopeSchema)
async def update_account(username: str, update_data: AccountUpdateSchema, service: AccountServiceDep):
    """
    Update account

    Renames move the profile along with the account
    """
    account, profile = await service.update(
        username,
        new_username=update_data.username,
        new_password=update_data.password,
        first_name=update_data.first_name,
        last_name=update_data.last_name,
    )
    return _envelope(account, profile, "Account updated successfully")


@router.delete("/{username}", response_model=dict)
async def delete_account(username: str, service: AccountServiceDep):
    """Delete account and profile"""
    await service.delete(username)
    return {
        "success": True,
        "message": "Account deleted successfully"
    }
