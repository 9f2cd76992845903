"""
Account data schemas for the Customer Portal

Pydantic models for account request validation and response serialization.
Response models never carry the password hash.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _name_field(*aliases: str):
    return Field(None, validation_alias=AliasChoices(*aliases))


class AccountCreateSchema(BaseModel):
    """Schema for registering a new account

    Required fields are checked by the account service so that a missing
    username or password is reported as a 400 with a readable message.
    """
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = _name_field('first_name', 'firstName', 'firstname')
    last_name: Optional[str] = _name_field('last_name', 'lastName', 'lastname')


class AccountLoginSchema(BaseModel):
    """Schema for account login"""
    username: Optional[str] = None
    password: Optional[str] = None


class AccountUpdateSchema(BaseModel):
    """Schema for updating an account; every field is optional"""
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = _name_field('first_name', 'firstName', 'firstname')
    last_name: Optional[str] = _name_field('last_name', 'lastName', 'lastname')


class AccountResponseSchema(BaseModel):
    """Redacted account representation"""
    model_config = ConfigDict(from_attributes=True)

    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ProfileResponseSchema(BaseModel):
    """Public profile representation"""
    model_config = ConfigDict(from_attributes=True)

    username: str


class AccountEnvelopeSchema(BaseModel):
    """Account and its profile, as returned by register, login and update"""
    success: bool = True
    message: Optional[str] = None
    account: AccountResponseSchema
    profile: Optional[ProfileResponseSchema] = None

