"""
Catalog item schemas for the Customer Portal
"""

from typing import Optional, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ItemFieldsSchema(BaseModel):
    """Descriptive fields shared by item requests and responses"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    first_name: Optional[str] = Field(
        None, validation_alias=AliasChoices('first_name', 'firstName', 'firstname')
    )
    last_name: Optional[str] = Field(
        None, validation_alias=AliasChoices('last_name', 'lastName', 'lastname')
    )
    gender: Optional[str] = None
    membership: Optional[str] = None
    part: Optional[str] = None
    age: Optional[str] = None

    @field_validator('age', mode='before')
    @classmethod
    def coerce_age(cls, v: Any):
        """Accept numeric ages from clients that send numbers"""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ItemCreateSchema(ItemFieldsSchema):
    """Schema for creating an item from a previously uploaded photo"""
    path: Optional[str] = None


class ItemUpdateSchema(ItemFieldsSchema):
    """Schema for updating an item's descriptive fields"""


class ItemResponseSchema(ItemFieldsSchema):
    """Item as returned to clients"""
    id: str
    path: Optional[str] = None


class PhotoResponseSchema(BaseModel):
    """Stored photo location"""
    path: str
