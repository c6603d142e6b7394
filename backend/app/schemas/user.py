"""User, profile and admin listing schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = Field(default=None, max_length=100)


class UserRead(BaseModel):
    id: int
    email: EmailStr
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class UserProfileBase(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    profile_image_url: Optional[str] = Field(default=None, max_length=512)


class UserProfileUpdate(UserProfileBase):
    pass


class UserProfileRead(UserProfileBase):
    id: int
    email: Optional[str] = None
    role: str
    receipt_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessContact(BaseModel):
    business_name: str
    email: str
    phone: str
    branches: list[str]


class AdminUserRead(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    receipt_count: int


class AdminPromoteRequest(BaseModel):
    email: EmailStr
