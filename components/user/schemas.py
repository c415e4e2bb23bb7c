"""Pydantic schemas for user data validation."""

from datetime import date
from pydantic import BaseModel, Field


class UserBase(BaseModel):
    """Base user schema."""
    login: str = Field(..., min_length=3, max_length=50)
    full_name: str = Field("", max_length=255)
    currency: str = Field("USD", min_length=3, max_length=3)


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=6)


class User(UserBase):
    """Schema for user response."""
    id: str
    registration_date: date

    class Config:
        from_attributes = True


class UserWithToken(User):
    """User response carrying a freshly issued access token."""
    access_token: str
    token_type: str = "bearer"
