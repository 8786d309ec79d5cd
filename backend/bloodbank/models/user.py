from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .common import BloodType, Location, UserRole


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    role: UserRole
    blood_type: BloodType
    location: Location


class UserLogin(BaseModel):
    email: EmailStr
    password: str
    role: UserRole


class UserPublic(BaseModel):
    id: str = Field(alias="_id")
    name: str
    email: EmailStr
    role: UserRole
    blood_type: BloodType
    location: Location
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    name: str
    email: EmailStr
    role: UserRole
    city: str
    message: str = "Welcome back"
