# File: app/schemas/auth.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class LoginIn(BaseModel):
    # empty values are rejected in the handler with a 400
    username: str = ""
    password: str = Field(default="", max_length=512)

class RegionIn(BaseModel):
    region: Optional[str] = None

class StaffOut(BaseModel):
    id: int
    username: str
    role: str
    email: Optional[str] = None
    profile_image: Optional[str] = None
    region: Optional[str] = None

class LoginOut(BaseModel):
    message: str
    user: StaffOut
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class ProfileOut(BaseModel):
    username: str
    email: Optional[str] = None
    role: str
    profile_image: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    region: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
