#app\schemas\user.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.user import UserStatus

class UserCreate(BaseModel):
    username: str = ""
    email: str = ""
    status: Optional[UserStatus] = None
    segment: Optional[str] = None

class UserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    status: Optional[UserStatus] = None
    segment: Optional[str] = None
    phone_number: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    address: Optional[str] = None
    last_visit: Optional[datetime] = None

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    address: Optional[str] = None
    is_verified: bool
    status: UserStatus
    segment: str
    join_date: Optional[datetime] = None
    last_visit: Optional[datetime] = None
    created_at: Optional[datetime] = None

class PaginatedUsersOut(BaseModel):
    users: list[UserOut]
    total: int
    page: int
    limit: int
