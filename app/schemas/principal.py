# File: app/schemas/principal.py
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.staff import StaffRole


class Principal(BaseModel):
    """Request-scoped identity, always built from the staff row read for this request."""
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: StaffRole
    email: Optional[str] = None
    region: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == StaffRole.manager
