# File: app/services/bootstrap.py
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import hash_password
from app.models.staff import StaffAccount, StaffRole

log = logging.getLogger(__name__)


def ensure_manager(db: Session) -> Tuple[StaffAccount, bool]:
    """Create the single manager account unless one already exists."""
    existing = db.query(StaffAccount).filter(StaffAccount.role == StaffRole.manager).first()
    if existing:
        return existing, False

    manager = StaffAccount(
        username=settings.manager_username,
        email=settings.manager_email.strip().lower(),
        hashed_password=hash_password(settings.manager_password),
        role=StaffRole.manager,
    )
    db.add(manager)
    db.commit()
    db.refresh(manager)
    log.warning("manager account %r created with the configured default password; change it", manager.username)
    return manager, True
