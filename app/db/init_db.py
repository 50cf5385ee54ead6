# File: app/db/init_db.py
import logging

from app.db.base import Base
from app.db.session import engine

log = logging.getLogger(__name__)


def create_tables(bind=None) -> None:
    """Create every mapped table that does not exist yet."""
    # models register themselves on Base.metadata at import time
    from app.models import listing, offer, staff, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    log.info("database tables ensured")
