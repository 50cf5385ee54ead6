# File: app/routers/setup.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.services.bootstrap import ensure_manager

router = APIRouter(prefix="/setup", tags=["setup"])

@router.post("/init-manager")
def init_manager(db: Session = Depends(get_db)):
    manager, created = ensure_manager(db)
    if not created:
        return {"created": False, "message": "Manager already exists", "username": manager.username}
    return {
        "created": True,
        "message": "Manager account created successfully!",
        "username": manager.username,
        "warning": "IMPORTANT: Change the default password after first login!",
    }
