# File: app/routers/admin_manage.py
from fastapi import APIRouter, Depends, HTTPException, Body
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.security import require_manager, hash_password
from app.models.staff import StaffAccount, StaffRole

router = APIRouter(prefix="/admin/manage", tags=["admin-manage"])

def _admin_dict(a: StaffAccount) -> dict:
    return {
        "id": a.id,
        "username": a.username,
        "email": a.email,
        "role": a.role.value,
        "region": a.region,
        "full_name": a.full_name,
        "phone": a.phone,
        "profile_image": a.profile_image,
        "created_at": a.created_at.isoformat() if a.created_at else None,
        "last_login": a.last_login.isoformat() if a.last_login else None,
    }

@router.get("", dependencies=[Depends(require_manager)])
def list_admins(db: Session = Depends(get_db)):
    admins = (db.query(StaffAccount)
              .filter(StaffAccount.role == StaffRole.admin)
              .order_by(StaffAccount.created_at.desc(), StaffAccount.id.desc())
              .all())
    return {"admins": [_admin_dict(a) for a in admins]}

@router.post("", dependencies=[Depends(require_manager)])
def create_admin(payload: dict = Body(...), db: Session = Depends(get_db)):
  username = (payload.get("username") or "").strip()
  password = payload.get("password") or ""
  email = (payload.get("email") or "").strip().lower() or f"{username.lower()}@admins.swapify.club"
  if not username or not password: raise HTTPException(400, "Username and password are required")
  exists = db.query(StaffAccount).filter(
      or_(StaffAccount.username == username, StaffAccount.email == email)
  ).first()
  if exists:
    detail = "Username already exists" if exists.username == username else "Email already exists"
    raise HTTPException(400, detail)
  admin = StaffAccount(username=username, email=email, hashed_password=hash_password(password), role=StaffRole.admin)
  db.add(admin); db.commit(); db.refresh(admin)
  return {"message": "Admin created successfully", "admin": {"id": admin.id, "username": admin.username, "role": admin.role.value}}

@router.delete("", dependencies=[Depends(require_manager)])
def delete_admin(payload: dict = Body(...), db: Session = Depends(get_db)):
  username = (payload.get("username") or "").strip()
  if not username: raise HTTPException(400, "Username is required")
  # the manager row is never matched here
  deleted = db.query(StaffAccount).filter(
      StaffAccount.username == username, StaffAccount.role == StaffRole.admin
  ).delete()
  if not deleted: raise HTTPException(404, "Admin not found")
  db.commit(); return {"message": "Admin deleted successfully"}
