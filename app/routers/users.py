# File: app/routers/users.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.regions import EntityKind, build_region_filter, to_clause
from app.core.security import get_current_principal, require_manager, hash_password
from app.models.user import User, UserStatus
from app.schemas.principal import Principal
from app.schemas.user import UserCreate, UserUpdate, UserOut, PaginatedUsersOut
import secrets

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=PaginatedUsersOut)
def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    search: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
):
    conditions = [to_clause(build_region_filter(principal, EntityKind.user), User)]
    if search and search.strip():
        term = search.strip()
        conditions.append(or_(
            User.username.icontains(term, autoescape=True),
            User.email.icontains(term, autoescape=True),
            User.full_name.icontains(term, autoescape=True),
        ))
    if status and status != "all":
        try:
            conditions.append(User.status == UserStatus(status))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid status")

    total = db.scalar(select(func.count()).select_from(User).where(*conditions)) or 0
    rows = db.scalars(
        select(User).where(*conditions)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit).limit(limit)
    ).all()
    return PaginatedUsersOut(users=[UserOut.model_validate(u) for u in rows], total=total, page=page, limit=limit)

@router.get("/{user_id}", dependencies=[Depends(get_current_principal)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    u = db.get(User, user_id)
    if not u: raise HTTPException(404, "User not found")
    return {"user": UserOut.model_validate(u).model_dump(mode="json")}

@router.post("", dependencies=[Depends(get_current_principal)])
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    username = body.username.strip()
    email = body.email.strip().lower()
    if not username or not email:
        raise HTTPException(400, "Username and email are required")
    if db.query(User).filter(or_(User.username == username, User.email == email)).first():
        raise HTTPException(400, "User with this username or email already exists")
    # customer sets a real password through the marketplace reset flow
    u = User(
        username=username,
        email=email,
        user_password=hash_password(secrets.token_urlsafe(16)),
        status=body.status or UserStatus.pending,
        segment=body.segment or "Standard",
    )
    db.add(u); db.commit(); db.refresh(u)
    return {"message": "User created successfully", "user": UserOut.model_validate(u).model_dump(mode="json")}

@router.put("/{user_id}", dependencies=[Depends(get_current_principal)])
def update_user(user_id: int, body: UserUpdate, db: Session = Depends(get_db)):
    u = db.get(User, user_id)
    if not u: raise HTTPException(404, "User not found")
    changes = body.model_dump(exclude_unset=True)
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
        clash = db.query(User).filter(User.email == changes["email"], User.id != user_id).first()
        if clash: raise HTTPException(400, "Email already exists")
    for key, value in changes.items():
        # empty username/email/status/segment mean "leave as is"
        if key in ("username", "email", "status", "segment") and not value:
            continue
        setattr(u, key, value)
    db.commit(); db.refresh(u)
    return {"message": "User updated successfully", "user": UserOut.model_validate(u).model_dump(mode="json")}

@router.delete("/{user_id}", dependencies=[Depends(require_manager)])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    u = db.get(User, user_id)
    if not u: raise HTTPException(404, "User not found")
    db.delete(u); db.commit()
    return {"message": "User deleted successfully"}
