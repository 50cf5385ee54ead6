# File: app/routers/auth.py

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.ratelimit import limiter
from app.core.security import get_current_principal, make_token, verify_password
from app.db.session import get_db
from app.models.staff import StaffAccount, StaffRole
from app.schemas.auth import LoginIn, LoginOut, ProfileOut, RegionIn, StaffOut
from app.schemas.principal import Principal
from app.services.storage import make_profile_key, upload_image

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MAX_IMAGE_BYTES = 2 * 1024 * 1024
ALLOWED_IMAGES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


def _profile(acc: StaffAccount) -> ProfileOut:
    return ProfileOut(
        username=acc.username,
        email=acc.email,
        role=acc.role.value,
        profile_image=acc.profile_image,
        full_name=acc.full_name,
        phone=acc.phone,
        region=acc.region,
        created_at=acc.created_at,
        last_login=acc.last_login,
    )


def _load_account(db: Session, principal: Principal) -> StaffAccount:
    acc = db.get(StaffAccount, principal.id)
    if not acc:
        raise HTTPException(status_code=404, detail="User not found")
    return acc


@router.post("/login", response_model=LoginOut)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginIn, response: Response, db: Session = Depends(get_db)):
    username = body.username.strip()
    if not username or not body.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    acc = db.query(StaffAccount).filter(StaffAccount.username == username).first()
    # same message for unknown user and wrong password
    if not acc or not verify_password(body.password, acc.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    acc.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(acc)

    token = make_token(acc)
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.jwt_ttl_seconds,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="strict",
    )
    log.info("staff login: %s (%s)", acc.username, acc.role.value)
    return LoginOut(
        message="Login successful",
        user=StaffOut(
            id=acc.id,
            username=acc.username,
            role=acc.role.value,
            email=acc.email,
            profile_image=acc.profile_image,
            region=acc.region,
        ),
        access_token=token,
        expires_in=settings.jwt_ttl_seconds,
    )


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name)
    return {"ok": True, "message": "Logged out"}


@router.get("/verify")
def verify(principal: Principal = Depends(get_current_principal)):
    return {"user": principal.model_dump(mode="json")}


@router.get("/profile")
def get_profile(principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return {"profile": _profile(_load_account(db, principal)).model_dump(mode="json")}


@router.put("/profile")
def update_profile(
    username: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    acc = _load_account(db, principal)

    username = (username or "").strip() or None
    email = (email or "").strip().lower() or None

    if username and db.query(StaffAccount).filter(
        StaffAccount.username == username, StaffAccount.id != acc.id
    ).first():
        raise HTTPException(status_code=400, detail="Username already exists")
    if email and db.query(StaffAccount).filter(
        StaffAccount.email == email, StaffAccount.id != acc.id
    ).first():
        raise HTTPException(status_code=400, detail="Email already exists")

    if profile_image is not None and profile_image.filename:
        if profile_image.content_type not in ALLOWED_IMAGES:
            raise HTTPException(status_code=400, detail="Unsupported image type")
        data = profile_image.file.read()
        if len(data) > MAX_IMAGE_BYTES:
            raise HTTPException(status_code=400, detail="Image too large (max 2MB)")
        if data:
            try:
                acc.profile_image = upload_image(
                    data, profile_image.content_type, make_profile_key(acc.id, profile_image.filename)
                )
            except Exception as e:
                logging.error(f"Failed to upload profile image: {e}", exc_info=True)
                raise HTTPException(status_code=502, detail="Failed to store profile image")

    if username:
        acc.username = username
    if email:
        acc.email = email
    if full_name is not None:
        acc.full_name = full_name.strip() or None
    if phone is not None:
        acc.phone = phone.strip() or None
    db.commit(); db.refresh(acc)
    return {"message": "Profile updated successfully", "profile": _profile(acc).model_dump(mode="json")}


@router.post("/update-region")
def update_region(body: RegionIn, principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    region = (body.region or "").strip()
    if not region:
        raise HTTPException(status_code=400, detail="Region is required")

    acc = _load_account(db, principal)
    # managers are never region scoped; their selection is not persisted
    if acc.role == StaffRole.admin:
        acc.region = region
        db.commit()
        log.info("admin %s switched region to %r", acc.username, region)
    return {"message": "Region updated successfully", "region": region}
