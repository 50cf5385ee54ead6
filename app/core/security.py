# app/core/security.py
import logging
import time
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.hash import bcrypt_sha256
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.models.staff import StaffAccount
from app.schemas.principal import Principal

log = logging.getLogger(__name__)

ALGO = "HS256"
bearer = HTTPBearer(auto_error=False)

def hash_password(raw: str) -> str:
    return bcrypt_sha256.hash(raw)

def verify_password(raw: str, hashed: str) -> bool:
    try:
        return bcrypt_sha256.verify(raw, hashed)
    except ValueError:
        # not a bcrypt_sha256 hash at all
        return False

def make_token(account: StaffAccount, ttl: Optional[int] = None) -> str:
    """Sign an access token for a staff account.

    Only ``sub`` is trusted on the way back in; the remaining claims are for
    display by clients and go stale as soon as the account changes.
    """
    now = int(time.time())
    payload = {
        "sub": str(account.id),
        "username": account.username,
        "role": account.role.value,
        "email": account.email,
        "iat": now,
        "exp": now + (ttl if ttl is not None else settings.jwt_ttl_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret, algorithms=[ALGO],
                      options={"require": ["exp", "sub"]})

def read_token(request: Request, creds: Optional[HTTPAuthorizationCredentials] = None) -> Optional[str]:
    """Cookie first, then ``Authorization: Bearer``."""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    if creds is not None and creds.credentials:
        return creds.credentials
    return None

def authenticate(token: Optional[str], db: Session) -> Optional[Principal]:
    """Resolve a token to a Principal using the live staff row.

    Every negative outcome is ``None``; callers cannot tell an expired token
    from a deleted account. Database errors are not caught here.
    """
    if not token:
        return None
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        log.debug("rejecting token: expired")
        return None
    except jwt.InvalidTokenError as e:
        log.debug("rejecting token: %s", e)
        return None

    try:
        account_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        log.debug("rejecting token: bad sub claim")
        return None

    row = db.execute(
        select(StaffAccount.id, StaffAccount.username, StaffAccount.email,
               StaffAccount.role, StaffAccount.region)
        .where(StaffAccount.id == account_id)
    ).first()
    if row is None:
        log.debug("rejecting token: account %s no longer exists", account_id)
        return None

    return Principal(
        id=row.id,
        username=row.username,
        email=row.email,
        role=row.role,
        region=row.region,
    )

def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized",
                         headers={"WWW-Authenticate": "Bearer"})

def get_current_principal(request: Request,
                          creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
                          db: Session = Depends(get_db)) -> Principal:
    principal = authenticate(read_token(request, creds), db)
    if principal is None:
        raise _unauthorized()
    return principal

def require_manager(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_manager:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden - Manager access required")
    return principal
