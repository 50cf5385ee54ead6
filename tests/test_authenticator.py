import time

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from app.core.config import settings
from app.core.security import (
    authenticate,
    decode_token,
    hash_password,
    make_token,
    read_token,
    require_manager,
    verify_password,
)
from app.models.staff import StaffRole
from app.schemas.principal import Principal


def _request(cookies=None, authorization=None):
    headers = []
    if cookies:
        headers.append((b"cookie", "; ".join(f"{k}={v}" for k, v in cookies.items()).encode()))
    if authorization:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers, "query_string": b""})


def test_password_hashing_roundtrip():
    hashed = hash_password("hunter22")
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "not-a-hash")


def test_read_token_prefers_cookie():
    req = _request(cookies={settings.auth_cookie_name: "from-cookie"}, authorization="Bearer from-header")
    assert read_token(req) == "from-cookie"


def test_read_token_falls_back_to_bearer_credentials():
    creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials="abc.def")
    assert read_token(_request(), creds) == "abc.def"
    assert read_token(_request()) is None


def test_token_carries_subject(db, make_staff):
    acc = make_staff("ravi", region="Pune")
    payload = decode_token(make_token(acc))
    assert payload["sub"] == str(acc.id)
    assert payload["role"] == "admin"


def test_authenticate_returns_live_principal(db, make_staff):
    acc = make_staff("ravi", region="Pune")
    p = authenticate(make_token(acc), db)
    assert p == Principal(id=acc.id, username="ravi", email="ravi@example.com", role=StaffRole.admin, region="Pune")


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_authenticate_rejects_missing_or_malformed(db, token):
    assert authenticate(token, db) is None


def test_authenticate_rejects_expired_token(db, make_staff):
    acc = make_staff("ravi")
    assert authenticate(make_token(acc, ttl=-5), db) is None


def test_authenticate_requires_expiry(db, make_staff):
    acc = make_staff("ravi")
    forever = jwt.encode({"sub": str(acc.id)}, settings.jwt_secret, algorithm="HS256")
    assert authenticate(forever, db) is None


def test_authenticate_rejects_foreign_signature(db, make_staff):
    acc = make_staff("ravi")
    now = int(time.time())
    forged = jwt.encode({"sub": str(acc.id), "exp": now + 60}, "other-secret", algorithm="HS256")
    assert authenticate(forged, db) is None


def test_authenticate_rejects_bad_subject(db):
    now = int(time.time())
    for sub in (None, "abc"):
        payload = {"exp": now + 60}
        if sub is not None:
            payload["sub"] = sub
        token = jwt.encode(payload, settings.jwt_secret, algorithm="HS256")
        assert authenticate(token, db) is None


def test_deleted_account_is_unauthenticated(db, make_staff):
    acc = make_staff("ravi")
    token = make_token(acc)
    db.delete(acc)
    db.commit()
    assert authenticate(token, db) is None


def test_region_change_is_seen_with_same_token(db, make_staff):
    acc = make_staff("ravi", region="A")
    token = make_token(acc)
    assert authenticate(token, db).region == "A"

    acc.region = "B"
    db.commit()
    assert authenticate(token, db).region == "B"


def test_role_comes_from_storage_not_token(db, make_staff):
    acc = make_staff("ravi", role=StaffRole.admin)
    now = int(time.time())
    widened = jwt.encode({"sub": str(acc.id), "role": "manager", "exp": now + 60},
                         settings.jwt_secret, algorithm="HS256")
    assert authenticate(widened, db).role == StaffRole.admin


def test_require_manager():
    boss = Principal(id=1, username="boss", role=StaffRole.manager)
    assert require_manager(boss) is boss
    with pytest.raises(HTTPException) as exc:
        require_manager(Principal(id=2, username="ravi", role=StaffRole.admin, region="Pune"))
    assert exc.value.status_code == 403
