"""
security.py

Password hashing and access-token helpers.

Low-level security primitives only; routers and business rules live
elsewhere.

Main functions:
- password hashing / verification (bcrypt)
- access token creation (JWT, HS256)
- access token decoding
- temporary password generation for admin-created accounts

Related files:
- app.core.config        : SECRET_KEY / expiry / bcrypt rounds
- app.core.deps          : dependency that validates the token on each request
- app.routers.auth       : login / signup / password changes

"""

import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings


# bcrypt hashing context
# deprecated="auto" keeps the door open for a future scheme change

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()_+"


"""
Hash a plain password

- only the hash is stored in the database

"""

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


"""
Check a plain password against the stored hash

"""

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
Create an access token

- sub  : user id
- type : always "access"
- role / name : copied so the frontend can render without an extra call
- exp  : UTC timestamp

"""

def create_access_token(
    subject: str,
    *,
    role: str | None = None,
    name: str | None = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "type": "access",
        "exp": int(expire.timestamp()),
    }
    if role:
        payload["role"] = role
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


"""
Decode an access token and return its subject

- raises JWTError when the signature, expiry or type is wrong

"""

def decode_access_token(token: str) -> str:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") and payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub


def generate_temporary_password(length: int = 12) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
