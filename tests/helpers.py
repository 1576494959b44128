# tests/helpers.py
import uuid
from datetime import date

from sqlalchemy.orm import Session
from sqlalchemy import select

from app.models.user import User, Role
from app.core.security import get_password_hash

DEFAULT_PASSWORD = "Passw0rd!"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def png_file(name: str = "picture.png") -> tuple:
    return (name, PNG_BYTES, "image/png")


def create_user_in_db(
    db: Session,
    *,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
    name: str | None = "Lab Member",
    role: Role = Role.MEMBER,
    must_change_password: bool = False,
    expiration_date: date | None = None,
    is_archived: bool = False,
) -> User:
    user = User(
        email=email or f"member_{uuid.uuid4().hex[:6]}@lab.org",
        password_hash=get_password_hash(password),
        name=name,
        role=role,
        must_change_password=must_change_password,
        expiration_date=expiration_date,
        is_archived=is_archived,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_admin_in_db(db: Session, *, email: str | None = None, password: str = DEFAULT_PASSWORD) -> User:
    return create_user_in_db(
        db,
        email=email or f"admin_{uuid.uuid4().hex[:6]}@lab.org",
        password=password,
        name="Lab Admin",
        role=Role.ADMIN,
    )


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> str:
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def setup_member(client, db: Session, *, name: str = "Lab Member") -> dict:
    """MEMBER account + token"""
    user = create_user_in_db(db, name=name)
    return {"id": str(user.id), "email": user.email, "name": name, "token": login(client, user.email)}


def setup_admin(client, db: Session) -> dict:
    """ADMIN account + token"""
    admin = create_admin_in_db(db)
    return {"id": str(admin.id), "email": admin.email, "name": admin.name, "token": login(client, admin.email)}


def get_user(db: Session, user_id: str) -> User:
    db.expire_all()
    return db.scalar(select(User).where(User.id == uuid.UUID(user_id)))
