import uuid
from dataclasses import dataclass
from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.core.errors import UnauthorizedError, ForbiddenError
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.models.user import User, Role

# Bearer token input for the Swagger "Authorize" dialog
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Requester:
    """Authenticated identity passed explicitly into every service call."""

    id: uuid.UUID
    name: str | None
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_modify(self, owner_id: uuid.UUID | None) -> bool:
        return self.is_admin or (owner_id is not None and owner_id == self.id)

    @classmethod
    def from_user(cls, user: User) -> "Requester":
        return cls(id=user.id, name=user.name, role=user.role)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_from_token(token: str, db: Session) -> User | None:
    try:
        user_id = uuid.UUID(decode_access_token(token))
    except Exception:
        return None
    return db.scalar(select(User).where(User.id == user_id))


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise UnauthorizedError(
            "Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _user_from_token(cred.credentials, db)
    if not user:
        raise UnauthorizedError(
            "Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# Public routes that behave differently for admins or the owner
def get_optional_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    if cred is None:
        return None
    return _user_from_token(cred.credentials, db)


def require_role(*roles: Role):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError(
                f"User role {current_user.role.value} is not authorized to access this route",
            )
        return current_user
    return _checker


get_current_member = require_role(Role.ADMIN, Role.MEMBER)
get_current_admin = require_role(Role.ADMIN)


def get_requester(current_user: User = Depends(get_current_member)) -> Requester:
    return Requester.from_user(current_user)
