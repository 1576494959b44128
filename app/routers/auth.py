"""
auth.py

Authentication and account API (/api/auth).

Uses bearer JWT access tokens; every successful auth call returns a fresh
token together with the serialized user:

    {"success": true, "message": "...", "token": "...", "user": {...}}

Main features:
- register (public registers members; an admin caller may pick the role)
- login (archived / expired accounts are refused)
- first-admin bootstrap while the user table is empty
- password change and the first-login password step
- current user

Related files:
- app.core.security        : password hashing / JWT
- app.core.deps            : get_current_user / get_optional_user
- app.services.users       : account rules
- app.schemas.auth         : request bodies

"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import get_db, get_current_user, get_optional_user
from app.core.errors import ForbiddenError
from app.models.user import User, Role
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    InitialSignupRequest,
    ChangePasswordRequest,
    InitialPasswordSetupRequest,
)
from app.schemas.user import user_to_dict
from app.services import users as service
from app.services.content import write_transaction

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User, message: str) -> dict:
    return {
        "success": True,
        "message": message,
        "token": service.issue_token(user),
        "user": user_to_dict(user),
    }


"""
Register API

- email must be unused
- the role is "member" unless the caller is an authenticated admin
- registered accounts do not have to change their password

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    caller: User | None = Depends(get_optional_user),
):
    role = Role.MEMBER
    if caller is not None and caller.role == Role.ADMIN and data.role is not None:
        role = data.role

    with write_transaction(db, integrity_message=service.EMAIL_TAKEN_MESSAGE):
        user = service.register_user(db, data, role=role)
    db.refresh(user)
    return _auth_response(user, "User registered successfully!")


"""
Login API

- wrong email or password -> 401
- archived account -> 403
- expired account -> archived, then 403

"""

@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = service.authenticate(db, data.email, data.password)
    return _auth_response(user, "Logged in successfully!")


@router.get("/check-users-exist")
def check_users_exist(db: Session = Depends(get_db)):
    return {"exists": service.count_users(db) > 0}


"""
Initial admin signup

- only allowed while no user exists
- creates an admin that does not have to change its password

"""

@router.post("/initial-signup", status_code=status.HTTP_201_CREATED)
def initial_signup(data: InitialSignupRequest, db: Session = Depends(get_db)):
    if service.count_users(db) > 0:
        raise ForbiddenError("Initial admin signup is only allowed when no users exist.")

    with write_transaction(db, integrity_message="An account with this email already exists."):
        admin = service.register_user(db, data, role=Role.ADMIN)
    db.refresh(admin)
    return _auth_response(admin, "Initial admin user created successfully!")


@router.put("/change-password")
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    with write_transaction(db):
        service.change_password(db, user, data.old_password, data.new_password)
    db.refresh(user)
    return _auth_response(user, "Mot de passe mis à jour avec succès.")


@router.put("/initial-password-setup")
def initial_password_setup(
    data: InitialPasswordSetupRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    with write_transaction(db):
        message = service.initial_password_setup(db, user, data.action, data.new_password)
    db.refresh(user)
    return _auth_response(user, message)


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return {"success": True, "user": user_to_dict(user)}
