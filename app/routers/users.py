"""
users.py

Member directory and account management API (/api/users).

Main features:
- public member list (active accounts only; admins may pass
  includeArchived=true to see everyone), ordered by name
- public member profile (archived profiles only for admins and the member)
- admin: create account with a temporary password (multipart, optional
  profileImage file)
- admin or self: update profile (multipart); image=DELETE_IMAGE_SIGNAL
  removes the picture
- admin: delete account (never one's own)

Related files:
- app.services.users       : account rules
- app.schemas.user         : UserOut serialization
- app.core.deps            : get_current_admin / get_optional_user

"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import Requester, get_db, get_current_admin, get_optional_user, get_requester
from app.models.user import User, Role
from app.schemas.user import user_to_dict
from app.services import users as service
from app.services.content import resolve_id, write_transaction
from app.services.uploads import PROFILE_IMAGES, has_file, remove_file, save_image
from app.services.users import UserFields

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
def list_users(
    include_archived: str | None = Query(None, alias="includeArchived"),
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    is_admin = viewer is not None and viewer.role == Role.ADMIN
    users = service.list_users(db, include_archived=is_admin and include_archived == "true")
    data = [user_to_dict(u) for u in users]
    return {"success": True, "count": len(data), "data": data}


@router.get("/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    user = service.get_profile(db, resolve_id(user_id, "User"), viewer)
    return {"success": True, "data": user_to_dict(user)}


"""
Admin: create an account

- password optional: a temporary one is generated and returned once
- the member must change it at first login

"""

@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    email: str | None = Form(None),
    password: str | None = Form(None),
    name: str | None = Form(None),
    role: str | None = Form(None),
    position: str | None = Form(None),
    phone: str | None = Form(None),
    orcid: str | None = Form(None),
    biography: str | None = Form(None),
    expertises: str | None = Form(None),
    research_interests: str | None = Form(None, alias="researchInterests"),
    university_education: str | None = Form(None, alias="universityEducation"),
    expiration_date: str | None = Form(None, alias="expirationDate"),
    profile_image: UploadFile | None = File(None, alias="profileImage"),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    fields = UserFields(
        email=email,
        password=password,
        name=name,
        role=role,
        position=position,
        phone=phone,
        orcid=orcid,
        biography=biography,
        expertises=expertises,
        research_interests=research_interests,
        university_education=university_education,
        expiration_date=expiration_date,
    )
    stored = save_image(profile_image, PROFILE_IMAGES) if has_file(profile_image) else None
    try:
        with write_transaction(db, integrity_message="Un utilisateur avec cet email existe déjà."):
            user, temporary_password = service.create_user(db, fields, stored)
    except Exception:
        remove_file(stored)
        raise
    db.refresh(user)
    return {
        "success": True,
        "message": "Utilisateur créé avec succès.",
        "data": user_to_dict(user),
        "temporaryPassword": temporary_password,
    }


"""
Update a profile (admin or the member)

- only admins change role / expiration / must-change flag
- profileImage replaces the picture; image=DELETE_IMAGE_SIGNAL removes it
- a member updating their own profile gets a new token (name / role)

"""

@router.put("/{user_id}")
def update_user(
    user_id: str,
    name: str | None = Form(None),
    role: str | None = Form(None),
    password: str | None = Form(None),
    must_change_password: str | None = Form(None, alias="mustChangePassword"),
    position: str | None = Form(None),
    phone: str | None = Form(None),
    orcid: str | None = Form(None),
    biography: str | None = Form(None),
    expertises: str | None = Form(None),
    research_interests: str | None = Form(None, alias="researchInterests"),
    university_education: str | None = Form(None, alias="universityEducation"),
    expiration_date: str | None = Form(None, alias="expirationDate"),
    image: str | None = Form(None),
    profile_image: UploadFile | None = File(None, alias="profileImage"),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    target_id = resolve_id(user_id, "User")
    fields = UserFields(
        password=password,
        name=name,
        role=role,
        position=position,
        phone=phone,
        orcid=orcid,
        biography=biography,
        expertises=expertises,
        research_interests=research_interests,
        university_education=university_education,
        expiration_date=expiration_date,
        must_change_password=must_change_password,
    )
    stored = save_image(profile_image, PROFILE_IMAGES) if has_file(profile_image) else None
    try:
        with write_transaction(db, integrity_message=service.ORCID_TAKEN_MESSAGE):
            user, stale = service.update_user(
                db,
                requester,
                target_id,
                fields,
                image=stored,
                delete_image=image == service.DELETE_IMAGE_SIGNAL,
            )
    except Exception:
        remove_file(stored)
        raise
    remove_file(stale)
    db.refresh(user)
    body = {
        "success": True,
        "message": "User profile updated successfully.",
        "data": user_to_dict(user),
    }
    # only the member's own session gets a refreshed token
    if user.id == requester.id:
        body["token"] = service.issue_token(user)
    return body


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    with write_transaction(db):
        image = service.delete_user(db, Requester.from_user(admin), resolve_id(user_id, "User"))
    remove_file(image)
    return {"success": True, "message": "Utilisateur supprimé avec succès."}
