"""
stats.py

Dashboard statistics API (/api/stats), admin only.

- /members  : number of active (non-archived) accounts
- /overview : member count plus the number of records per content type

"""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin
from app.models.actu import Actu
from app.models.publication import Publication
from app.models.thesis import Thesis, MasterSI
from app.models.user import User
from app.services.users import count_members

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/members")
def members_count(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return {"success": True, "count": count_members(db)}


@router.get("/overview")
def overview(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    def _count(model) -> int:
        return db.scalar(select(func.count()).select_from(model)) or 0

    return {
        "success": True,
        "data": {
            "members": count_members(db),
            "publications": _count(Publication),
            "theses": _count(Thesis),
            "mastersis": _count(MasterSI),
            "actus": _count(Actu),
        },
    }
