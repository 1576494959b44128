"""
services/theses.py

Business rules shared by theses (HDR / These) and Master/PFE projects.

Both tables have the same shape, so one SupervisedWorkService instance is
created per model:

- theses     : THESES
- mastersis  : MASTER_SIS

Rules:
- search over title, author, etablissement, specialite, encadrant and the
  jury members text
- a blank author is filled with the requester's name; 400 when neither is
  available
- owner-or-admin on update / delete, owner never reassigned

Related files:
- app.services.content   : filter / enrich / ownership helpers
- app.routers.theses     : /api/theses and /api/mastersis

"""

import uuid

from sqlalchemy.orm import Session

from app.core.deps import Requester
from app.core.errors import ValidationFailedError
from app.models.thesis import Thesis, MasterSI
from app.services.content import (
    ThesisFilter,
    apply_changes,
    clean_text,
    creator_fields,
    ensure_can_modify,
    get_or_404,
    get_with_creator,
    list_with_creator,
    normalize_list,
    parse_json_list,
)

AUTHOR_REQUIRED_MESSAGE = "Author is required and could not be automatically set."


class SupervisedWorkService:
    def __init__(self, model, label: str, not_found_label: str):
        self.model = model
        self.label = label
        self.not_found_label = not_found_label

    def to_dict(self, obj, creator_name: str | None, creator_email: str | None) -> dict:
        return {
            "id": str(obj.id),
            "title": obj.title,
            "author": obj.author,
            "year": obj.year,
            "summary": obj.summary,
            "type": obj.type,
            "etablissement": obj.etablissement,
            "specialite": obj.specialite,
            "encadrant": obj.encadrant,
            "membres": normalize_list(obj.membres),
            "createdAt": obj.created_at.isoformat() if obj.created_at else None,
            "updatedAt": obj.updated_at.isoformat() if obj.updated_at else None,
            **creator_fields(obj.user_id, creator_name, creator_email),
        }

    def list(self, db: Session, flt: ThesisFilter) -> list[dict]:
        m = self.model
        rows = list_with_creator(
            db,
            m,
            exact={m.user_id: flt.creator_id, m.year: flt.year, m.type: clean_text(flt.type)},
            search_columns=[m.title, m.author, m.etablissement, m.specialite, m.encadrant, m.membres],
            search_term=flt.search_term,
            order_by=[m.year.desc(), m.created_at.desc()],
        )
        return [self.to_dict(*row) for row in rows]

    def get(self, db: Session, item_id: uuid.UUID) -> dict:
        return self.to_dict(*get_with_creator(db, self.model, item_id, self.not_found_label))

    def create(self, db: Session, requester: Requester, data) -> object:
        author = clean_text(data.author) or clean_text(requester.name)
        if not author:
            raise ValidationFailedError(AUTHOR_REQUIRED_MESSAGE)

        obj = self.model(
            title=data.title,
            author=author,
            year=data.year,
            summary=data.summary,
            type=data.type.value,
            etablissement=data.etablissement,
            specialite=data.specialite,
            encadrant=data.encadrant,
            membres=normalize_list(data.membres),
            user_id=requester.id,
        )
        db.add(obj)
        db.flush()
        return obj

    def update(self, db: Session, requester: Requester, item_id: uuid.UUID, data) -> object:
        obj = get_or_404(db, self.model, item_id, self.not_found_label)
        ensure_can_modify(requester, obj, "update", self.label)

        changes = data.model_dump(exclude_unset=True)
        for field, value in list(changes.items()):
            if field == "membres":
                changes[field] = parse_json_list(value, "membres")
            elif value is None:
                raise ValidationFailedError(f"{field} cannot be empty")
            elif field == "type":
                changes[field] = value.value

        apply_changes(obj, changes)
        db.flush()
        return obj

    def delete(self, db: Session, requester: Requester, item_id: uuid.UUID) -> None:
        obj = get_or_404(db, self.model, item_id, self.not_found_label)
        ensure_can_modify(requester, obj, "delete", self.label)
        db.delete(obj)
        db.flush()


THESES = SupervisedWorkService(Thesis, "thesis", "Thesis")
MASTER_SIS = SupervisedWorkService(MasterSI, "Master/PFE", "Master/PFE")
