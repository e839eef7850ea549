# feedback_api/services/forms.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select

from feedback_api.core.errors import StorageError
from feedback_api.models.feedback import FeedbackForm
from feedback_api.schemas.forms import FormField
from feedback_api.services.base import Gateway, utcnow
from feedback_api.services.json_column import DecodeStatus, decode_fields, encode_fields

logger = logging.getLogger(__name__)


@dataclass
class FormRecord:
    title: str
    created_by: int
    description: str = ""
    is_active: bool = True
    fields: List[FormField] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # tells "no fields" apart from "stored fields could not be read"
    fields_status: DecodeStatus = DecodeStatus.EMPTY


def _to_record(row: FeedbackForm) -> FormRecord:
    decoded = decode_fields(row.fields)
    if decoded.corrupt:
        logger.warning("Form %s has unreadable fields", row.id)
    return FormRecord(
        id=row.id,
        title=row.title,
        description=row.description or "",
        created_by=row.created_by,
        created_at=row.created_at,
        updated_at=row.updated_at,
        is_active=bool(row.is_active),
        fields=decoded.value,
        fields_status=decoded.status,
    )


class FormGateway(Gateway):

    def create(self, form: FormRecord) -> FormRecord:
        """Stores a new form; assigns its id and both timestamps."""
        now = utcnow()
        row = FeedbackForm(
            title=form.title,
            description=form.description or "",
            created_by=form.created_by,
            created_at=now,
            updated_at=now,
            is_active=form.is_active,
            fields=encode_fields(form.fields),
        )
        with self._session("creating form") as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            created = _to_record(row)
        logger.info(
            "Form %s created by user %s with %d fields",
            created.id, created.created_by, len(created.fields),
        )
        return created

    def find_by_id(self, form_id: int) -> Optional[FormRecord]:
        with self._session("finding form") as db:
            row = db.get(FeedbackForm, form_id)
            return _to_record(row) if row else None

    def find_by_owner(self, user_id: int) -> List[FormRecord]:
        """Newest first."""
        with self._session("listing forms by owner") as db:
            rows = db.scalars(
                select(FeedbackForm)
                .where(FeedbackForm.created_by == user_id)
                .order_by(FeedbackForm.created_at.desc(), FeedbackForm.id.desc())
            ).all()
            return [_to_record(r) for r in rows]

    def find_all_active(self) -> List[FormRecord]:
        with self._session("listing active forms") as db:
            rows = db.scalars(
                select(FeedbackForm)
                .where(FeedbackForm.is_active.is_(True))
                .order_by(FeedbackForm.created_at.desc(), FeedbackForm.id.desc())
            ).all()
            return [_to_record(r) for r in rows]

    def update(self, form: FormRecord) -> Optional[FormRecord]:
        """
        Replaces title, description, active flag and fields, and stamps
        updated_at. id, owner and created_at are never written.
        Returns None when the row no longer exists.
        """
        with self._session("updating form") as db:
            row = db.get(FeedbackForm, form.id)
            if row is None:
                return None
            row.title = form.title
            row.description = form.description or ""
            row.is_active = form.is_active
            row.fields = encode_fields(form.fields)
            row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            updated = _to_record(row)
        logger.info("Form %s updated with %d fields", updated.id, len(updated.fields))
        return updated

    def delete(self, form_id: int) -> bool:
        """
        Hard delete. Responses to the form are left in place.
        A storage failure is logged and reported as False, like a missing row.
        """
        try:
            with self._session("deleting form") as db:
                result = db.execute(delete(FeedbackForm).where(FeedbackForm.id == form_id))
                db.commit()
                deleted = result.rowcount > 0
        except StorageError:
            return False
        if deleted:
            logger.info("Form %s deleted", form_id)
        return deleted
