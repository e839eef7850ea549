# feedback_api/services/responses.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select

from feedback_api.models.feedback import FeedbackResponse
from feedback_api.services.base import Gateway, utcnow
from feedback_api.services.json_column import DecodeStatus, decode_response_data, encode_response_data

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


@dataclass
class ResponseRecord:
    form_id: int
    respondent_email: str = ANONYMOUS
    response_data: dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None
    submitted_at: Optional[datetime] = None
    data_status: DecodeStatus = DecodeStatus.OK


def _to_record(row: FeedbackResponse) -> ResponseRecord:
    decoded = decode_response_data(row.response_data)
    return ResponseRecord(
        id=row.id,
        form_id=row.form_id,
        respondent_email=row.respondent_email,
        response_data=decoded.value,
        submitted_at=row.submitted_at,
        data_status=decoded.status,
    )


class ResponseGateway(Gateway):

    def create(self, response: ResponseRecord) -> ResponseRecord:
        """Stores an immutable submission and assigns its id."""
        row = FeedbackResponse(
            form_id=response.form_id,
            respondent_email=response.respondent_email or ANONYMOUS,
            response_data=encode_response_data(response.response_data),
            submitted_at=utcnow(),
        )
        with self._session("storing response") as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            created = _to_record(row)
        logger.info("Response %s stored for form %s", created.id, created.form_id)
        return created

    def find_by_form(self, form_id: int) -> List[ResponseRecord]:
        """Newest first. Works for forms that have since been deleted."""
        with self._session("listing responses") as db:
            rows = db.scalars(
                select(FeedbackResponse)
                .where(FeedbackResponse.form_id == form_id)
                .order_by(FeedbackResponse.submitted_at.desc(), FeedbackResponse.id.desc())
            ).all()
            return [_to_record(r) for r in rows]
