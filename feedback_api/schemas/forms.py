from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from feedback_api.schemas.base import ApiInput, ApiModel


# ---------- Field descriptors ----------

class FormField(ApiInput):
    """One answerable input of a form. `id` is unique within its form only."""
    id: str
    type: str  # free-form tag: text, select, radio, checkbox, ...
    label: str
    required: bool = False
    placeholder: Optional[str] = None
    options: List[str] = Field(default_factory=list)
    order: int = 0

    @field_validator("required", "order", "options", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # clients send null for attributes a field type does not use
        if value is None:
            return {"required": False, "order": 0, "options": []}[info.field_name]
        return value


# ---------- Inputs ----------

class FormCreateIn(ApiInput):
    title: Optional[str] = None
    description: Optional[str] = None
    fields: Optional[List[FormField]] = None


class FormUpdateIn(ApiInput):
    title: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    fields: Optional[List[FormField]] = None


class SubmitIn(ApiInput):
    # answers keyed by field id; not checked against the form's fields
    responses: Optional[dict[str, Any]] = None


# ---------- Outputs ----------

class FormOut(ApiModel):
    id: int
    title: str
    description: str
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    active: bool
    fields: List[FormField] = Field(default_factory=list)


class ResponseOut(ApiModel):
    id: int
    form_id: int
    respondent_email: str
    response_data: dict[str, Any] = Field(default_factory=dict)
    submitted_at: Optional[datetime] = None


class SubmitOut(ApiModel):
    message: str
    response_id: int
