# feedback_api/api/endpoints/forms.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from feedback_api.api.deps.auth import ensure_owner, get_current_user_id
from feedback_api.api.deps.services import get_form_gateway, get_response_gateway
from feedback_api.schemas.base import MessageOut
from feedback_api.schemas.forms import (
    FormCreateIn,
    FormOut,
    FormUpdateIn,
    ResponseOut,
    SubmitIn,
    SubmitOut,
)
from feedback_api.services.forms import FormGateway, FormRecord
from feedback_api.services.responses import ANONYMOUS, ResponseGateway, ResponseRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])

FORM_NOT_FOUND = "Form not found"


def _form_out(form: FormRecord) -> FormOut:
    return FormOut(
        id=form.id,
        title=form.title,
        description=form.description,
        created_by=form.created_by,
        created_at=form.created_at,
        updated_at=form.updated_at,
        active=form.is_active,
        fields=form.fields,
    )


def _owned_form(forms: FormGateway, form_id: int, user_id: int) -> FormRecord:
    # 404 before 403: a missing form is reported as missing to anyone
    form = forms.find_by_id(form_id)
    if form is None:
        raise HTTPException(status_code=404, detail=FORM_NOT_FOUND)
    ensure_owner(form, user_id)
    return form


# --------------------------
# GET /forms
# --------------------------
@router.get("", response_model=List[FormOut])
def list_forms(
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
):
    """Only the caller's own forms, newest first."""
    return [_form_out(f) for f in forms.find_by_owner(user_id)]


# --------------------------
# POST /forms
# --------------------------
@router.post("", response_model=FormOut, status_code=status.HTTP_201_CREATED)
def create_form(
    payload: FormCreateIn,
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
):
    title = (payload.title or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    form = forms.create(FormRecord(
        title=title,
        description=(payload.description or "").strip(),
        created_by=user_id,
        fields=list(payload.fields or []),
    ))
    return _form_out(form)


# --------------------------
# GET /forms/{form_id}
# --------------------------
@router.get("/{form_id}", response_model=FormOut)
def get_form(
    form_id: int = Path(..., description="Form id"),
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
):
    return _form_out(_owned_form(forms, form_id, user_id))


# --------------------------
# PUT /forms/{form_id}
# --------------------------
@router.put("/{form_id}", response_model=FormOut)
def update_form(
    payload: FormUpdateIn,
    form_id: int = Path(..., description="Form id"),
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
):
    form = _owned_form(forms, form_id, user_id)

    # Only what was sent changes; a blank title keeps the stored one
    if payload.title is not None and payload.title.strip():
        form.title = payload.title.strip()
    if payload.description is not None:
        form.description = payload.description.strip()
    if payload.is_active is not None:
        form.is_active = payload.is_active
    if payload.fields is not None:
        form.fields = list(payload.fields)

    updated = forms.update(form)
    if updated is None:
        # deleted between the ownership read and the write
        raise HTTPException(status_code=404, detail=FORM_NOT_FOUND)
    return _form_out(updated)


# --------------------------
# DELETE /forms/{form_id}
# --------------------------
@router.delete("/{form_id}", response_model=MessageOut)
def delete_form(
    form_id: int = Path(..., description="Form id"),
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
):
    form = forms.find_by_id(form_id)
    if form is not None:
        ensure_owner(form, user_id)

    # missing row and storage failure are reported alike
    if not forms.delete(form_id):
        raise HTTPException(status_code=404, detail="Form not found or error deleting")
    return MessageOut(message="Form deleted successfully")


# --------------------------
# GET /forms/{form_id}/responses
# --------------------------
@router.get("/{form_id}/responses", response_model=List[ResponseOut])
def list_responses(
    form_id: int = Path(..., description="Form id"),
    user_id: int = Depends(get_current_user_id),
    forms: FormGateway = Depends(get_form_gateway),
    responses: ResponseGateway = Depends(get_response_gateway),
):
    _owned_form(forms, form_id, user_id)
    return [
        ResponseOut(
            id=r.id,
            form_id=r.form_id,
            respondent_email=r.respondent_email,
            response_data=r.response_data,
            submitted_at=r.submitted_at,
        )
        for r in responses.find_by_form(form_id)
    ]


# --------------------------
# POST /forms/{form_id}/submit  (no auth)
# --------------------------
@router.post("/{form_id}/submit", response_model=SubmitOut, status_code=status.HTTP_201_CREATED)
def submit_response(
    payload: SubmitIn,
    form_id: int = Path(..., description="Form id"),
    forms: FormGateway = Depends(get_form_gateway),
    responses: ResponseGateway = Depends(get_response_gateway),
):
    """
    Stores the answers verbatim. Keys are not checked against the form's
    declared fields and inactive forms still accept submissions.
    """
    if forms.find_by_id(form_id) is None:
        raise HTTPException(status_code=404, detail=FORM_NOT_FOUND)

    answers = payload.responses
    if not answers:
        raise HTTPException(status_code=400, detail="No response data provided")

    email = answers.get("email")
    respondent = email.strip() if isinstance(email, str) and email.strip() else ANONYMOUS

    stored = responses.create(ResponseRecord(
        form_id=form_id,
        respondent_email=respondent,
        response_data=answers,
    ))
    return SubmitOut(message="Form submitted successfully", response_id=stored.id)
