# feedback_api/api/deps/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from feedback_api.api.deps.services import get_token_service
from feedback_api.core.security import TokenService
from feedback_api.services.forms import FormRecord

# auto_error=False: a missing header must get the same 401 as a bad token
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized - Invalid or missing token"
FORBIDDEN = "Forbidden - You don't have access to this form"


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """
    Caller identity from `Authorization: Bearer <token>`.
    Missing header, wrong scheme and invalid token are one uniform 401.
    """
    user_id = tokens.validate(credentials.credentials) if credentials else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def ensure_owner(form: FormRecord, user_id: int) -> None:
    """403 when an authenticated caller touches someone else's form."""
    if form.created_by != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
