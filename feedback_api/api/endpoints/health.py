# feedback_api/api/endpoints/health.py
from fastapi import APIRouter, HTTPException, Request

from feedback_api.db.session import check_db_connection

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "message": "Server is running"}


@router.get("/health/db")
def health_db(request: Request):
    if not check_db_connection(request.app.state.engine):
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"db": "ok"}
