# app/api/deps.py

import uuid
from fastapi import Depends, Request, Response

from app.core.config import settings
from app.core.session_store import SessionStore, session_backend
from app.services.admission_flow import AdmissionFlow
from app.services.form_storage import FormStorage


# ------------------------------------------------------------
# Session id from cookie (issued on first visit)
# ------------------------------------------------------------
def get_session_id(request: Request, response: Response) -> str:
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)

    if not session_id:
        session_id = uuid.uuid4().hex
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session_id,
            httponly=True,
            samesite="lax",
            secure=settings.ENV == "prod",
        )

    return session_id


# ------------------------------------------------------------
# Session-scoped storage
# ------------------------------------------------------------
def get_session_store(session_id: str = Depends(get_session_id)) -> SessionStore:
    return session_backend.for_session(session_id)


def get_form_storage(store: SessionStore = Depends(get_session_store)) -> FormStorage:
    return FormStorage(store)


# ------------------------------------------------------------
# Step controller for the current session
# ------------------------------------------------------------
def get_admission_flow(storage: FormStorage = Depends(get_form_storage)) -> AdmissionFlow:
    return AdmissionFlow(storage)
