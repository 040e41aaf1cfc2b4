# app/api/endpoints/admission.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import Any, Dict, List

from app.api.deps import get_admission_flow, get_form_storage
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.core.session_store import StorageUnavailableError
from app.models.enums import Step
from app.schemas.admission import (
    CampusOption,
    CampusSelection,
    PersonalDetailsForm,
    StepResponse,
)
from app.services.admission_flow import AdmissionFlow, campus_options
from app.services.form_storage import FormStorage

router = APIRouter(
    prefix="/api/admission",
    tags=["Admission"]
)

STORAGE_UNAVAILABLE = "Session storage unavailable. Please try again."


def storage_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=STORAGE_UNAVAILABLE,
    )


# ------------------------------------------------------------
# VIEW A STEP (entry guards applied)
# ------------------------------------------------------------
@router.get("/steps/{step}", response_model=StepResponse)
async def view_step(
    step: Step,
    flow: AdmissionFlow = Depends(get_admission_flow),
):
    return await flow.view(step)


# ------------------------------------------------------------
# STEP 1: SUBMIT PERSONAL DETAILS
# ------------------------------------------------------------
@router.post("/personal-details", response_model=StepResponse)
@limiter.limit(settings.SUBMIT_RATE_LIMIT)
async def submit_personal_details(
    request: Request,
    payload: PersonalDetailsForm,
    flow: AdmissionFlow = Depends(get_admission_flow),
):
    try:
        return await flow.submit_personal_details(payload.to_record())
    except StorageUnavailableError:
        raise storage_unavailable()


@router.post("/restart", response_model=StepResponse)
async def restart(flow: AdmissionFlow = Depends(get_admission_flow)):
    try:
        return await flow.restart()
    except StorageUnavailableError:
        raise storage_unavailable()


# ------------------------------------------------------------
# STEP 2: CAMPUS SELECTION
# ------------------------------------------------------------
@router.get("/campuses", response_model=List[CampusOption])
async def list_campuses():
    return campus_options()


@router.post("/campus", response_model=StepResponse)
async def select_campus(
    payload: CampusSelection,
    flow: AdmissionFlow = Depends(get_admission_flow),
):
    try:
        return await flow.select_campus(payload.campus)
    except StorageUnavailableError:
        raise storage_unavailable()


# ------------------------------------------------------------
# STEP 3: DETAILS AND FEES
# ------------------------------------------------------------
@router.get("/fees", response_model=StepResponse)
async def get_fees(flow: AdmissionFlow = Depends(get_admission_flow)):
    return await flow.view(Step.DetailsAndFees)


@router.post("/start-over", response_model=StepResponse)
async def start_over(flow: AdmissionFlow = Depends(get_admission_flow)):
    try:
        return await flow.start_over()
    except StorageUnavailableError:
        raise storage_unavailable()


@router.post("/back", response_model=StepResponse)
async def back(flow: AdmissionFlow = Depends(get_admission_flow)):
    return await flow.back()


# ------------------------------------------------------------
# CURRENT RECORD
# ------------------------------------------------------------
@router.get("/record", response_model=Dict[str, Any])
async def get_record(storage: FormStorage = Depends(get_form_storage)):
    return await storage.load()
