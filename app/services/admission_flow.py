# app/services/admission_flow.py

from typing import Any, Callable, Dict, Optional

from loguru import logger

from app.core.constants import (
    CAMPUS_CATALOGUE,
    REQUIRED_FIELDS,
    MSG_FORM_REJECTED,
    MSG_INVALID_CAMPUS,
)
from app.models.enums import BCAChoice, Campus, Step
from app.schemas.admission import CampusOption, StepResponse
from app.services.fee_service import build_fee_summary
from app.services.form_storage import FormStorage
from app.services.validation_service import validate_form


# ------------------------------------------------------------
# ENTRY GUARDS
# ------------------------------------------------------------
def resolve_step(requested: Step, record: Dict[str, Any]) -> Step:
    """
    Returns the step that may actually be shown for `requested`, given the
    committed record. Anything whose prerequisites are missing falls back to
    the personal details step.
    """
    if requested == Step.PersonalDetails:
        return requested

    if not record.get("fullName"):
        return Step.PersonalDetails

    if requested == Step.DetailsAndFees and not record.get("campus"):
        return Step.PersonalDetails

    if requested == Step.PersonalDetailsSubmitted and record.get("chooseBCA") != BCAChoice.No.value:
        return Step.PersonalDetails

    return requested


def submit_label(choose_bca: Optional[str]) -> str:
    return "Next" if choose_bca == BCAChoice.Yes.value else "Submit"


def empty_form() -> Dict[str, str]:
    return {field: "" for field in REQUIRED_FIELDS}


def campus_options() -> list[CampusOption]:
    return [
        CampusOption(name=campus.value, **details)
        for campus, details in CAMPUS_CATALOGUE.items()
    ]


# ------------------------------------------------------------
# STEP CONTROLLER
# ------------------------------------------------------------
class AdmissionFlow:
    """
    Drives the admission form through its steps.

    This is the only writer of the stored record: every write goes through
    the FormStorage it was built with, and each transition finishes its
    write before returning the step the client should render next.
    """

    def __init__(self, storage: FormStorage, notifier: Optional[Callable[[str], None]] = None):
        self.storage = storage
        self.notifier = notifier

    def _notify(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier(message)

    def _render(self, step: Step, record: Dict[str, Any], redirected: bool = False, **extra) -> StepResponse:
        response = StepResponse(step=step, redirected=redirected, record=record, **extra)

        if step == Step.PersonalDetails:
            if response.form is None:
                response.form = {field: str(record.get(field) or "") for field in REQUIRED_FIELDS}
            response.submit_label = submit_label(response.form.get("chooseBCA"))
        elif step == Step.CampusSelection:
            response.campuses = campus_options()
        elif step == Step.DetailsAndFees:
            response.fees = build_fee_summary(record.get("campus"))

        return response

    # --------------------------------------------------------
    # VIEW (guard, then payload for the step)
    # --------------------------------------------------------
    async def view(self, requested: Step) -> StepResponse:
        record = await self.storage.load()
        step = resolve_step(requested, record)

        if step != requested:
            logger.info(f"Guard redirect: {requested.value} -> {step.value}")
            return self._render(step, record, redirected=True)

        return self._render(step, record)

    # --------------------------------------------------------
    # STEP 1: PERSONAL DETAILS
    # --------------------------------------------------------
    async def submit_personal_details(self, form: Dict[str, str]) -> StepResponse:
        errors = validate_form(form)
        if errors:
            logger.info(f"Personal details rejected: {sorted(errors)}")
            self._notify(MSG_FORM_REJECTED)
            return self._render(
                Step.PersonalDetails,
                await self.storage.load(),
                errors=errors,
                notification=MSG_FORM_REJECTED,
                form=dict(form),
            )

        record = await self.storage.save(form)

        if form.get("chooseBCA") == BCAChoice.No.value:
            logger.info("Personal details submitted without BCA; flow complete")
            return self._render(Step.PersonalDetailsSubmitted, record)

        logger.info("Personal details submitted; moving to campus selection")
        return self._render(Step.CampusSelection, record)

    async def restart(self) -> StepResponse:
        record = await self.storage.load()
        if resolve_step(Step.PersonalDetailsSubmitted, record) != Step.PersonalDetailsSubmitted:
            logger.info("Restart requested outside the confirmation step; record kept")
            return self._render(Step.PersonalDetails, record, redirected=True)

        await self.storage.clear()
        logger.info("Application restarted from confirmation")
        return self._render(Step.PersonalDetails, {}, form=empty_form())

    # --------------------------------------------------------
    # STEP 2: CAMPUS SELECTION
    # --------------------------------------------------------
    async def select_campus(self, campus: str) -> StepResponse:
        record = await self.storage.load()
        if resolve_step(Step.CampusSelection, record) != Step.CampusSelection:
            logger.info("Campus selected without personal details; redirecting")
            return self._render(Step.PersonalDetails, record, redirected=True)

        if campus not in {c.value for c in Campus}:
            return self._render(
                Step.CampusSelection,
                record,
                errors={"campus": MSG_INVALID_CAMPUS},
            )

        record = await self.storage.save({"campus": campus})
        logger.info(f"Campus selected: {campus}")
        return self._render(Step.DetailsAndFees, record)

    # --------------------------------------------------------
    # STEP 3: DETAILS AND FEES
    # --------------------------------------------------------
    async def start_over(self) -> StepResponse:
        await self.storage.clear()
        logger.info("Application cleared; starting over")
        return self._render(Step.PersonalDetails, {}, form=empty_form())

    async def back(self) -> StepResponse:
        return await self.view(Step.CampusSelection)
