# app/schemas/admission.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from app.models.enums import Step


# ============================================================
# STEP 1 → personal details as typed by the applicant
# ============================================================
class PersonalDetailsForm(BaseModel):
    """
    Every field is a plain string defaulting to "" so that missing and
    malformed values are reported by validate_form, not as a 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field("", alias="fullName")
    middle_name: str = Field("", alias="middleName")
    last_name: str = Field("", alias="lastName")
    gender: str = ""
    dob: str = ""
    pob: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    father_name: str = Field("", alias="fatherName")
    mother_name: str = Field("", alias="motherName")
    choose_bca: str = Field("", alias="chooseBCA")

    def to_record(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


# ============================================================
# STEP 2 → campus selection
# ============================================================
class CampusSelection(BaseModel):
    campus: str = ""


class CampusOption(BaseModel):
    name: str
    tagline: str
    facilities: List[str]


# ============================================================
# STEP 3 → derived fee structure (never stored)
# ============================================================
class FeeScheduleEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    semester: int
    tuition_fee: int = Field(alias="tuitionFee")
    other_fees: int = Field(alias="otherFees")
    total: int


class FeeSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    campus: Optional[str]
    schedule: List[FeeScheduleEntry]
    admission_fee: int = Field(alias="admissionFee")


# ============================================================
# RESPONSE → what the client must render next
# ============================================================
class StepResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    step: Step
    redirected: bool = False
    errors: Dict[str, str] = {}
    notification: Optional[str] = None
    record: Dict[str, Any] = {}
    form: Optional[Dict[str, str]] = None
    submit_label: Optional[str] = Field(None, alias="submitLabel")
    campuses: Optional[List[CampusOption]] = None
    fees: Optional[FeeSummary] = None
