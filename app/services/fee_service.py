from typing import List, Optional

from app.core.constants import (
    SEMESTER_COUNT,
    SURCHARGE_FROM_SEMESTER,
    SENIOR_SEMESTER_SURCHARGE,
    SILIGURI_TUITION,
    SILIGURI_OTHER_FEES,
    SILIGURI_ADMISSION_FEE,
    DEFAULT_TUITION,
    DEFAULT_OTHER_FEES,
    DEFAULT_ADMISSION_FEE,
)
from app.models.enums import Campus
from app.schemas.admission import FeeScheduleEntry, FeeSummary


def _is_siliguri(campus: Optional[str]) -> bool:
    return campus == Campus.Siliguri.value


# ------------------------------------------------------------
# PER-SEMESTER SCHEDULE
# ------------------------------------------------------------
def compute_fee_schedule(campus: Optional[str]) -> List[FeeScheduleEntry]:
    """
    Eight rows, semesters 1..8. Later semesters (5 onward) carry a flat
    tuition surcharge; other fees stay constant.

    Any campus other than Siliguri, including unknown values, is billed at
    the default tier.
    """
    base_tuition = SILIGURI_TUITION if _is_siliguri(campus) else DEFAULT_TUITION
    other_fees = SILIGURI_OTHER_FEES if _is_siliguri(campus) else DEFAULT_OTHER_FEES

    schedule = []
    for semester in range(1, SEMESTER_COUNT + 1):
        surcharge = SENIOR_SEMESTER_SURCHARGE if semester >= SURCHARGE_FROM_SEMESTER else 0
        tuition_fee = base_tuition + surcharge
        schedule.append(
            FeeScheduleEntry(
                semester=semester,
                tuition_fee=tuition_fee,
                other_fees=other_fees,
                total=tuition_fee + other_fees,
            )
        )
    return schedule


# ------------------------------------------------------------
# ONE-TIME ADMISSION FEE (not part of the schedule)
# ------------------------------------------------------------
def admission_fee(campus: Optional[str]) -> int:
    return SILIGURI_ADMISSION_FEE if _is_siliguri(campus) else DEFAULT_ADMISSION_FEE


def build_fee_summary(campus: Optional[str]) -> FeeSummary:
    return FeeSummary(
        campus=campus,
        schedule=compute_fee_schedule(campus),
        admission_fee=admission_fee(campus),
    )
