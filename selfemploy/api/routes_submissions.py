"""
Submission Routes.

Records of periods already submitted to HMRC. The HMRC call itself happens
elsewhere; these endpoints only keep the record the period status relies on.
"""
from __future__ import annotations

from fastapi import APIRouter, Query, status

from selfemploy.api.dependencies import SubmissionsDep
from selfemploy.api.schemas import SubmissionIn, SubmissionOut
from selfemploy.services.tax_periods import TaxYear

router = APIRouter()


@router.post("/submissions", response_model=SubmissionOut, status_code=status.HTTP_201_CREATED)
def record_submission(payload: SubmissionIn, submissions: SubmissionsDep):
    return submissions.record_submission(
        business_id=payload.business_id,
        tax_year=TaxYear.of(payload.start_year),
        period_key=payload.period_key,
        hmrc_reference=payload.hmrc_reference,
    )


@router.get("/submissions", response_model=list[SubmissionOut])
def list_submissions(
    submissions: SubmissionsDep,
    business_id: str = Query(..., min_length=1, max_length=64),
    start_year: int = Query(...),
):
    return submissions.list_for_tax_year(business_id, TaxYear.of(start_year))
