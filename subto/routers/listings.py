"""
Listing form endpoints: per-step validation and form defaults.
"""

from fastapi import APIRouter, Query, status

from subto.schemas.error import get_error_responses
from subto.schemas.listing import ListingDraft, StepValidationResponse
from subto.services.listing import FIRST_STEP, STEP_TITLES, TOTAL_STEPS, ListingWizard


router = APIRouter(prefix="/listings", tags=["Listing Form"])


@router.get(
    "/defaults",
    response_model=ListingDraft,
    status_code=status.HTTP_200_OK,
    summary="Empty listing form",
    description="Initial form values, including the pre-filled property details and loan term"
)
async def listing_defaults() -> ListingDraft:
    return ListingDraft()


@router.get(
    "/steps",
    status_code=status.HTTP_200_OK,
    summary="Form steps"
)
async def listing_steps() -> dict:
    return {
        "first_step": FIRST_STEP,
        "total_steps": TOTAL_STEPS,
        "steps": [{"step": step, "title": title} for step, title in STEP_TITLES.items()],
    }


@router.post(
    "/validate",
    response_model=StepValidationResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate a form step",
    description="Check the fields of one step and report the step the form should show next",
    responses=get_error_responses(400, 422)
)
async def validate_step(
    draft: ListingDraft,
    step: int = Query(..., description="Step number, 1 to 4")
) -> StepValidationResponse:
    errors = ListingWizard.validate_step(step, draft)
    return StepValidationResponse(
        step=step,
        valid=not errors,
        errors=errors,
        next_step=ListingWizard.next_step(step, draft),
    )
