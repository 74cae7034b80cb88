"""
Listing wizard: the four-step form sellers fill in to create a listing.
Each step has its own required-field and numeric-range rules.
"""

from typing import Callable, Dict, List, Tuple
from subto.schemas.listing import ListingDraft
from subto.utils.exceptions import BadRequestError
import logging

logger = logging.getLogger(__name__)

FIRST_STEP = 1
TOTAL_STEPS = 4

STEP_TITLES = {
    1: "Basic Information",
    2: "Property Details",
    3: "Financial Information",
    4: "Loan Details",
}


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def _not_positive(value) -> bool:
    return value is None or value <= 0


# (field, failing check, message) per step, in form order
Rule = Tuple[str, Callable, str]

STEP_RULES: Dict[int, List[Rule]] = {
    1: [
        ("title", _blank, "Property title is required"),
        ("description", _blank, "Property description is required"),
        ("address", _blank, "Address is required"),
        ("city", _blank, "City is required"),
        ("state", _blank, "State is required"),
        ("zip_code", _blank, "ZIP code is required"),
    ],
    2: [
        ("bedrooms", _not_positive, "Number of bedrooms must be greater than 0"),
        ("bathrooms", _not_positive, "Number of bathrooms must be greater than 0"),
        ("square_feet", _not_positive, "Square footage must be greater than 0"),
    ],
    3: [
        ("current_loan_balance", _not_positive, "Loan balance is required"),
        ("interest_rate", _not_positive, "Interest rate is required"),
        ("monthly_payment", _not_positive, "Monthly payment is required"),
        ("asking_price", _not_positive, "Asking price is required"),
        ("property_value", _not_positive, "Property value is required"),
    ],
    4: [
        ("loan_type", _blank, "Loan type is required"),
        ("lender", _blank, "Lender is required"),
        ("years_remaining", _not_positive, "Years remaining must be greater than 0"),
    ],
}


class ListingWizard:
    """Stateless validator and navigator for the listing form."""

    @staticmethod
    def _check_step(step: int) -> None:
        if step not in STEP_RULES:
            raise BadRequestError(f"Step must be between {FIRST_STEP} and {TOTAL_STEPS}")

    @staticmethod
    def validate_step(step: int, draft: ListingDraft) -> Dict[str, str]:
        """
        Validate one step of the form.

        Args:
            step: Step number, 1 to 4
            draft: Current form values

        Returns:
            Map of field name to error message; empty when the step is valid
        """
        ListingWizard._check_step(step)
        errors = {}
        for field, failed, message in STEP_RULES[step]:
            if failed(getattr(draft, field)):
                errors[field] = message
        return errors

    @staticmethod
    def validate_all(draft: ListingDraft) -> Dict[str, str]:
        """Validate every step; returns the merged field errors."""
        errors = {}
        for step in STEP_RULES:
            errors.update(ListingWizard.validate_step(step, draft))
        return errors

    @staticmethod
    def next_step(current: int, draft: ListingDraft) -> int:
        """Advance only when the current step is valid; never past the last step."""
        if ListingWizard.validate_step(current, draft):
            return current
        return min(current + 1, TOTAL_STEPS)

    @staticmethod
    def previous_step(current: int) -> int:
        ListingWizard._check_step(current)
        return max(current - 1, FIRST_STEP)
