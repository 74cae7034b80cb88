"""
Pydantic schemas for the multi-step listing form.
A draft is deliberately lenient; the wizard rules decide what is complete.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional
from decimal import Decimal
from subto.models.property import PropertyType


# Upper limits of the listing columns
MAX_PRICE = Decimal("9999999999.99")
MAX_MONTHLY = Decimal("99999999.99")
MAX_INTEREST_RATE = Decimal("99.999")
MAX_ROOMS = 100
MAX_SQUARE_FEET = 10_000_000
MAX_YEARS = 50


class ListingDraft(BaseModel):
    """Everything the listing form collects, pre-filled with the form defaults."""

    # Step 1: basic info
    title: str = Field("", max_length=255)
    description: str = ""
    address: str = Field("", max_length=255)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=50)
    zip_code: str = Field("", max_length=20)

    # Step 2: property details
    property_type: PropertyType = PropertyType.SINGLE_FAMILY
    bedrooms: Optional[int] = Field(3, le=MAX_ROOMS)
    bathrooms: Optional[Decimal] = Field(Decimal("2"), le=MAX_ROOMS, description="Half baths allowed, e.g. 2.5")
    square_feet: Optional[int] = Field(1500, le=MAX_SQUARE_FEET)

    # Step 3: financials
    current_loan_balance: Optional[Decimal] = Field(None, le=MAX_PRICE)
    interest_rate: Optional[Decimal] = Field(None, le=MAX_INTEREST_RATE, description="Annual rate in percent")
    monthly_payment: Optional[Decimal] = Field(None, le=MAX_MONTHLY)
    asking_price: Optional[Decimal] = Field(None, le=MAX_PRICE)
    property_value: Optional[Decimal] = Field(None, le=MAX_PRICE)
    monthly_rent: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY)
    property_taxes: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY, description="Monthly")
    insurance: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY, description="Monthly")
    hoa_fees: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY, description="Monthly")

    # Step 4: loan details
    loan_type: str = Field("", max_length=50)
    lender: str = Field("", max_length=255)
    years_remaining: Optional[int] = Field(30, le=MAX_YEARS)
    due_on_sale_clause: bool = False


class StepValidationResponse(BaseModel):
    """Outcome of validating one wizard step."""

    step: int = Field(..., ge=1, le=4)
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict, description="Field name to message")
    next_step: int = Field(..., description="Step the form should show next")
