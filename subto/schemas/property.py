"""
Pydantic schemas for listing requests and responses.
Handles listing CRUD payloads and the browse query parameters.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal, InvalidOperation
from subto.config import settings
from subto.models.property import PropertyType, PropertyStatus
from subto.schemas.image import PropertyImageResponse
from subto.schemas.listing import (
    MAX_INTEREST_RATE,
    MAX_MONTHLY,
    MAX_PRICE,
    MAX_ROOMS,
    MAX_SQUARE_FEET,
    MAX_YEARS,
    ListingDraft,
)
from subto.schemas.profile import OwnerContact


class PropertyCreate(ListingDraft):
    """Schema for creating a listing. Completeness is checked by the listing wizard rules."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Subject-To 3BR in South Austin",
                "description": "Low-rate loan, seller motivated, tenant in place.",
                "address": "1234 Maple Street",
                "city": "Austin",
                "state": "TX",
                "zip_code": "78704",
                "property_type": "single_family",
                "bedrooms": 3,
                "bathrooms": 2.5,
                "square_feet": 1850,
                "current_loan_balance": 285000,
                "interest_rate": 3.25,
                "monthly_payment": 1850,
                "asking_price": 25000,
                "property_value": 425000,
                "monthly_rent": 2800,
                "property_taxes": 450,
                "insurance": 125,
                "hoa_fees": 0,
                "loan_type": "Conventional",
                "lender": "Wells Fargo",
                "years_remaining": 25,
                "due_on_sale_clause": False,
            }
        }
    )


class PropertyUpdate(BaseModel):
    """Partial listing update; omitted fields are left untouched."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    property_type: Optional[PropertyType] = None
    bedrooms: Optional[int] = Field(None, gt=0, le=MAX_ROOMS)
    bathrooms: Optional[Decimal] = Field(None, gt=0, le=MAX_ROOMS)
    square_feet: Optional[int] = Field(None, gt=0, le=MAX_SQUARE_FEET)
    current_loan_balance: Optional[Decimal] = Field(None, gt=0, le=MAX_PRICE)
    interest_rate: Optional[Decimal] = Field(None, gt=0, le=MAX_INTEREST_RATE)
    monthly_payment: Optional[Decimal] = Field(None, gt=0, le=MAX_MONTHLY)
    asking_price: Optional[Decimal] = Field(None, gt=0, le=MAX_PRICE)
    property_value: Optional[Decimal] = Field(None, gt=0, le=MAX_PRICE)
    monthly_rent: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY)
    property_taxes: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY)
    insurance: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY)
    hoa_fees: Optional[Decimal] = Field(None, ge=0, le=MAX_MONTHLY)
    loan_type: Optional[str] = Field(None, max_length=50)
    lender: Optional[str] = Field(None, max_length=255)
    years_remaining: Optional[int] = Field(None, gt=0, le=MAX_YEARS)
    due_on_sale_clause: Optional[bool] = None
    status: Optional[PropertyStatus] = Field(None, description="active, pending, sold or withdrawn")

    @field_validator('title', 'address', 'city', 'state', 'zip_code')
    @classmethod
    def strip_required_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Field cannot be blank")
        return v.strip() if v else v


class PropertyMetrics(BaseModel):
    """Figures derived from the listing's financials."""

    equity: float = Field(..., description="property_value - current_loan_balance")
    monthly_cash_flow: float = Field(..., description="Rent minus payment, taxes, insurance and HOA")
    days_listed: int


class PropertyResponse(BaseModel):
    """Listing as returned by the API."""

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    address: str
    city: str
    state: str
    zip_code: str
    property_type: PropertyType
    bedrooms: int
    bathrooms: float
    square_feet: Optional[int] = None
    current_loan_balance: float
    interest_rate: float
    monthly_payment: float
    asking_price: float
    property_value: float
    monthly_rent: Optional[float] = None
    property_taxes: Optional[float] = None
    insurance: Optional[float] = None
    hoa_fees: Optional[float] = None
    loan_type: Optional[str] = None
    lender: Optional[str] = None
    years_remaining: Optional[int] = None
    due_on_sale_clause: bool
    status: PropertyStatus
    featured: bool
    view_count: int
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerContact] = None
    images: List[PropertyImageResponse] = Field(default_factory=list)
    metrics: Optional[PropertyMetrics] = None


class PropertySummary(BaseModel):
    """Listing block attached to messages."""

    id: str
    title: str
    address: str
    asking_price: float


class PropertyListResponse(BaseModel):
    data: List[PropertyResponse]


class ViewCountResponse(BaseModel):
    property_id: str
    view_count: int


TEXT_PARAMS = ("city", "state")


def _is_blank(value) -> bool:
    return isinstance(value, str) and not value.strip()


def _is_zero(value) -> bool:
    if isinstance(value, str):
        try:
            return Decimal(value.strip()) == 0
        except InvalidOperation:
            return False
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool) and value == 0


class PropertySearchQuery(BaseModel):
    """
    Browse query parameters.

    Both camelCase (``minPrice``) and snake_case (``min_price``) names are accepted;
    blank values, and 0 for numeric parameters, are treated as absent.
    """

    model_config = ConfigDict(populate_by_name=True)

    city: Optional[str] = None
    state: Optional[str] = None
    min_price: Optional[Decimal] = Field(None, ge=0, validation_alias=AliasChoices("minPrice", "min_price"))
    max_price: Optional[Decimal] = Field(None, ge=0, validation_alias=AliasChoices("maxPrice", "max_price"))
    property_type: Optional[PropertyType] = Field(
        None, validation_alias=AliasChoices("propertyType", "property_type")
    )
    min_interest_rate: Optional[Decimal] = Field(
        None, ge=0, validation_alias=AliasChoices("minInterestRate", "min_interest_rate")
    )
    max_interest_rate: Optional[Decimal] = Field(
        None, ge=0, validation_alias=AliasChoices("maxInterestRate", "max_interest_rate")
    )
    min_bedrooms: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("minBedrooms", "min_bedrooms"))
    max_bedrooms: Optional[int] = Field(None, ge=0, validation_alias=AliasChoices("maxBedrooms", "max_bedrooms"))
    limit: int = Field(settings.default_page_size, ge=1, le=settings.max_page_size)
    offset: int = Field(0, ge=0)

    @model_validator(mode='before')
    @classmethod
    def drop_unset_values(cls, data):
        """Blank values, and zero for numeric parameters, fall back to the defaults."""
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if not _is_blank(value) and not (key not in TEXT_PARAMS and _is_zero(value))
            }
        return data

    @model_validator(mode='after')
    def validate_ranges(self):
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("Minimum price cannot be greater than maximum price")
        if self.min_bedrooms is not None and self.max_bedrooms is not None and self.min_bedrooms > self.max_bedrooms:
            raise ValueError("Minimum bedrooms cannot be greater than maximum bedrooms")
        return self
