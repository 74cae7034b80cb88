"""
Pydantic schemas for the deal calculators.
Inputs default to the sample figures shown on the calculators page; rates are in percent.
"""

from pydantic import BaseModel, Field
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class MortgagePaymentRequest(BaseModel):
    principal: float = Field(250000, ge=0, description="Loan amount")
    annual_rate: float = Field(3.5, ge=0, le=100, description="Annual interest rate in percent")
    years: float = Field(30, gt=0, le=50, description="Loan term in years")


class MortgagePaymentResponse(BaseModel):
    monthly_payment: float
    number_of_payments: int
    total_paid: float
    total_interest: float


class CashFlowRequest(BaseModel):
    property_value: float = Field(300000, ge=0)
    loan_balance: float = Field(250000, ge=0, description="Existing loan balance")
    monthly_payment: float = Field(1200, ge=0)
    monthly_rent: float = Field(1800, ge=0)
    monthly_expenses: float = Field(400, ge=0)


class CashFlowResponse(BaseModel):
    monthly_profit: float
    annual_cash_flow: float
    equity: float


class CashOnCashRequest(BaseModel):
    annual_cash_flow: float = Field(2400, description="May be negative")
    cash_invested: float = Field(15000, ge=0)
    initial_costs: float = Field(5000, ge=0)
    back_payments: float = Field(0, ge=0, description="Arrears paid to reinstate the loan")
    closing_costs: float = Field(3000, ge=0)
    repair_costs: float = Field(8000, ge=0)


class CashOnCashResponse(BaseModel):
    total_cash_invested: float
    cash_on_cash_return: float = Field(..., description="Percent; 0 when nothing is invested")


class CapRateRequest(BaseModel):
    annual_rent: float = Field(21600, ge=0)
    annual_expenses: float = Field(4800, ge=0)
    property_value: float = Field(300000, ge=0)


class CapRateResponse(BaseModel):
    net_operating_income: float
    cap_rate: float = Field(..., description="Percent; 0 when the property value is 0")


class SubjectToDealRequest(BaseModel):
    """Every input of the complete deal analysis."""

    property_value: float = Field(300000, ge=0)
    loan_balance: float = Field(250000, ge=0)
    monthly_payment: float = Field(1200, ge=0)
    monthly_rent: float = Field(1800, ge=0)
    monthly_expenses: float = Field(400, ge=0)
    cash_invested: float = Field(15000, ge=0)
    initial_costs: float = Field(5000, ge=0)
    back_payments: float = Field(0, ge=0)
    closing_costs: float = Field(3000, ge=0)
    repair_costs: float = Field(8000, ge=0)
    annual_rent: float = Field(21600, ge=0)
    annual_expenses: float = Field(4800, ge=0)


class SubjectToDealResponse(BaseModel):
    equity: float
    monthly_profit: float
    annual_cash_flow: float
    total_cash_invested: float
    cash_on_cash_return: float
    net_operating_income: float
    cap_rate: float
    one_percent_rule: float = Field(..., description="Monthly rent as a percent of value")
    one_percent_rule_met: bool
    fifty_percent_rule: float = Field(..., description="Monthly expenses as a percent of rent")
    fifty_percent_rule_met: bool
    loan_to_value: float
    risk_level: RiskLevel
