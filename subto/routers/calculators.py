"""
Public deal calculator endpoints.
"""

from fastapi import APIRouter, status

from subto.schemas.calculator import (
    CapRateRequest,
    CapRateResponse,
    CashFlowRequest,
    CashFlowResponse,
    CashOnCashRequest,
    CashOnCashResponse,
    MortgagePaymentRequest,
    MortgagePaymentResponse,
    SubjectToDealRequest,
    SubjectToDealResponse,
)
from subto.schemas.error import get_error_responses
from subto.services.calculator import CalculatorService


router = APIRouter(prefix="/calculators", tags=["Calculators"])


@router.post(
    "/mortgage",
    response_model=MortgagePaymentResponse,
    status_code=status.HTTP_200_OK,
    summary="Monthly mortgage payment",
    responses=get_error_responses(422)
)
async def mortgage(request: MortgagePaymentRequest) -> MortgagePaymentResponse:
    return CalculatorService.mortgage(request)


@router.post(
    "/cash-flow",
    response_model=CashFlowResponse,
    status_code=status.HTTP_200_OK,
    summary="Monthly and annual cash flow",
    responses=get_error_responses(422)
)
async def cash_flow(request: CashFlowRequest) -> CashFlowResponse:
    return CalculatorService.cash_flow(request)


@router.post(
    "/cash-on-cash",
    response_model=CashOnCashResponse,
    status_code=status.HTTP_200_OK,
    summary="Cash-on-cash return",
    responses=get_error_responses(422)
)
async def cash_on_cash(request: CashOnCashRequest) -> CashOnCashResponse:
    return CalculatorService.cash_on_cash(request)


@router.post(
    "/cap-rate",
    response_model=CapRateResponse,
    status_code=status.HTTP_200_OK,
    summary="Capitalization rate",
    responses=get_error_responses(422)
)
async def cap_rate(request: CapRateRequest) -> CapRateResponse:
    return CalculatorService.cap_rate(request)


@router.post(
    "/subject-to-deal",
    response_model=SubjectToDealResponse,
    status_code=status.HTTP_200_OK,
    summary="Full subject-to deal analysis",
    description="Cash flow, returns, rule-of-thumb checks and a Low/Moderate/High risk rating",
    responses=get_error_responses(422)
)
async def subject_to_deal(request: SubjectToDealRequest) -> SubjectToDealResponse:
    return CalculatorService.subject_to_deal(request)
