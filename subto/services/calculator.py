"""
Deal calculators for subject-to investors.
Plain formulas over non-negative inputs; every rate and return is expressed in percent.
"""

from subto.schemas.calculator import (
    CapRateRequest,
    CapRateResponse,
    CashFlowRequest,
    CashFlowResponse,
    CashOnCashRequest,
    CashOnCashResponse,
    MortgagePaymentRequest,
    MortgagePaymentResponse,
    RiskLevel,
    SubjectToDealRequest,
    SubjectToDealResponse,
)
from subto.utils.exceptions import ValidationError


def _percent(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


def mortgage_payment(principal: float, annual_rate: float, years: float) -> float:
    """
    Fixed monthly payment of a fully amortizing loan.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate in percent
        years: Loan term in years

    Returns:
        Monthly principal and interest payment

    Raises:
        ValidationError: If the term is not positive or an input is negative
    """
    if years <= 0:
        raise ValidationError("Loan term must be greater than 0", [{"field": "years", "message": "Loan term must be greater than 0"}])
    if principal < 0 or annual_rate < 0:
        raise ValidationError("Principal and rate cannot be negative")

    monthly_rate = annual_rate / 100 / 12
    num_payments = years * 12

    if monthly_rate == 0:
        return principal / num_payments

    growth = (1 + monthly_rate) ** num_payments
    return principal * (monthly_rate * growth) / (growth - 1)


def risk_level(cash_on_cash_return: float, cap_rate: float, monthly_profit: float) -> RiskLevel:
    if cash_on_cash_return > 15 and cap_rate > 8 and monthly_profit > 200:
        return RiskLevel.LOW
    if cash_on_cash_return > 10 and cap_rate > 6 and monthly_profit > 100:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


class CalculatorService:
    """Calculators page backend."""

    @staticmethod
    def mortgage(request: MortgagePaymentRequest) -> MortgagePaymentResponse:
        payment = mortgage_payment(request.principal, request.annual_rate, request.years)
        number_of_payments = round(request.years * 12)
        total_paid = payment * number_of_payments
        return MortgagePaymentResponse(
            monthly_payment=round(payment, 2),
            number_of_payments=number_of_payments,
            total_paid=round(total_paid, 2),
            total_interest=round(total_paid - request.principal, 2),
        )

    @staticmethod
    def cash_flow(request: CashFlowRequest) -> CashFlowResponse:
        monthly_profit = request.monthly_rent - request.monthly_payment - request.monthly_expenses
        return CashFlowResponse(
            monthly_profit=monthly_profit,
            annual_cash_flow=monthly_profit * 12,
            equity=request.property_value - request.loan_balance,
        )

    @staticmethod
    def cash_on_cash(request: CashOnCashRequest) -> CashOnCashResponse:
        total_cash_invested = (
            request.cash_invested
            + request.initial_costs
            + request.back_payments
            + request.closing_costs
            + request.repair_costs
        )
        return CashOnCashResponse(
            total_cash_invested=total_cash_invested,
            cash_on_cash_return=_percent(request.annual_cash_flow, total_cash_invested),
        )

    @staticmethod
    def cap_rate(request: CapRateRequest) -> CapRateResponse:
        net_operating_income = request.annual_rent - request.annual_expenses
        return CapRateResponse(
            net_operating_income=net_operating_income,
            cap_rate=_percent(net_operating_income, request.property_value),
        )

    @classmethod
    def subject_to_deal(cls, request: SubjectToDealRequest) -> SubjectToDealResponse:
        """
        Complete deal analysis combining every calculator.

        Adds the one-percent rule (monthly rent vs. value), the fifty-percent rule
        (expenses vs. rent) and a Low/Moderate/High risk rating.
        """
        cash_flow = cls.cash_flow(CashFlowRequest(
            property_value=request.property_value,
            loan_balance=request.loan_balance,
            monthly_payment=request.monthly_payment,
            monthly_rent=request.monthly_rent,
            monthly_expenses=request.monthly_expenses,
        ))
        returns = cls.cash_on_cash(CashOnCashRequest(
            annual_cash_flow=cash_flow.annual_cash_flow,
            cash_invested=request.cash_invested,
            initial_costs=request.initial_costs,
            back_payments=request.back_payments,
            closing_costs=request.closing_costs,
            repair_costs=request.repair_costs,
        ))
        cap = cls.cap_rate(CapRateRequest(
            annual_rent=request.annual_rent,
            annual_expenses=request.annual_expenses,
            property_value=request.property_value,
        ))

        one_percent_rule = _percent(request.monthly_rent, request.property_value)
        fifty_percent_rule = _percent(request.monthly_expenses, request.monthly_rent)

        return SubjectToDealResponse(
            equity=cash_flow.equity,
            monthly_profit=cash_flow.monthly_profit,
            annual_cash_flow=cash_flow.annual_cash_flow,
            total_cash_invested=returns.total_cash_invested,
            cash_on_cash_return=returns.cash_on_cash_return,
            net_operating_income=cap.net_operating_income,
            cap_rate=cap.cap_rate,
            one_percent_rule=one_percent_rule,
            one_percent_rule_met=one_percent_rule >= 1,
            fifty_percent_rule=fifty_percent_rule,
            fifty_percent_rule_met=request.monthly_rent > 0 and fifty_percent_rule <= 50,
            loan_to_value=_percent(request.loan_balance, request.property_value),
            risk_level=risk_level(returns.cash_on_cash_return, cap.cap_rate, cash_flow.monthly_profit),
        )
