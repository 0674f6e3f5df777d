"""
Request Validation Module

Calculation requests and the pure pre-check that turns a raw request into a
validated one (or a typed failure) before any arithmetic runs.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import date
from dataclasses import dataclass
from typing import Optional, Union

from .errors import CalculationError, CalculationFailure, ErrorCode
from .methods import Convention, resolve_convention


MAX_DURATION_DAYS = 36600  # 100 years
MAX_RATE_PERCENT = Decimal('100')
INPUT_QUANTUM = Decimal('0.01')


@dataclass(frozen=True)
class CalculationRequest:
    """Raw calculation request as supplied by a caller"""
    method: Union[str, int, None]
    start_date: Optional[date]
    end_date: Optional[date]
    principal: Optional[Decimal]
    rate_percent: Optional[Decimal]
    anticipative: bool = False


@dataclass(frozen=True)
class ValidatedRequest:
    """Request with the method resolved and amounts normalized"""
    convention: Convention
    start_date: date
    end_date: date
    principal: Decimal
    rate_percent: Decimal
    anticipative: bool = False

    @property
    def rate(self) -> Decimal:
        """Rate as a decimal fraction (5.00% -> 0.05)"""
        return self.rate_percent / Decimal('100')

    @property
    def elapsed_days(self) -> int:
        return (self.end_date - self.start_date).days


def _to_input_decimal(value) -> Decimal:
    # Principal and rate carry two fractional digits
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        if not value.is_finite():
            raise CalculationError(ErrorCode.ARITHMETIC_OVERFLOW)
        value = value.quantize(INPUT_QUANTUM, rounding=ROUND_HALF_UP)
        # -0.00 is reported as 0.00
        return value.copy_abs() if value.is_zero() else value
    except InvalidOperation:
        raise CalculationError(ErrorCode.ARITHMETIC_OVERFLOW)


def validate(request: CalculationRequest) -> Union[ValidatedRequest, CalculationFailure]:
    """
    Validate a calculation request

    Checks run in a fixed order and the first failure wins.

    Args:
        request: Raw request

    Returns:
        ValidatedRequest when every check passes, otherwise the
        CalculationFailure for the first failing check
    """
    try:
        convention = resolve_convention(request.method)
    except CalculationError as e:
        return CalculationFailure.from_error(e)

    if request.start_date is None:
        return CalculationFailure.of(ErrorCode.START_DATE_REQUIRED)
    if request.end_date is None:
        return CalculationFailure.of(ErrorCode.END_DATE_REQUIRED)
    if request.end_date <= request.start_date:
        return CalculationFailure.of(ErrorCode.INVALID_DATE_ORDER)

    if request.principal is None:
        return CalculationFailure.of(ErrorCode.PRINCIPAL_REQUIRED)
    try:
        principal = _to_input_decimal(request.principal)
    except CalculationError as e:
        return CalculationFailure.from_error(e)
    if principal <= Decimal('0'):
        return CalculationFailure.of(ErrorCode.PRINCIPAL_NOT_POSITIVE)

    if request.rate_percent is None:
        return CalculationFailure.of(ErrorCode.RATE_REQUIRED)
    try:
        rate_percent = _to_input_decimal(request.rate_percent)
    except CalculationError as e:
        return CalculationFailure.from_error(e)
    if rate_percent < Decimal('0'):
        return CalculationFailure.of(ErrorCode.RATE_NEGATIVE)
    if rate_percent > MAX_RATE_PERCENT:
        return CalculationFailure.of(ErrorCode.RATE_TOO_LARGE)

    if (request.end_date - request.start_date).days > MAX_DURATION_DAYS:
        return CalculationFailure.of(ErrorCode.DURATION_TOO_LARGE)

    return ValidatedRequest(
        convention=convention,
        start_date=request.start_date,
        end_date=request.end_date,
        principal=principal,
        rate_percent=rate_percent,
        anticipative=bool(request.anticipative)
    )
