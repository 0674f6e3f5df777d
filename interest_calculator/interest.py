"""
Interest Engine Module

Turns a validated request and its day count into interest. Simple
conventions use principal x rate x fraction, the 30/365-6 hybrid takes the
accrual straight from the day-count engine, and COMPOUND raises (1 + rate)
to the ACT/ACT fraction. An optional anticipative step treats the principal
as a final amount and back-calculates the equivalent present amount.

Monetary values are rounded exactly once, to cents, when the result record
is built. Everything before that runs in a local high-precision decimal
context so that concurrent calls never share arithmetic state.
"""

from decimal import (
    Decimal, ROUND_HALF_UP, DivisionByZero, InvalidOperation, Overflow, localcontext
)
from typing import Optional, Tuple, Union
import uuid

from .config import get_config
from .daycount import DayCountResult, compute_day_count
from .errors import CalculationError, CalculationFailure, ErrorCode
from .logging_config import CALCULATE_ACTION, ENGINE_LOGGER, get_logger, log_action
from .methods import Convention
from .results import AnticipativeResult, CalculationResult, NormalResult
from .validation import CalculationRequest, ValidatedRequest, validate


# Largest amount a DECIMAL(19,2) column can hold
MAX_AMOUNT = Decimal('99999999999999999.99')

logger = get_logger(ENGINE_LOGGER)


def power(base: Decimal, exponent: Decimal) -> Decimal:
    """
    Raise base to a non-integer exponent

    This is the only step in the engine that is not exact: the result is
    irrational in general and is correctly rounded to the precision of the
    active decimal context instead.
    """
    return base ** exponent


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round half away from zero to the given number of places"""
    return value.quantize(Decimal('0.1') ** places, rounding=ROUND_HALF_UP)


def raw_interest(request: ValidatedRequest, day_count: DayCountResult) -> Decimal:
    """
    Unrounded interest for a validated request

    Args:
        request: Validated request
        day_count: Output of the day-count engine for the same request

    Returns:
        Raw interest amount
    """
    convention = request.convention

    if convention == Convention.THIRTY_365_HYBRID:
        return day_count.accrued_interest

    if convention == Convention.COMPOUND:
        factor = power(Decimal('1') + request.rate, day_count.year_fraction)
        return request.principal * (factor - Decimal('1'))

    return request.principal * request.rate * day_count.year_fraction


def anticipative_amounts(final_amount: Decimal, interest: Decimal,
                         places: int = 2) -> Tuple[Decimal, Decimal]:
    """
    Back-calculate the present amount equivalent to a final amount

    Args:
        final_amount: Known future amount (the request principal)
        interest: Raw interest the final amount would earn
        places: Rounding places for the implied principal

    Returns:
        (implied_principal, anticipative_interest)

    Raises:
        CalculationError: DEGENERATE_ANTICIPATIVE_FACTOR when 1 + rate factor is zero
    """
    rate_factor = interest / final_amount
    divisor = Decimal('1') + rate_factor
    if divisor == 0:
        raise CalculationError(ErrorCode.DEGENERATE_ANTICIPATIVE_FACTOR)

    implied_principal = round_money(final_amount / divisor, places)
    return implied_principal, final_amount - implied_principal


def _check_range(*amounts: Decimal) -> None:
    for amount in amounts:
        if abs(amount) > MAX_AMOUNT:
            raise CalculationError(ErrorCode.ARITHMETIC_OVERFLOW)


def calculate_validated(request: ValidatedRequest) -> Union[NormalResult, AnticipativeResult]:
    """
    Run the calculation for an already validated request

    Raises:
        CalculationError: for degenerate anticipative factors and results
            outside the output range
        ArithmeticError: on decimal signals raised by the active context
    """
    settings = get_config()
    places = settings.monetary_places

    with localcontext() as ctx:
        ctx.prec = settings.decimal_precision

        day_count = compute_day_count(
            request.convention,
            request.start_date,
            request.end_date,
            request.principal,
            request.rate
        )
        interest = raw_interest(request, day_count)

        if request.anticipative:
            implied_principal, anticipative_interest = anticipative_amounts(
                request.principal, interest, places
            )
            _check_range(request.principal, implied_principal, anticipative_interest)
            return AnticipativeResult(
                start_date=request.start_date,
                end_date=request.end_date,
                days=day_count.display_days,
                rate_percent=request.rate_percent,
                method=request.convention,
                final_amount=request.principal,
                implied_principal=implied_principal,
                anticipative_interest=anticipative_interest
            )

        rounded_interest = round_money(interest, places)
        new_balance = request.principal + rounded_interest
        _check_range(rounded_interest, new_balance)
        return NormalResult(
            start_date=request.start_date,
            end_date=request.end_date,
            days=day_count.display_days,
            rate_percent=request.rate_percent,
            method=request.convention,
            principal=request.principal,
            interest=rounded_interest,
            new_balance=new_balance
        )


def calculate(request: CalculationRequest,
              correlation_id: Optional[str] = None) -> CalculationResult:
    """
    Validate a request and calculate interest

    Never raises for caller-correctable input: validation failures,
    degenerate anticipative factors and arithmetic overflow are all returned
    as CalculationFailure values.

    Args:
        request: Raw calculation request
        correlation_id: Identifier carried into log records

    Returns:
        NormalResult, AnticipativeResult or CalculationFailure
    """
    correlation_id = correlation_id or str(uuid.uuid4())

    validated = validate(request)
    if isinstance(validated, CalculationFailure):
        _log_failure(request, validated, correlation_id)
        return validated

    try:
        result = calculate_validated(validated)
    except CalculationError as e:
        failure = CalculationFailure.from_error(e)
    except (Overflow, InvalidOperation, DivisionByZero, OverflowError):
        failure = CalculationFailure.of(ErrorCode.ARITHMETIC_OVERFLOW)
    else:
        log_action(
            logger, "debug", "Interest calculated",
            action=CALCULATE_ACTION,
            resource=validated.convention.label,
            correlation_id=correlation_id,
            extra={
                "days": result.days,
                "anticipative": validated.anticipative
            }
        )
        return result

    _log_failure(request, failure, correlation_id)
    return failure


def _log_failure(request: CalculationRequest, failure: CalculationFailure,
                 correlation_id: str) -> None:
    log_action(
        logger, "warning", f"Interest calculation rejected: {failure.message}",
        action=CALCULATE_ACTION,
        resource=None if request.method is None else str(request.method),
        correlation_id=correlation_id,
        extra={"error_code": failure.code.number, "error": failure.code.name}
    )
