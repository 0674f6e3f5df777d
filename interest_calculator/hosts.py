"""
Calculation Hosts

Two ways of surfacing the single calculation engine to callers: a table
host that always returns one row (errors in the ErrCode/ErrText columns) and
a checked host that raises CalculationError.
"""

from typing import Any, Dict, Optional, Union

from .config import get_config
from .errors import CalculationFailure
from .interest import calculate
from .results import AnticipativeResult, NormalResult, to_row
from .validation import CalculationRequest


def calculate_row(
    request: CalculationRequest,
    locale: Optional[str] = None,
    date_format: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Calculate and render the outcome as one output row

    Locale and date format default to the configured output settings.
    """
    settings = get_config()
    result = calculate(request, correlation_id=correlation_id)
    return to_row(
        result,
        locale=locale or settings.output_locale,
        date_format=date_format or settings.output_date_format
    )


def calculate_checked(
    request: CalculationRequest,
    correlation_id: Optional[str] = None
) -> Union[NormalResult, AnticipativeResult]:
    """
    Calculate, raising on failure

    Raises:
        CalculationError: carrying the failure code and message
    """
    result = calculate(request, correlation_id=correlation_id)
    if isinstance(result, CalculationFailure):
        raise result.to_error()
    return result
