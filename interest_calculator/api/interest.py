"""
Interest calculation endpoints
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .schemas import CalculateInterestRequest, ErrorModel, MethodModel
from ..errors import CalculationError
from ..hosts import calculate_checked, calculate_row
from ..methods import Convention
from ..results import COLUMN_LABELS


router = APIRouter()


@router.get("/methods")
async def list_methods():
    """List supported interest methods"""
    return {
        "methods": [MethodModel.from_convention(c).model_dump() for c in Convention]
    }


@router.post("/calculate")
async def calculate_interest(request: CalculateInterestRequest):
    """Calculate interest; failures are returned as HTTP 400"""
    try:
        calc_request = request.to_request()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = calculate_checked(calc_request)
    except CalculationError as e:
        raise HTTPException(
            status_code=400,
            detail=ErrorModel(code=e.code.number, error=e.code.name, message=e.message).model_dump()
        )

    return result.to_dict()


@router.post("/table")
async def calculate_interest_table(
    request: CalculateInterestRequest,
    locale: Optional[str] = Query(None, description="Column label set (en, sq)")
):
    """Calculate interest as a single output row; failures fill ErrCode/ErrText"""
    if locale is not None and locale not in COLUMN_LABELS:
        raise HTTPException(status_code=400, detail=f"Unsupported locale: {locale}")

    try:
        calc_request = request.to_request()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return calculate_row(calc_request, locale=locale)
