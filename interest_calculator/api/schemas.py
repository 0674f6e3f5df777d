"""
Pydantic schemas for API requests and responses
"""

from datetime import date
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from ..amounts import decimal_from_string
from ..methods import Convention
from ..validation import CalculationRequest


def _parse_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD)")


def _parse_amount(value: Optional[str], field_name: str):
    if value is None or not value.strip():
        return None
    try:
        return decimal_from_string(value)
    except ValueError:
        raise ValueError(f"{field_name} must be a decimal amount")


class CalculateInterestRequest(BaseModel):
    method: Optional[Union[int, str]] = Field(None, description="Method id (1-7) or alias")
    start_date: Optional[str] = Field(None, description="ISO date string")
    end_date: Optional[str] = Field(None, description="ISO date string")
    principal: Optional[str] = Field(None, description="Decimal amount as string")
    rate_percent: Optional[str] = Field(None, description="Annual rate in percent as string")
    anticipative: bool = False

    def to_request(self) -> CalculationRequest:
        """Convert to an engine request; raises ValueError on malformed fields"""
        return CalculationRequest(
            method=self.method,
            start_date=_parse_date(self.start_date, "start_date"),
            end_date=_parse_date(self.end_date, "end_date"),
            principal=_parse_amount(self.principal, "principal"),
            rate_percent=_parse_amount(self.rate_percent, "rate_percent"),
            anticipative=self.anticipative
        )


class MethodModel(BaseModel):
    id: int
    name: str
    aliases: List[str]

    @classmethod
    def from_convention(cls, convention: Convention) -> 'MethodModel':
        return cls(id=convention.id, name=convention.label, aliases=list(convention.aliases))


class ErrorModel(BaseModel):
    code: int
    error: str
    message: str
