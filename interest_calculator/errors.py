"""
Error Taxonomy Module

Numeric error codes and messages for every failure the calculator reports.
Codes are compatible with the legacy database routines (52000-52012, 52999).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Calculation error codes with default messages"""
    METHOD_REQUIRED = (52000, "Method is required (1-7 or a known alias).")
    UNKNOWN_METHOD = (52001, "Unknown interest method. Use 1-7 or a valid alias.")
    START_DATE_REQUIRED = (52002, "Start date is required (YYYY-MM-DD).")
    END_DATE_REQUIRED = (52003, "End date is required (YYYY-MM-DD).")
    INVALID_DATE_ORDER = (52006, "End date must be strictly after start date.")
    PRINCIPAL_REQUIRED = (52007, "Principal is required.")
    PRINCIPAL_NOT_POSITIVE = (52008, "Principal must be > 0.")
    RATE_REQUIRED = (52009, "Rate is required.")
    RATE_NEGATIVE = (52010, "Rate must be >= 0.")
    RATE_TOO_LARGE = (52011, "Rate must be less than or equal to 100.")
    DURATION_TOO_LARGE = (52012, "Duration too large (> 100 years). Check dates.")
    DEGENERATE_ANTICIPATIVE_FACTOR = (52013, "Anticipative factor is zero; cannot back-calculate principal.")
    ARITHMETIC_OVERFLOW = (52999, "Calculation/convert error. Check inputs (types, ranges).")

    def __init__(self, number: int, default_message: str):
        self.number = number
        self.default_message = default_message


class CalculationError(Exception):
    """Raised by hosts that surface calculation failures as exceptions"""

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or code.default_message
        super().__init__(f"[{code.number}] {self.message}")


@dataclass(frozen=True)
class CalculationFailure:
    """Error variant of a calculation result"""
    code: ErrorCode
    message: str

    @classmethod
    def of(cls, code: ErrorCode, message: Optional[str] = None) -> 'CalculationFailure':
        return cls(code=code, message=message or code.default_message)

    @classmethod
    def from_error(cls, error: CalculationError) -> 'CalculationFailure':
        return cls(code=error.code, message=error.message)

    def to_error(self) -> CalculationError:
        return CalculationError(self.code, self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.number,
            "error": self.code.name,
            "message": self.message
        }
