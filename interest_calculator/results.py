"""
Calculation Result Module

Result records for the two calculation modes and their rendering as a
localized output row.
"""

from decimal import Decimal
from datetime import date
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import CalculationFailure
from .methods import Convention


# Output column labels, keyed by locale
COLUMN_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "error_code": "ErrCode",
        "error_text": "ErrText",
        "start_date": "Start Date",
        "end_date": "End Date",
        "days": "Days",
        "rate_percent": "Rate %",
        "method": "Method",
        "principal": "Principal (initial)",
        "interest": "Interest (normal)",
        "new_balance": "New Balance",
        "final_amount": "Principal (final)",
        "implied_principal": "Principal (anticip)",
        "anticipative_interest": "Interest (anticip)",
    },
    "sq": {
        "error_code": "ErrCode",
        "error_text": "ErrText",
        "start_date": "Data Prej",
        "end_date": "Data Deri",
        "days": "Ditet",
        "rate_percent": "Norma",
        "method": "Metoda",
        "principal": "Shuma (Vlera fillestare)",
        "interest": "Interesi",
        "new_balance": "Gjendja e re",
        "final_amount": "Shuma (Vlera finale)",
        "implied_principal": "Gj.Paraprake (anticip)",
        "anticipative_interest": "Interesi (anticip)",
    },
}

DEFAULT_DATE_FORMAT = "%Y.%m.%d"


@dataclass(frozen=True)
class NormalResult:
    """Interest accrued on a known starting principal"""
    start_date: date
    end_date: date
    days: int
    rate_percent: Decimal
    method: Convention
    principal: Decimal
    interest: Decimal
    new_balance: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": "normal",
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days": self.days,
            "rate_percent": str(self.rate_percent),
            "method": self.method.label,
            "principal": str(self.principal),
            "interest": str(self.interest),
            "new_balance": str(self.new_balance),
        }


@dataclass(frozen=True)
class AnticipativeResult:
    """Present amount back-calculated from a known final amount"""
    start_date: date
    end_date: date
    days: int
    rate_percent: Decimal
    method: Convention
    final_amount: Decimal
    implied_principal: Decimal
    anticipative_interest: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": "anticipative",
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days": self.days,
            "rate_percent": str(self.rate_percent),
            "method": self.method.label,
            "final_amount": str(self.final_amount),
            "implied_principal": str(self.implied_principal),
            "anticipative_interest": str(self.anticipative_interest),
        }


CalculationResult = Union[NormalResult, AnticipativeResult, CalculationFailure]


def _money(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def to_row(
    result: CalculationResult,
    locale: str = "en",
    date_format: str = DEFAULT_DATE_FORMAT
) -> Dict[str, Any]:
    """
    Render a result as a single output row

    Every column is present. Error columns are None on success; only the
    error columns are filled on failure; the columns of the mode that was
    not calculated are None.

    Args:
        result: Calculation result or failure
        locale: Column label set ("en" or "sq")
        date_format: strftime format for the date columns

    Returns:
        Ordered mapping of column label to value
    """
    if locale not in COLUMN_LABELS:
        raise ValueError(f"Unsupported output locale: {locale}")
    labels = COLUMN_LABELS[locale]

    values: Dict[str, Any] = {key: None for key in labels}

    if isinstance(result, CalculationFailure):
        values["error_code"] = result.code.number
        values["error_text"] = result.message
    else:
        values["start_date"] = result.start_date.strftime(date_format)
        values["end_date"] = result.end_date.strftime(date_format)
        values["days"] = result.days
        values["rate_percent"] = str(result.rate_percent)
        values["method"] = result.method.label

        if isinstance(result, AnticipativeResult):
            values["final_amount"] = _money(result.final_amount)
            values["implied_principal"] = _money(result.implied_principal)
            values["anticipative_interest"] = _money(result.anticipative_interest)
        else:
            values["principal"] = _money(result.principal)
            values["interest"] = _money(result.interest)
            values["new_balance"] = _money(result.new_balance)

    return {labels[key]: value for key, value in values.items()}
