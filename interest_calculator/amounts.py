"""
Amount Parsing Module

Lenient conversion of caller-supplied amount strings to Decimal.
NEVER uses float for monetary values.

Accepted forms: an optional leading or trailing currency code or symbol,
an optional sign, digits with "," or "." thousands separators, and a
decimal separator that is whichever of "," or "." comes last. Scientific
notation ("1e6", "2.5E-3") is accepted as is. Anything else is rejected.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


_CURRENCY_PREFIX = re.compile(r'^(?:[A-Za-z]{3}|[$€£])\s*')
_CURRENCY_SUFFIX = re.compile(r'\s*(?:[A-Za-z]{3}|[$€£])$')
_SCIENTIFIC = re.compile(r'[+-]?\d+(?:\.\d+)?[eE][+-]?\d+')
_PLAIN = re.compile(r'([+-]?)([\d.,]+)')


def _decimal_separator(number: str) -> Optional[str]:
    last_comma = number.rfind(',')
    last_dot = number.rfind('.')

    if last_comma >= 0 and last_dot >= 0:
        return ',' if last_comma > last_dot else '.'
    if last_comma >= 0:
        # A single comma followed by at most two digits is a decimal comma
        if number.count(',') == 1 and len(number) - last_comma - 1 <= 2:
            return ','
        return None
    if number.count('.') == 1:
        return '.'
    return None


def _normalize_number(number: str, original: str) -> str:
    separator = _decimal_separator(number)

    if separator is None:
        integer, fraction = number, None
        thousands = ',' if ',' in number else '.'
    else:
        integer, fraction = number.rsplit(separator, 1)
        thousands = '.' if separator == ',' else ','

    if thousands in integer:
        grouping = r'\d{1,3}(?:' + re.escape(thousands) + r'\d{3})+'
        if not re.fullmatch(grouping, integer):
            raise ValueError(f"Cannot convert '{original}' to Decimal")
        integer = integer.replace(thousands, '')

    if fraction is not None and not fraction.isdigit():
        raise ValueError(f"Cannot convert '{original}' to Decimal")
    if not integer:
        integer = '0' if fraction else ''
    if not integer.isdigit():
        raise ValueError(f"Cannot convert '{original}' to Decimal")

    return integer if fraction is None else f"{integer}.{fraction}"


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number ("10,000.00", "EUR 250000",
            "1.000,50", "11,5" with a comma as decimal separator)

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = _CURRENCY_PREFIX.sub('', value.strip())
    clean_value = _CURRENCY_SUFFIX.sub('', clean_value)
    clean_value = clean_value.replace(' ', '')

    if _SCIENTIFIC.fullmatch(clean_value):
        try:
            return Decimal(clean_value)
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal")

    match = _PLAIN.fullmatch(clean_value)
    if not match:
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    sign, number = match.groups()
    return Decimal(sign + _normalize_number(number, value))
