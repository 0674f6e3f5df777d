"""
Interest Method Module

The seven supported day-count/compounding conventions and the resolver that
maps a caller token (numeric id or alias) to one of them.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from .errors import CalculationError, ErrorCode


class Convention(Enum):
    """Day-count conventions with id, canonical name and aliases"""
    ACT_ACT = (1, "ACT/ACT", ("PROPORC", "PROPORC.", "ACTUAL/ACTUAL"))
    ACT_365 = (2, "ACT/365", ("PROPORC.28-31/365", "ACT365"))
    ACT_360 = (3, "ACT/360", ("PROPORC.28-31/360", "ACT360"))
    THIRTY_360 = (4, "30/360", ("PROPORC.30/360", "30E/360", "30EU/360"))
    THIRTY_365 = (5, "30/365", ("PROPORC.30/365",))
    THIRTY_365_HYBRID = (6, "30/365-6", ("PROPORC.30/365-6", "30/3656"))
    COMPOUND = (7, "COMPOUND", ("KONFORMNE", "CONFORMAL"))

    def __init__(self, method_id: int, label: str, aliases: Tuple[str, ...]):
        self.id = method_id
        self.label = label
        self.aliases = aliases

    @property
    def is_simple(self) -> bool:
        """True for conventions computed as principal x rate x fraction"""
        return self not in (Convention.THIRTY_365_HYBRID, Convention.COMPOUND)

    @classmethod
    def from_id(cls, method_id: int) -> 'Convention':
        for convention in cls:
            if convention.id == method_id:
                return convention
        raise CalculationError(ErrorCode.UNKNOWN_METHOD)


def normalize_alias(token: str) -> str:
    """Uppercase and drop every space"""
    return token.upper().replace(" ", "")


def _build_alias_table() -> Dict[str, Convention]:
    table = {}
    for convention in Convention:
        table[normalize_alias(convention.label)] = convention
        for alias in convention.aliases:
            table[normalize_alias(alias)] = convention
    return table


ALIAS_TABLE: Dict[str, Convention] = _build_alias_table()


def resolve_convention(token: Union[str, int, None]) -> Convention:
    """
    Resolve a method token to a convention

    Args:
        token: Numeric id (1-7, as int or string) or alias, case and
            space insensitive

    Returns:
        The matching Convention

    Raises:
        CalculationError: METHOD_REQUIRED for a missing token,
            UNKNOWN_METHOD when neither the id nor the alias resolves
    """
    if token is None:
        raise CalculationError(ErrorCode.METHOD_REQUIRED)

    if isinstance(token, int) and not isinstance(token, bool):
        return Convention.from_id(token)

    text = str(token).strip()
    if not text:
        raise CalculationError(ErrorCode.METHOD_REQUIRED)

    try:
        method_id = int(text)
    except ValueError:
        method_id = None

    if method_id is not None:
        return Convention.from_id(method_id)

    convention = ALIAS_TABLE.get(normalize_alias(text))
    if convention is None:
        raise CalculationError(ErrorCode.UNKNOWN_METHOD)
    return convention
