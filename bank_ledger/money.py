"""
Money Helpers

Converts caller-supplied amounts to Decimal. NEVER uses float for monetary
values: floats are converted through their string form.
"""

from decimal import Decimal, InvalidOperation, getcontext
from typing import Union
import re

from .errors import InvalidAmount

# High precision for financial calculations
getcontext().prec = 28

# Amounts must stay below 10 ** (MAX_AMOUNT_DIGITS) so ledger totals never overflow
MAX_AMOUNT_DIGITS = 15

AmountLike = Union[Decimal, int, float, str]


def to_decimal(value: AmountLike) -> Decimal:
    """
    Normalize an amount to Decimal

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal value

    Raises:
        InvalidAmount: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"Cannot convert '{value}' to an amount")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmount(f"Cannot convert '{value}' to an amount")

    if not result.is_finite():
        raise InvalidAmount(f"Cannot convert '{value}' to an amount")
    if result.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidAmount("Amount is too large.")
    return result


def parse_amount(value: AmountLike) -> Decimal:
    """
    Parse a user-entered amount, handling common formats

    Accepts plain numbers as well as strings with currency symbols and
    thousands separators such as "$1,250.00" or "1.250,00".

    Args:
        value: Raw amount from a request body

    Returns:
        Decimal value

    Raises:
        InvalidAmount: If the value cannot be converted
    """
    if not isinstance(value, str):
        return to_decimal(value)

    if not value.strip():
        raise InvalidAmount("Amount is required")

    # Well-formed numbers are validated as-is; only free-form text gets cleaned
    try:
        parsed = Decimal(value.strip())
    except InvalidOperation:
        parsed = None
    if parsed is not None:
        return to_decimal(parsed)

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[^\d.,\-+]', '', value.strip())

    if ',' in clean_value and '.' in clean_value:
        if clean_value.rfind(',') > clean_value.rfind('.'):
            # European format: dot groups thousands, comma is the decimal mark
            clean_value = clean_value.replace('.', '').replace(',', '.')
        else:
            clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Likely decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Likely thousands separator
            clean_value = clean_value.replace(',', '')
    else:
        clean_value = clean_value.replace(',', '')

    try:
        return to_decimal(clean_value) if clean_value else to_decimal(value)
    except InvalidAmount:
        raise InvalidAmount(f"Cannot convert '{value}' to an amount")
