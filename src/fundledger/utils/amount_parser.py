"""Amount and percentage parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-123.45" and "(123.45)" (negative; rejected later by validation)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    is_negative = text.startswith("(") and text.endswith(")")
    if is_negative:
        text = text[1:-1]

    text = re.sub(r"[$€£¥,\s]", "", text)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return -amount if is_negative else amount


def parse_percentage(percentage_str: str) -> Decimal:
    """Parse a percentage such as "25", "12.5" or "12.5%".

    Raises:
        ValueError: If the value cannot be parsed
    """
    text = percentage_str.strip().rstrip("%").strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse percentage '{percentage_str}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse percentage '{percentage_str}'")
    return value


def parse_allocation(spec: str) -> tuple[str, Decimal]:
    """Parse a "FUND=PERCENT" pair.

    The fund part is returned unresolved (it may be a fund ID or name).

    Raises:
        ValueError: If the pair is malformed
    """
    fund, separator, percentage = spec.rpartition("=")
    if not separator or not fund.strip():
        raise ValueError(f"Invalid allocation '{spec}': expected FUND=PERCENT")
    return fund.strip(), parse_percentage(percentage)
