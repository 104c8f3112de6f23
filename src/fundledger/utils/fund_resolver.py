"""Utility for resolving fund names to IDs."""

from fundledger.domain.errors import NotFoundError
from fundledger.domain.fund import FundService


def resolve_fund(fund_service: FundService, fund: str) -> str:
    """Resolve a fund ID or name to a fund ID.

    IDs win over names. Names are matched exactly first, then
    case-insensitively if that is unambiguous.

    Args:
        fund_service: FundService instance
        fund: Fund ID or name

    Returns:
        Fund ID

    Raises:
        NotFoundError: If the fund is not found
    """
    funds = fund_service.list_funds()

    for candidate in funds:
        if candidate.id == fund:
            return candidate.id

    for candidate in funds:
        if candidate.name == fund:
            return candidate.id

    matches = [candidate for candidate in funds if candidate.name.lower() == fund.lower()]
    if len(matches) == 1:
        return matches[0].id

    raise NotFoundError(f"Fund '{fund}' not found")
