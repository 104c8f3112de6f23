"""Tax-toggle rebalancer.

Inserts or removes the fixed 5% tax allocation while keeping the relative
weights of every other distribution entry.
"""

from collections.abc import Sequence
from decimal import Decimal

from fundledger.domain.calculations import HUNDRED, distribution_total
from fundledger.domain.entities import DistributionEntry
from fundledger.domain.errors import ConfigurationError, tax_rescale_degenerate


TAX_FUND_ID = "taxes"
TAX_PERCENTAGE = Decimal("5")


def _rescale(
    entries: Sequence[DistributionEntry], target_total: Decimal, mode: str
) -> list[DistributionEntry]:
    base = distribution_total(entries)
    if base == 0:
        raise ConfigurationError(tax_rescale_degenerate(mode))
    return [
        DistributionEntry(fund_id=entry.fund_id, percentage=entry.percentage * target_total / base)
        for entry in entries
    ]


def enable_tax_allocation(
    entries: Sequence[DistributionEntry], tax_fund_id: str = TAX_FUND_ID
) -> tuple[DistributionEntry, ...]:
    """Scale existing entries down to 95% and append the 5% tax entry.

    Any tax entry already present is dropped before rescaling.

    Raises:
        ConfigurationError: If the non-tax entries sum to zero
    """
    others = [entry for entry in entries if entry.fund_id != tax_fund_id]
    scaled = _rescale(others, HUNDRED - TAX_PERCENTAGE, "enable")
    scaled.append(DistributionEntry(fund_id=tax_fund_id, percentage=TAX_PERCENTAGE))
    return tuple(scaled)


def disable_tax_allocation(
    entries: Sequence[DistributionEntry], tax_fund_id: str = TAX_FUND_ID
) -> tuple[DistributionEntry, ...]:
    """Remove the tax entry and scale the remaining entries back up to 100%.

    Raises:
        ConfigurationError: If the remaining entries sum to zero
    """
    others = [entry for entry in entries if entry.fund_id != tax_fund_id]
    return tuple(_rescale(others, HUNDRED, "disable"))
