"""CLI helpers for fund resolution and error handling."""

from __future__ import annotations

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.domain.errors import DomainError
from fundledger.domain.fund import FundService
from fundledger.utils.fund_resolver import resolve_fund


def resolve_fund_or_exit(ctx: click.Context, fund_service: FundService, fund: str) -> str:
    """Resolve fund name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_fund(fund_service, fund)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
