"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ConfigurationError(DomainError):
    """Settings cannot be applied without producing a degenerate configuration."""


class DataFormatError(DomainError):
    """Persisted or imported payload is corrupted or has the wrong version."""


def fund_not_found(fund_id: str) -> str:
    """Return message for missing fund."""
    return f"Fund '{fund_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def budget_not_found(budget_id: str) -> str:
    """Return message for missing budget."""
    return f"Budget '{budget_id}' not found"


def duplicate_fund_name(name: str) -> str:
    """Return message for a fund name that is already taken."""
    return f"Fund with name '{name}' already exists"


def distribution_sum_invalid(total: Decimal) -> str:
    """Return message for a distribution that does not sum to 100%."""
    return f"Profit distribution must sum to 100% (currently {total:.2f}%)"


def fund_delete_blocked_balance(fund_name: str, balance: Decimal) -> str:
    """Return message when a fund still holds money."""
    return (
        f"Cannot delete fund '{fund_name}': it has a remaining balance of "
        f"{balance:,.2f}. The balance must be exactly zero."
    )


def fund_delete_blocked_references(fund_name: str, transaction_count: int) -> str:
    """Return message when expenses still reference the fund."""
    return (
        f"Cannot delete fund '{fund_name}': it is the source of "
        f"{transaction_count} expense{'s' if transaction_count != 1 else ''}."
    )


def tax_rescale_degenerate(mode: str) -> str:
    """Return message when the tax toggle has nothing to rescale."""
    return (
        f"Cannot {mode} the tax allocation: the remaining distribution sums to 0%. "
        "Set a profit distribution first."
    )


def distribution_overallocated(allocated: Decimal, profit: Decimal) -> str:
    """Return message when rounded shares exceed the profit being distributed."""
    return (
        f"Profit distribution allocates {allocated:,.2f} of {profit:,.2f}; "
        "the last fund would receive a negative amount. Adjust the percentages "
        "to sum to exactly 100%."
    )
