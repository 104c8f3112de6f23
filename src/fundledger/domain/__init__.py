"""Domain layer for fundledger application."""

_SERVICES = {
    "FundService": "fundledger.domain.fund",
    "TransactionService": "fundledger.domain.transaction",
    "SettingsService": "fundledger.domain.settings",
    "BudgetService": "fundledger.domain.budget",
    "ReportService": "fundledger.domain.report",
    "BackupService": "fundledger.domain.backup",
}

__all__ = list(_SERVICES)


# Import services lazily to avoid circular dependencies with the database layer
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
