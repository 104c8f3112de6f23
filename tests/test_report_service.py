"""Tests for period reports."""

from datetime import date
from decimal import Decimal

from fundledger.domain.report import build_report


def seed(transaction_service):
    transaction_service.submit_income(Decimal("1000"), Decimal("300"), date(2024, 1, 15), "Client A")
    transaction_service.submit_income(Decimal("500"), Decimal("100"), date(2024, 2, 10), "Client B")
    transaction_service.submit_expense(Decimal("40"), "misc", date(2024, 2, 12), "Snacks")
    transaction_service.submit_expense(Decimal("120"), "personal", date(2024, 2, 20), "Shoes")
    transaction_service.submit_expense(Decimal("60"), "personal", date(2024, 3, 1), "Dinner")


def test_lifetime_report(transaction_service, report_service):
    seed(transaction_service)
    report = report_service.build_report()

    assert report.start_date is None and report.end_date is None
    assert report.income == Decimal("1500")
    assert report.cost_of_production == Decimal("400")
    assert report.profit == Decimal("1100")
    assert report.expenses == Decimal("220")
    assert report.transaction_count == 5
    assert report.fund_distributions["personal"] == Decimal("275.00")
    assert sum(report.fund_distributions.values()) == report.profit
    assert report.fund_outflows == {"misc": Decimal("40"), "personal": Decimal("180")}
    assert [e.description for e in report.top_expenses] == ["Shoes", "Dinner", "Snacks"]


def test_period_report(transaction_service, report_service):
    seed(transaction_service)
    report = report_service.build_report(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))

    assert report.income == Decimal("500")
    assert report.profit == Decimal("400")
    assert report.expenses == Decimal("160")
    assert report.transaction_count == 3


def test_report_does_not_touch_balances(transaction_service, report_service, fund_service):
    seed(transaction_service)
    before = fund_service.get_totals()
    report_service.build_report(start_date=date(2030, 1, 1))

    assert fund_service.get_totals() == before


def test_top_expense_limit(transaction_service, report_service):
    seed(transaction_service)
    report = report_service.build_report(top_count=1)
    assert [e.amount for e in report.top_expenses] == [Decimal("120")]


def test_empty_report():
    report = build_report([], date(2024, 1, 1), date(2024, 12, 31))

    assert report.income == 0
    assert report.transaction_count == 0
    assert report.fund_distributions == {}
    assert report.top_expenses == ()
