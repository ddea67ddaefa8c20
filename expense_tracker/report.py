# expense_tracker/report.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from expense_tracker.core.models import Expense, YearMonth

UNCATEGORIZED = "(uncategorized)"
_HUNDRED = Decimal(100)
_PERCENT_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    amount: Decimal
    percent: Decimal
    count: int


@dataclass(frozen=True)
class MonthlyReport:
    month: YearMonth
    total: Decimal = Decimal(0)
    count: int = 0
    categories: List[CategoryTotal] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return self.count == 0


def percent_of(part: Decimal, total: Decimal) -> Decimal:
    """``part`` as a percentage of ``total``, two places, half-up; 0 when total is 0."""
    if total == 0:
        return Decimal("0.00")
    return (part * _HUNDRED / total).quantize(_PERCENT_PLACES, rounding=ROUND_HALF_UP)


def monthly_report(expenses: Iterable[Expense], month: YearMonth) -> MonthlyReport:
    """
    Total spend for ``month`` and its breakdown by category.

    Categories are grouped case-insensitively under the first spelling seen;
    expenses without a category go under ``(uncategorized)``. Groups are
    ordered by name, ignoring case.
    """
    items = [e for e in expenses if month.includes(e.date)]
    if not items:
        return MonthlyReport(month)

    total = Decimal(0)
    labels: Dict[str, str] = {}
    sums: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for e in items:
        total += e.amount
        name = e.category if e.category and e.category.strip() else UNCATEGORIZED
        key = name.lower()
        labels.setdefault(key, name)
        sums[key] = sums.get(key, Decimal(0)) + e.amount
        counts[key] = counts.get(key, 0) + 1

    categories = [
        CategoryTotal(
            name=labels[key],
            amount=sums[key],
            percent=percent_of(sums[key], total),
            count=counts[key],
        )
        for key in sorted(labels)
    ]
    return MonthlyReport(month, total, len(items), categories)
