# expense_tracker/query.py
from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from expense_tracker.core.errors import ValidationError
from expense_tracker.core.models import Expense, YearMonth
from expense_tracker.utils import parse_date, parse_year_month

_MONTH_USAGE = "Usage: list month yyyy-mm"
_RANGE_USAGE = "Usage: list range yyyy-mm-dd..yyyy-mm-dd"


@dataclass(frozen=True)
class Scope:
    """A time window for listing. Unset bounds mean no restriction."""
    name: str = "all"
    start: Optional[date] = None
    end: Optional[date] = None

    def matches(self, expense: Expense) -> bool:
        if self.start is not None and expense.date < self.start:
            return False
        if self.end is not None and expense.date > self.end:
            return False
        return True


ALL = Scope()


def parse_scope(text: str, today: date) -> Scope:
    """
    Parse ``all``, ``today``, ``month yyyy-mm`` or ``range a..b``.
    Anything else selects every record.
    """
    words = (text or "").strip().lower().split()
    if not words:
        return ALL
    head = words[0]
    if head == "today":
        return Scope("today", today, today)
    if head == "month":
        if len(words) < 2:
            raise ValidationError(_MONTH_USAGE)
        ym = _month_arg(words[1])
        last_day = monthrange(ym.year, ym.month)[1]
        return Scope("month", date(ym.year, ym.month, 1), date(ym.year, ym.month, last_day))
    if head == "range":
        bounds = " ".join(words[1:]).split("..")
        if len(bounds) != 2 or not all(b.strip() for b in bounds):
            raise ValidationError(_RANGE_USAGE)
        start, end = (_range_arg(b) for b in bounds)
        return Scope("range", start, end)
    return ALL


def _month_arg(text: str) -> YearMonth:
    try:
        return parse_year_month(text)
    except ValidationError:
        raise ValidationError(_MONTH_USAGE)


def _range_arg(text: str) -> date:
    try:
        return parse_date(text)
    except ValidationError:
        raise ValidationError(_RANGE_USAGE)


def filter_by_scope(expenses: Iterable[Expense], scope: Scope) -> List[Expense]:
    return [e for e in expenses if scope.matches(e)]


def filter_by_category(expenses: Iterable[Expense], text: Optional[str]) -> List[Expense]:
    if text is None or not text.strip():
        return list(expenses)
    needle = text.strip().lower()
    return [e for e in expenses if e.category is not None and needle in e.category.lower()]


def sort_expenses(expenses: Iterable[Expense], key: str = "date", reverse: bool = False) -> List[Expense]:
    """Sort by ``date`` (ties by id), ``amt`` or ``cat``; reverse afterwards."""
    key = (key or "date").lower()
    if key == "amt":
        ordered = sorted(expenses, key=lambda e: e.amount)
    elif key == "cat":
        ordered = sorted(expenses, key=lambda e: (e.category or "").lower())
    else:
        ordered = sorted(expenses, key=lambda e: (e.date, e.id))
    if reverse:
        ordered.reverse()
    return ordered


def list_expenses(
    expenses: Iterable[Expense],
    scope: Scope = ALL,
    category: Optional[str] = None,
    sort: str = "date",
    reverse: bool = False,
) -> List[Expense]:
    items = filter_by_scope(expenses, scope)
    items = filter_by_category(items, category)
    return sort_expenses(items, sort, reverse)


def search_expenses(expenses: Iterable[Expense], text: str) -> List[Expense]:
    needle = (text or "").strip().lower()
    if not needle:
        raise ValidationError("Usage: search <text>")
    hits = []
    for e in expenses:
        for value in (e.description, e.category, e.payment, e.note):
            if value is not None and needle in value.lower():
                hits.append(e)
                break
    return hits


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), Decimal(0))
