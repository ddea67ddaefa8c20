# expense_tracker/core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import NamedTuple, Optional

TEXT_FIELDS = ("category", "description", "payment", "note")


@dataclass(frozen=True)
class Expense:
    id: int
    date: date
    amount: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    payment: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValueError(f"Expense id must be a positive integer, got {self.id!r}")
        check_fields(self.date, self.amount)


@dataclass(frozen=True)
class ExpenseDraft:
    """Fields of an expense that has not been given an id yet.

    ``source_id`` keeps whatever id the row carried in an exchange file; it is
    informational only and never reused by the store.
    """
    date: date
    amount: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    payment: Optional[str] = None
    note: Optional[str] = None
    source_id: Optional[int] = None

    def __post_init__(self) -> None:
        check_fields(self.date, self.amount)

    def fields(self) -> dict:
        return {
            "date": self.date,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "payment": self.payment,
            "note": self.note,
        }


def check_fields(when, amount) -> None:
    if not isinstance(when, date):
        raise ValueError(f"Expense date must be a date, got {when!r}")
    if not isinstance(amount, Decimal) or not amount.is_finite():
        raise ValueError(f"Expense amount must be a finite Decimal, got {amount!r}")
    if amount < 0:
        raise ValueError("Amount must be >= 0")


class YearMonth(NamedTuple):
    year: int
    month: int

    @classmethod
    def of(cls, when: date) -> "YearMonth":
        return cls(when.year, when.month)

    def includes(self, when: date) -> bool:
        return (when.year, when.month) == (self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
