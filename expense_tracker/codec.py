# expense_tracker/codec.py
"""Line encodings for expense records.

Two independent formats are supported:

* the durable format, one tab-delimited line per record, used by the store;
* the exchange format, one CSV row per record, used by export and import.
"""
from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence

from expense_tracker.core.errors import DecodeError
from expense_tracker.core.models import Expense, ExpenseDraft
from expense_tracker.utils import empty_to_none, format_date, plain_amount

FIELDS = ["id", "date", "amount", "category", "description", "payment", "note"]

DURABLE_HEADER = [
    "# Expense TSV v1",
    "# " + "\t".join(FIELDS),
]
EXCHANGE_HEADER = ",".join(FIELDS)
COMMENT_MARKER = "#"

_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r"}


def escape_field(value: Optional[str]) -> str:
    if not value:
        return ""
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def unescape_field(text: str) -> Optional[str]:
    out = []
    pending = False
    for ch in text:
        if pending:
            out.append(_UNESCAPES.get(ch, ch))
            pending = False
        elif ch == "\\":
            pending = True
        else:
            out.append(ch)
    return empty_to_none("".join(out))


def is_skippable(line: str) -> bool:
    """Comment and blank lines carry no record."""
    return not line.strip() or line.startswith(COMMENT_MARKER)


def encode_durable(expense: Expense) -> str:
    return "\t".join([
        str(expense.id),
        format_date(expense.date),
        plain_amount(expense.amount),
        escape_field(expense.category),
        escape_field(expense.description),
        escape_field(expense.payment),
        escape_field(expense.note),
    ])


def decode_durable(line: str, source: str = "<durable>", line_no: int = 1) -> Expense:
    parts = _pad(line.split("\t"), source, line_no)
    try:
        return Expense(
            id=_decode_id(parts[0], source, line_no),
            date=_decode_date(parts[1], source, line_no),
            amount=_decode_amount(parts[2], source, line_no),
            category=unescape_field(parts[3]),
            description=unescape_field(parts[4]),
            payment=unescape_field(parts[5]),
            note=unescape_field(parts[6]),
        )
    except DecodeError:
        raise
    except ValueError as exc:
        raise DecodeError(source, line_no, str(exc)) from exc


def encode_exchange_row(expense: Expense) -> List[str]:
    return [
        str(expense.id),
        format_date(expense.date),
        plain_amount(expense.amount),
        expense.category or "",
        expense.description or "",
        expense.payment or "",
        expense.note or "",
    ]


def encode_exchange_line(expense: Expense) -> str:
    """One CSV row, quoted where a field needs it, without line terminator."""
    buf = io.StringIO()
    csv.writer(buf).writerow(encode_exchange_row(expense))
    return buf.getvalue()[:-2]


def decode_exchange_row(row: Sequence[str], source: str = "<exchange>", line_no: int = 1) -> ExpenseDraft:
    parts = _pad(list(row), source, line_no)
    try:
        return ExpenseDraft(
            date=_decode_date(parts[1], source, line_no),
            amount=_decode_amount(parts[2], source, line_no),
            category=empty_to_none(parts[3]),
            description=empty_to_none(parts[4]),
            payment=empty_to_none(parts[5]),
            note=empty_to_none(parts[6]),
            source_id=_source_id(parts[0]),
        )
    except DecodeError:
        raise
    except ValueError as exc:
        raise DecodeError(source, line_no, str(exc)) from exc


def decode_exchange_line(line: str, source: str = "<exchange>", line_no: int = 1) -> ExpenseDraft:
    rows = list(csv.reader(io.StringIO(line)))
    if len(rows) != 1:
        raise DecodeError(source, line_no, "expected exactly one CSV row")
    return decode_exchange_row(rows[0], source, line_no)


def _pad(parts: List[str], source: str, line_no: int) -> List[str]:
    if len(parts) > len(FIELDS):
        raise DecodeError(
            source, line_no, f"expected {len(FIELDS)} fields, found {len(parts)}"
        )
    return parts + [""] * (len(FIELDS) - len(parts))


def _decode_id(text: str, source: str, line_no: int) -> int:
    value = _source_id(text)
    if value is None:
        raise DecodeError(source, line_no, f"invalid id {text!r}")
    return value


def _source_id(text: str) -> Optional[int]:
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def _decode_date(text: str, source: str, line_no: int) -> date:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        raise DecodeError(source, line_no, f"invalid date {text!r}")


def _decode_amount(text: str, source: str, line_no: int) -> Decimal:
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        raise DecodeError(source, line_no, f"invalid amount {text!r}")
    if not value.is_finite() or value < 0:
        raise DecodeError(source, line_no, f"invalid amount {text!r}")
    return value
