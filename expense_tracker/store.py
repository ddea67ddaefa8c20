# expense_tracker/store.py
from __future__ import annotations

import logging
import os
import tempfile
import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, List, Optional

from expense_tracker.codec import (
    DURABLE_HEADER,
    decode_durable,
    encode_durable,
    is_skippable,
)
from expense_tracker.core.errors import DecodeError, StorageError
from expense_tracker.core.models import TEXT_FIELDS, Expense

logger = logging.getLogger(__name__)

DEFAULT_SIDECAR_SUFFIX = ".meta"
_EDITABLE = frozenset(("date", "amount") + TEXT_FIELDS)


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` to a temp file next to ``path``, then replace ``path``.

    Readers see either the old file or the complete new one, never a
    partially written file.
    """
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=path.name + "-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(temp_name, path)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise


class ExpenseStore:
    """The authoritative set of expenses, keyed by id, in insertion order.

    Every operation runs under one lock, so load and save are exclusive with
    all other access. Records are immutable; ``edit`` swaps in a new value.
    """

    def __init__(
        self,
        path,
        sidecar_suffix: str = DEFAULT_SIDECAR_SUFFIX,
        today: Callable[[], date] = date.today,
    ):
        self.path = Path(path)
        self.sidecar_path = Path(str(self.path) + sidecar_suffix)
        self._today = today
        self._lock = threading.RLock()
        self._expenses: Dict[int, Expense] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)

    def __contains__(self, expense_id) -> bool:
        with self._lock:
            return expense_id in self._expenses

    def add(
        self,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        payment: Optional[str] = None,
        note: Optional[str] = None,
    ) -> Expense:
        with self._lock:
            expense = Expense(
                id=self._next_id,
                date=self._today() if date is None else date,
                amount=Decimal(0) if amount is None else amount,
                category=category,
                description=description,
                payment=payment,
                note=note,
            )
            self._expenses[expense.id] = expense
            self._next_id += 1
            logger.debug("Added expense #%d", expense.id)
            return expense

    def get(self, expense_id: int) -> Optional[Expense]:
        with self._lock:
            return self._expenses.get(expense_id)

    def edit(self, expense_id: int, **changes) -> Optional[Expense]:
        """Apply only the given fields; ``None`` clears an optional text field.

        Returns the updated expense, or None when the id is unknown.
        """
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise TypeError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
        with self._lock:
            current = self._expenses.get(expense_id)
            if current is None:
                return None
            updated = replace(current, **changes)
            self._expenses[expense_id] = updated
            logger.debug("Edited expense #%d (%s)", expense_id, ", ".join(sorted(changes)))
            return updated

    def delete(self, expense_id: int) -> bool:
        with self._lock:
            removed = self._expenses.pop(expense_id, None)
            if removed is not None:
                logger.debug("Deleted expense #%d", expense_id)
            return removed is not None

    def all(self) -> List[Expense]:
        with self._lock:
            return list(self._expenses.values())

    def save(self) -> None:
        with self._lock:
            lines = list(DURABLE_HEADER)
            lines.extend(encode_durable(e) for e in self._expenses.values())
            try:
                atomic_write_text(self.path, "\n".join(lines) + "\n")
            except OSError as exc:
                raise StorageError(f"Failed to save ({exc.strerror or exc})", self.path) from exc
            try:
                atomic_write_text(self.sidecar_path, f"{self._next_id}\n")
            except OSError as exc:
                raise StorageError(
                    f"Failed to save next id ({exc.strerror or exc})", self.sidecar_path
                ) from exc
            logger.info("Saved %d expense(s) to %s", len(self._expenses), self.path)

    def load(self) -> None:
        with self._lock:
            expenses = self._read_records()
            next_id = max([1] + [e.id + 1 for e in expenses.values()])
            stored = self._read_sidecar()
            if stored is not None:
                next_id = max(next_id, stored)
            self._expenses = expenses
            self._next_id = next_id
            logger.info(
                "Loaded %d expense(s) from %s (next id %d)", len(expenses), self.path, next_id
            )

    def _read_records(self) -> Dict[int, Expense]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No storage file at %s; starting empty", self.path)
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Failed to load ({exc})", self.path) from exc

        expenses: Dict[int, Expense] = {}
        # Split on LF only: escaped fields never contain it, but may contain
        # other characters str.splitlines() would treat as line breaks.
        for line_no, line in enumerate(text.split("\n"), start=1):
            line = line.rstrip("\r")
            if is_skippable(line):
                continue
            expense = decode_durable(line, str(self.path), line_no)
            if expense.id in expenses:
                raise DecodeError(str(self.path), line_no, f"duplicate id {expense.id}")
            expenses[expense.id] = expense
        return expenses

    def _read_sidecar(self) -> Optional[int]:
        try:
            return int(self.sidecar_path.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.warning("Ignoring unreadable next-id file %s: %s", self.sidecar_path, exc)
            return None
