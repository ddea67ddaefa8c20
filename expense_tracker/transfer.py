# expense_tracker/transfer.py
"""Bulk export and import of expenses through the exchange format."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from expense_tracker.core.errors import StorageError
from expense_tracker.core.models import Expense
from expense_tracker.loaders import get_loader
from expense_tracker.outputs import get_output
from expense_tracker.store import ExpenseStore

logger = logging.getLogger(__name__)


def output_format_for(path) -> str:
    return "excel" if str(path).lower().endswith(".xlsx") else "csv"


def export_expenses(store: ExpenseStore, path, config: dict) -> int:
    """Write every expense to ``path``.

    Returns the number of rows written, the header row included.
    """
    fmt = output_format_for(path)
    outputter = get_output(fmt, config)
    try:
        count = outputter.write(store.all(), path)
    except OSError as exc:
        raise StorageError(f"Export failed ({exc.strerror or exc})", path) from exc
    logger.info("Exported %d row(s) to %s as %s", count, path, fmt)
    return count


def import_expenses(store: ExpenseStore, path, config: dict) -> List[Expense]:
    """Add every row of an exchange file to ``store`` under fresh ids.

    The whole file is decoded before the first add, so a malformed row leaves
    the store untouched. Saving is left to the caller.
    """
    source = Path(path)
    if not source.is_file():
        raise StorageError("File not found", source)
    loader = get_loader("csv", config)
    try:
        drafts = loader.load(source)
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"Import failed ({exc})", source) from exc

    added = [store.add(**draft.fields()) for draft in drafts]
    logger.info("Imported %d expense(s) from %s", len(added), source)
    return added
