# expense_tracker/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

Writes the exchange columns to a single ``Expenses`` worksheet. Amounts are
stored as numbers with a money format so the workbook can be summed and
pivoted directly; the header row is frozen and set up as an Excel table.
"""

from __future__ import annotations

from pathlib import Path

import xlsxwriter
from xlsxwriter.exceptions import FileCreateError

from expense_tracker.codec import FIELDS
from expense_tracker.outputs.base import BaseOutput


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook of all expenses."""

    SHEET = "Expenses"
    AMOUNT_COL = FIELDS.index("amount")

    def __init__(self, config: dict):
        self.config = config

    def write(self, expenses, path):
        out_path = Path(path)
        if out_path.parent != Path("."):
            out_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = xlsxwriter.Workbook(str(out_path), {"strings_to_urls": False})
        rows = self._build_rows(expenses)
        self._fill_sheet(workbook, rows)
        try:
            workbook.close()
        except FileCreateError as exc:
            raise OSError(f"could not create workbook: {exc}") from exc
        return len(rows) + 1

    def _fill_sheet(self, workbook, rows):
        amount_fmt = workbook.add_format({"num_format": "#,##0.00"})
        ws = workbook.add_worksheet(self.SHEET)
        ws.freeze_panes(1, 0)
        ws.write_row(0, 0, FIELDS)

        for idx, row in enumerate(rows, start=1):
            for col, value in enumerate(row):
                if col == self.AMOUNT_COL:
                    ws.write_number(idx, col, value, amount_fmt)
                elif isinstance(value, int):
                    ws.write_number(idx, col, value)
                else:
                    # write_string keeps text such as "=1+1" from becoming a formula
                    ws.write_string(idx, col, value)

        ws.set_column(self.AMOUNT_COL, self.AMOUNT_COL, 12, amount_fmt)
        if rows:
            ws.add_table(0, 0, len(rows), len(FIELDS) - 1, {
                "columns": [{"header": h} for h in FIELDS]
            })

    def _build_rows(self, expenses):
        return [
            [
                e.id,
                e.date.isoformat(),
                float(e.amount),
                e.category or "",
                e.description or "",
                e.payment or "",
                e.note or "",
            ]
            for e in expenses
        ]
