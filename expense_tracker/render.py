# expense_tracker/render.py
from expense_tracker.utils import money

_COLUMNS = [
    # header, width, align, truncate
    ("ID", 4, "<", False),
    ("Date", 10, "<", False),
    ("Amount", 12, ">", False),
    ("Category", 16, "<", True),
    ("Description", 32, "<", True),
    ("Payment", 10, "<", True),
    ("Note", 24, "<", True),
]
NO_EXPENSES = "(no expenses)"


def truncate(text, width):
    if text is None:
        return ""
    return text if len(text) <= width else text[:max(0, width - 1)] + "…"


def _format_row(values):
    cells = []
    for value, (_, width, align, cut) in zip(values, _COLUMNS):
        value = truncate(value, width) if cut else value
        cells.append(f"{value:{align}{width}}")
    return " ".join(cells)


def render_table(expenses):
    """Fixed-width table of expenses, one line per row."""
    if not expenses:
        return NO_EXPENSES
    header = _format_row([c[0] for c in _COLUMNS])
    lines = [header, "-" * len(header)]
    for e in expenses:
        lines.append(_format_row([
            str(e.id),
            e.date.isoformat(),
            money(e.amount),
            e.category,
            e.description,
            e.payment,
            e.note,
        ]))
    return "\n".join(lines)


def render_report(report):
    if report.empty:
        return f"(no expenses for {report.month})"
    lines = [
        f"Report {report.month}",
        "-" * 36,
        f"Total: {money(report.total)}",
        "By Category:",
    ]
    for cat in report.categories:
        lines.append(f"  {cat.name:<18} {money(cat.amount):>12}  ({cat.percent}%)")
    return "\n".join(lines)
