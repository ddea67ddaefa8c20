# expense_tracker/utils.py
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

from expense_tracker.core.errors import ValidationError
from expense_tracker.core.models import YearMonth

_DATE_RX = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RX = re.compile(r"^\d{4}-\d{2}$")
_CENTS = Decimal("0.01")


def parse_amount(text):
    """
    Parse a non-negative decimal amount, keeping the precision as typed.
    """
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError("Invalid amount. Example: 149.99")
    if not value.is_finite():
        raise ValidationError("Invalid amount. Example: 149.99")
    if value < 0:
        raise ValidationError("Amount must be >= 0")
    return value


def parse_date(text):
    """
    Parse a YYYY-MM-DD date. Blank input returns None.
    """
    if text is None or not text.strip():
        return None
    text = text.strip()
    if not _DATE_RX.match(text):
        raise ValidationError("Invalid date, use yyyy-mm-dd")
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date, use yyyy-mm-dd")


def parse_year_month(text):
    text = (text or "").strip()
    if not _MONTH_RX.match(text):
        raise ValidationError("Invalid month, use yyyy-mm")
    year, month = map(int, text.split("-"))
    if year < 1 or not 1 <= month <= 12:
        raise ValidationError("Invalid month, use yyyy-mm")
    return YearMonth(year, month)


def parse_id(text):
    try:
        value = int((text or "").strip())
    except ValueError:
        raise ValidationError("Provide a numeric id")
    if value <= 0:
        raise ValidationError("Provide a numeric id")
    return value


def blank_to_none(text):
    """Trim user text; blank becomes None (an absent field)."""
    if text is None or not text.strip():
        return None
    return text.strip()


def empty_to_none(text):
    return text if text else None


def plain_amount(amount):
    """Amount in plain notation with its full precision, e.g. ``120.50``."""
    return format(amount, "f")


def money(amount):
    """Amount rounded half-up to cents, however many digits it has."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_date(when: date):
    return when.isoformat()
