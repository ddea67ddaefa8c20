from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.core.errors import ValidationError
from expense_tracker.core.models import Expense
from expense_tracker.query import (
    ALL,
    filter_by_category,
    list_expenses,
    parse_scope,
    search_expenses,
    sort_expenses,
    total_amount,
)

TODAY = date(2025, 8, 30)


def make(id, day, amount='1', category=None, **kw):
    return Expense(id=id, date=day, amount=Decimal(amount), category=category, **kw)


RECORDS = [
    make(1, date(2025, 8, 27), '249.99', 'electronics', description='Headphones', payment='upi'),
    make(2, TODAY, '120.50', 'food', description='Groceries'),
    make(3, date(2025, 7, 31), '15', 'Fast Food', note='late lunch'),
    make(4, date(2025, 8, 27), '3', None, description='Parking'),
]


def test_parse_scope_variants():
    assert parse_scope('', TODAY) == ALL
    assert parse_scope('all', TODAY) == ALL
    assert parse_scope('whatever', TODAY) == ALL
    today = parse_scope('TODAY', TODAY)
    assert (today.start, today.end) == (TODAY, TODAY)
    feb = parse_scope('month 2024-02', TODAY)
    assert (feb.start, feb.end) == (date(2024, 2, 1), date(2024, 2, 29))
    rng = parse_scope('range 2025-08-01 .. 2025-08-27', TODAY)
    assert (rng.start, rng.end) == (date(2025, 8, 1), date(2025, 8, 27))


@pytest.mark.parametrize('text', [
    'month', 'month 2025-8', 'month 2025-13', 'range', 'range 2025-08-01',
    'range 2025-08-01..', 'range 2025-08-01..2025-02-30', 'month 0000-01',
])
def test_parse_scope_rejects_bad_arguments(text):
    with pytest.raises(ValidationError, match='Usage: list'):
        parse_scope(text, TODAY)


def test_month_scope_and_category_filter():
    items = list_expenses(RECORDS, parse_scope('month 2025-08', TODAY), category='FOOD')
    assert [e.id for e in items] == [2]
    assert total_amount(items) == Decimal('120.50')


def test_category_filter_is_substring_and_skips_uncategorized():
    assert [e.id for e in filter_by_category(RECORDS, 'foo')] == [2, 3]
    assert len(filter_by_category(RECORDS, '   ')) == len(RECORDS)


def test_range_with_start_after_end_matches_nothing():
    scope = parse_scope('range 2025-09-01..2025-08-01', TODAY)
    assert list_expenses(RECORDS, scope) == []


def test_range_is_inclusive():
    scope = parse_scope('range 2025-07-31..2025-08-27', TODAY)
    assert [e.id for e in list_expenses(RECORDS, scope)] == [3, 1, 4]


def test_default_sort_is_date_then_id():
    assert [e.id for e in sort_expenses(RECORDS)] == [3, 1, 4, 2]


def test_reverse_is_exact_reverse_of_sorted_order():
    forward = sort_expenses(RECORDS, 'date')
    backward = sort_expenses(RECORDS, 'date', reverse=True)
    assert backward == list(reversed(forward))


def test_sort_by_amount_and_category():
    assert [e.id for e in sort_expenses(RECORDS, 'amt')] == [4, 3, 2, 1]
    # absent category sorts first, comparison ignores case
    assert [e.id for e in sort_expenses(RECORDS, 'cat')] == [4, 1, 3, 2]


def test_unknown_sort_key_falls_back_to_date():
    assert sort_expenses(RECORDS, 'size') == sort_expenses(RECORDS, 'date')


def test_search_looks_at_text_fields_only():
    assert [e.id for e in search_expenses(RECORDS, 'LUNCH')] == [3]
    assert [e.id for e in search_expenses(RECORDS, 'upi')] == [1]
    assert [e.id for e in search_expenses(RECORDS, 'food')] == [2, 3]
    assert search_expenses(RECORDS, '2025') == []


def test_search_requires_text():
    with pytest.raises(ValidationError):
        search_expenses(RECORDS, '  ')
