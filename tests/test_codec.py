from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.codec import (
    decode_durable,
    decode_exchange_line,
    encode_durable,
    encode_exchange_line,
    escape_field,
    is_skippable,
    unescape_field,
)
from expense_tracker.core.errors import DecodeError
from expense_tracker.core.models import Expense

AWKWARD = Expense(
    id=7,
    date=date(2025, 8, 27),
    amount=Decimal('1249.990'),
    category='a\tb',
    description='Line one\nline "two", with comma',
    payment='back\\slash\r',
    note=' unicode separator\x0bvertical tab',
)


def test_durable_round_trip_keeps_every_field():
    line = encode_durable(AWKWARD)
    assert '\n' not in line and '\r' not in line
    assert line.count('\t') == 6
    assert decode_durable(line) == AWKWARD


def test_durable_absent_fields_encode_empty_and_decode_absent():
    e = Expense(id=1, date=date(2025, 1, 2), amount=Decimal('5'))
    line = encode_durable(e)
    assert line == '1\t2025-01-02\t5\t\t\t\t'
    assert decode_durable(line) == e


def test_durable_amount_written_without_exponent():
    e = Expense(id=3, date=date(2025, 1, 2), amount=Decimal('1E+3'))
    assert encode_durable(e).split('\t')[2] == '1000'


def test_durable_short_line_is_padded():
    e = decode_durable('4\t2025-03-01\t9.50')
    assert e.id == 4
    assert e.amount == Decimal('9.50')
    assert e.category is None and e.note is None


@pytest.mark.parametrize('line, reason', [
    ('x\t2025-03-01\t1', 'invalid id'),
    ('0\t2025-03-01\t1', 'invalid id'),
    ('1\t2025-13-01\t1', 'invalid date'),
    ('1\t2025-03-01\tabc', 'invalid amount'),
    ('1\t2025-03-01\t-2', 'invalid amount'),
    ('1\t2025-03-01\t1\ta\tb\tc\td\te', 'expected 7 fields'),
])
def test_durable_decode_errors_name_the_line(line, reason):
    with pytest.raises(DecodeError) as info:
        decode_durable(line, 'expenses.tsv', 12)
    assert info.value.line_no == 12
    assert reason in str(info.value)
    assert 'expenses.tsv, line 12' in str(info.value)


def test_unescape_handles_unknown_and_trailing_backslash():
    assert unescape_field('a\\qb') == 'aqb'
    assert unescape_field('abc\\') == 'abc'
    assert unescape_field('') is None
    assert escape_field(None) == ''


def test_comment_and_blank_lines_are_skippable():
    assert is_skippable('# Expense TSV v1')
    assert is_skippable('   ')
    assert not is_skippable('1\t2025-01-01\t1')


def test_exchange_round_trip_with_quotes_and_newlines():
    line = encode_exchange_line(AWKWARD)
    draft = decode_exchange_line(line)
    assert draft.fields() == {
        'date': AWKWARD.date,
        'amount': AWKWARD.amount,
        'category': AWKWARD.category,
        'description': AWKWARD.description,
        'payment': AWKWARD.payment,
        'note': AWKWARD.note,
    }
    assert draft.source_id == 7


def test_exchange_quotes_only_when_needed():
    e = Expense(id=2, date=date(2025, 8, 1), amount=Decimal('120.50'),
                category='food', description='Milk, eggs', note='say "hi"')
    assert encode_exchange_line(e) == '2,2025-08-01,120.50,food,"Milk, eggs",,"say ""hi"""'


def test_exchange_ignores_unusable_source_id():
    draft = decode_exchange_line(',2025-08-01,3')
    assert draft.source_id is None
    assert draft.amount == Decimal('3')
    assert draft.description is None


def test_exchange_rejects_bad_amount():
    with pytest.raises(DecodeError) as info:
        decode_exchange_line('1,2025-08-01,lots', 'in.csv', 3)
    assert 'in.csv, line 3' in str(info.value)
