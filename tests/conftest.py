from datetime import date

import pytest

from expense_tracker.commands import CommandProcessor
from expense_tracker.config import load_config
from expense_tracker.store import ExpenseStore

TODAY = date(2025, 8, 30)


@pytest.fixture
def config(tmp_path):
    return load_config(tmp_path / 'missing.yaml', environ={})


@pytest.fixture
def store(tmp_path):
    return ExpenseStore(tmp_path / 'expenses.tsv', today=lambda: TODAY)


@pytest.fixture
def processor(store, config):
    return CommandProcessor(store, config, today=lambda: TODAY)


@pytest.fixture
def today():
    return TODAY
