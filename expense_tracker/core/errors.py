# expense_tracker/core/errors.py


class ExpenseTrackerError(Exception):
    """Base class for every error a command can report to the user."""


class ValidationError(ExpenseTrackerError, ValueError):
    """Bad user input: malformed amount, date, id or missing argument."""


class ExpenseNotFound(ExpenseTrackerError, LookupError):
    def __init__(self, expense_id):
        super().__init__(f"No expense with id {expense_id}")
        self.expense_id = expense_id


class StorageError(ExpenseTrackerError):
    """A durable, sidecar or exchange file could not be read or written."""

    def __init__(self, message, path):
        super().__init__(f"{message}: {path}")
        self.path = path


class DecodeError(ExpenseTrackerError, ValueError):
    """A line of the durable or exchange format could not be decoded."""

    def __init__(self, source, line_no, reason):
        super().__init__(f"{source}, line {line_no}: {reason}")
        self.source = source
        self.line_no = line_no
        self.reason = reason
