# expense_tracker/commands.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Iterable

from expense_tracker.core.errors import ExpenseNotFound, ExpenseTrackerError, ValidationError
from expense_tracker.flags import parse_args
from expense_tracker.query import list_expenses, parse_scope, search_expenses, total_amount
from expense_tracker.render import render_report, render_table
from expense_tracker.report import monthly_report
from expense_tracker.store import ExpenseStore
from expense_tracker.transfer import export_expenses, import_expenses
from expense_tracker.utils import (
    blank_to_none,
    money,
    parse_amount,
    parse_date,
    parse_id,
    parse_year_month,
)

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "(no description)"
UNKNOWN_COMMAND = "Unknown command. Type 'help' for commands."

HELP = """\
Commands:
  add <amount> <description> [/date yyyy-mm-dd] [/cat category] [/pay method] [/note text]
  list [all | month yyyy-mm | today | range yyyy-mm-dd..yyyy-mm-dd] [/cat name] [/sort date|amt|cat] [/rev]
  edit <id> [/amt number] [/t new description] [/date yyyy-mm-dd] [/cat category] [/pay method] [/note text]
  del <id>
  search <text>
  report month <yyyy-mm>   totals & by-category breakdown
  export [filename]        default: {export_file} (.xlsx writes a workbook)
  import <filename.csv>
  save | exit

Examples:
  add 249.99 Headphones /cat electronics /pay upi /date 2025-08-27
  list month 2025-08 /cat food
  report month 2025-08"""


@dataclass(frozen=True)
class CommandResult:
    output: str = ""
    exit: bool = False


class CommandProcessor:
    """Runs one command line at a time against an ExpenseStore.

    Every argument is validated before the store is touched, so a command
    that raises leaves the store as it was. Mutating commands save on success.
    """

    def __init__(self, store: ExpenseStore, config: dict, today: Callable[[], date] = date.today):
        self.store = store
        self.config = config
        self._today = today
        self._handlers = {
            "help": self.help,
            "?": self.help,
            "add": self.add,
            "list": self.list,
            "ls": self.list,
            "edit": self.edit,
            "del": self.delete,
            "rm": self.delete,
            "search": self.search,
            "report": self.report,
            "export": self.export,
            "import": self.import_,
            "save": self.save,
            "exit": self.exit,
            "quit": self.exit,
        }

    def execute(self, line: str) -> CommandResult:
        parts = (line or "").split(None, 1)
        if not parts:
            return CommandResult()
        handler = self._handlers.get(parts[0].lower())
        if handler is None:
            raise ValidationError(UNKNOWN_COMMAND)
        return handler(parts[1].strip() if len(parts) > 1 else "")

    def run(self, lines: Iterable[str], echo: Callable[[str], None]) -> None:
        """Execute lines until ``exit`` or end of input, then save."""
        for line in lines:
            try:
                result = self.execute(line)
            except ExpenseTrackerError as exc:
                logger.debug("Command failed: %r", line, exc_info=True)
                echo(f"Error: {exc}")
                continue
            if result.output:
                echo(result.output)
            if result.exit:
                return
        self.store.save()
        echo("Saved. Bye!")

    # -- commands -----------------------------------------------------------

    def help(self, args: str) -> CommandResult:
        return CommandResult(HELP.format(export_file=self.config["export_file"]))

    def add(self, args: str) -> CommandResult:
        if not args:
            raise ValidationError("Usage: add <amount> <description> [flags]")
        head = args.split(None, 1)
        amount = parse_amount(head[0])
        parsed = parse_args(head[1] if len(head) > 1 else "")
        when = parse_date(parsed.get("/date"))
        expense = self.store.add(
            date=when,
            amount=amount,
            category=blank_to_none(parsed.get("/cat")),
            description=parsed.text or NO_DESCRIPTION,
            payment=blank_to_none(parsed.get("/pay")),
            note=blank_to_none(parsed.get("/note")),
        )
        self.store.save()
        return CommandResult(
            f"Added #{expense.id}: {expense.date.isoformat()}  {money(expense.amount)}  {expense.description}"
        )

    def list(self, args: str) -> CommandResult:
        parsed = parse_args(args)
        scope = parse_scope(parsed.text, self._today())
        items = list_expenses(
            self.store.all(),
            scope=scope,
            category=parsed.get("/cat"),
            sort=parsed.get("/sort") or "date",
            reverse=parsed.has("/rev"),
        )
        return CommandResult(f"{render_table(items)}\nTotal: {money(total_amount(items))}")

    def edit(self, args: str) -> CommandResult:
        head = args.split(None, 1)
        if not head:
            raise ValidationError("Usage: edit <id> [flags]")
        expense_id = parse_id(head[0])
        if expense_id not in self.store:
            raise ExpenseNotFound(expense_id)

        parsed = parse_args(head[1] if len(head) > 1 else "")
        changes = {}
        if parsed.has("/amt"):
            changes["amount"] = parse_amount(parsed.get("/amt"))
        if parsed.has("/t"):
            changes["description"] = blank_to_none(parsed.get("/t"))
        if parsed.has("/date"):
            when = parse_date(parsed.get("/date"))
            if when is None:
                raise ValidationError("Invalid date, use yyyy-mm-dd")
            changes["date"] = when
        for flag, name in (("/cat", "category"), ("/pay", "payment"), ("/note", "note")):
            if parsed.has(flag):
                changes[name] = blank_to_none(parsed.get(flag))

        if self.store.edit(expense_id, **changes) is None:
            raise ExpenseNotFound(expense_id)
        self.store.save()
        return CommandResult(f"Edited #{expense_id}.")

    def delete(self, args: str) -> CommandResult:
        expense_id = parse_id(args)
        if not self.store.delete(expense_id):
            raise ExpenseNotFound(expense_id)
        self.store.save()
        return CommandResult(f"Deleted #{expense_id}.")

    def search(self, args: str) -> CommandResult:
        hits = search_expenses(self.store.all(), args)
        return CommandResult(f"{render_table(hits)}\nTotal in results: {money(total_amount(hits))}")

    def report(self, args: str) -> CommandResult:
        words = args.split()
        if len(words) != 2 or words[0].lower() != "month":
            raise ValidationError("Usage: report month yyyy-mm")
        month = parse_year_month(words[1])
        return CommandResult(render_report(monthly_report(self.store.all(), month)))

    def export(self, args: str) -> CommandResult:
        path = args or self.config["export_file"]
        count = export_expenses(self.store, path, self.config)
        return CommandResult(f"Exported {count} lines to {path}")

    def import_(self, args: str) -> CommandResult:
        if not args:
            raise ValidationError("Usage: import <filename.csv>")
        added = import_expenses(self.store, args, self.config)
        self.store.save()
        return CommandResult(f"Imported {len(added)} expense(s) from {Path(args).name}")

    def save(self, args: str) -> CommandResult:
        self.store.save()
        return CommandResult("Saved.")

    def exit(self, args: str) -> CommandResult:
        self.store.save()
        return CommandResult("Saved. Bye!", exit=True)
