# expense_tracker/flags.py
"""Parsing of ``/flag value`` command arguments.

``12.50 Lunch with Sam /cat food /pay card`` splits into the leading text
``12.50 Lunch with Sam`` and the flags ``{"/cat": "food", "/pay": "card"}``.
A flag's value is every word up to the next flag; a flag with no words
after it maps to the empty string.
"""
from __future__ import annotations

from typing import Dict, NamedTuple

FLAG_MARKER = "/"


class ParsedArgs(NamedTuple):
    text: str
    flags: Dict[str, str]

    def has(self, name: str) -> bool:
        return name in self.flags

    def get(self, name: str, default=None):
        return self.flags.get(name, default)


def is_flag(token: str) -> bool:
    return len(token) > 1 and token.startswith(FLAG_MARKER)


def parse_args(line: str) -> ParsedArgs:
    leading = []
    flags: Dict[str, list] = {}
    current = None
    for token in (line or "").split():
        if is_flag(token):
            current = token.lower()
            flags[current] = []
        elif current is None:
            leading.append(token)
        else:
            flags[current].append(token)
    return ParsedArgs(" ".join(leading), {k: " ".join(v) for k, v in flags.items()})
