# expense_tracker/outputs/csv_output.py

from pathlib import Path

from expense_tracker.codec import EXCHANGE_HEADER, encode_exchange_line
from expense_tracker.outputs.base import BaseOutput

LINE_END = '\r\n'


class CSVOutput(BaseOutput):
    """
    Writes expenses to a CSV exchange file in store order, one line per
    expense after the header line.
    """
    def __init__(self, config):
        self.config = config

    def write(self, expenses, path):
        out_path = Path(path)
        if out_path.parent != Path('.'):
            out_path.parent.mkdir(parents=True, exist_ok=True)

        count = 1
        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            f.write(EXCHANGE_HEADER + LINE_END)
            for e in expenses:
                f.write(encode_exchange_line(e) + LINE_END)
                count += 1
        return count
