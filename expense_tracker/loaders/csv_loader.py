# expense_tracker/loaders/csv_loader.py
import csv

from expense_tracker.codec import decode_exchange_row
from expense_tracker.loaders.base import BaseLoader


class CSVLoader(BaseLoader):
    def load(self, file_path):
        drafts = []
        with open(file_path, newline='', encoding='utf-8') as f:
            reader = csv.reader(f)
            # The first row is the header; its content is not checked.
            next(reader, None)
            for row in reader:
                if not row or not any(cell.strip() for cell in row):
                    continue
                drafts.append(decode_exchange_row(row, str(file_path), reader.line_num))
        return drafts
