# expense_tracker/loaders/base.py
from abc import ABC, abstractmethod

class BaseLoader(ABC):
    @abstractmethod
    def load(self, file_path):
        """
        Return ExpenseDraft instances decoded from file_path.
        Raise DecodeError on the first malformed row; nothing is returned then.
        """
        pass
