# expense_tracker/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def write(self, expenses, path):
        """Write every expense to path; return the number of rows written, header included."""
        pass
