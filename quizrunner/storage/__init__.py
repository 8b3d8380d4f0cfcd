from .schema import DATE_FORMAT, HistoryEntry, accuracy_percent
from .store import HistoryLedger, StorageError

__all__ = [
    "DATE_FORMAT",
    "HistoryEntry",
    "accuracy_percent",
    "HistoryLedger",
    "StorageError",
]
