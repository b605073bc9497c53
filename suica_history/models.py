from dataclasses import dataclass
from enum import Enum

from .utils import format_date


class TransactionCategory(Enum):
    PURCHASE = "purchase"
    TRANSIT = "transit"
    TOP_UP = "top_up"
    UNKNOWN = "unknown"


class ReadStop(Enum):
    """Why the read loop stopped collecting blocks."""

    READ_LIMIT = "read_limit"
    END_OF_LOG = "end_of_log"
    TRANSPORT_FAULT = "transport_fault"


@dataclass(frozen=True)
class Transaction:
    date: tuple[int, int]
    category: TransactionCategory
    amount: int
    balance_after: int

    @property
    def month(self) -> int:
        return self.date[0]

    @property
    def day(self) -> int:
        return self.date[1]

    def __str__(self) -> str:
        return (
            f"{format_date(*self.date)} {self.category.value} "
            f"{self.amount:+d} -> {self.balance_after}"
        )


@dataclass(frozen=True)
class CardSnapshot:
    """Balance and newest-first history decoded from one read session."""

    balance: int
    history: tuple[Transaction, ...]
    read_stop: ReadStop = ReadStop.END_OF_LOG

    def __len__(self) -> int:
        return len(self.history)

    @property
    def is_partial(self) -> bool:
        return self.read_stop is ReadStop.TRANSPORT_FAULT
