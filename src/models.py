from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Set


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)

    @property
    def sign(self) -> int:
        """
        Direction in which the transaction moves money.
        Deposits add to an account, withdrawals remove from it.
        """
        if self is TransactionType.DEPOSIT:
            return 1
        if self is TransactionType.WITHDRAWAL:
            return -1
        raise ValueError(f"{self.value} transactions do not move money")


class ProcessingResult(Enum):
    APPLIED = "applied"
    ACCOUNT_LOCKED = "account_locked"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    OVERFLOW = "overflow"
    UNKNOWN_TRANSACTION = "unknown_transaction"
    NOT_DISPUTED = "not_disputed"

    @property
    def applied(self) -> bool:
        return self is ProcessingResult.APPLIED


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    tx_id: int
    amount: Optional[Decimal] = None

    def is_well_formed(self) -> bool:
        """Only deposits and withdrawals carry an amount, and they always do."""
        return self.transaction_type.carries_amount == (self.amount is not None)

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.tx_id}, amount={self.amount})"


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@dataclass
class Account:
    """
    Ledger state for one client.
    Keeps the deposits and withdrawals it accepted so they can be disputed later.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    locked: bool = False
    history: Dict[int, Transaction] = field(default_factory=dict)
    disputed: Set[int] = field(default_factory=set)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )


class ProcessingStats:
    """Counters for tracking processing outcomes."""

    def __init__(self):
        self.applied = 0
        self.rejected: Counter = Counter()

    def record(self, result: ProcessingResult) -> None:
        if result.applied:
            self.applied += 1
        else:
            self.rejected[result] += 1

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def summary(self) -> str:
        parts = [f"Applied: {self.applied}", f"Rejected: {self.total_rejected}"]
        for result, count in sorted(self.rejected.items(), key=lambda item: item[0].value):
            parts.append(f"{result.value}={count}")
        return ", ".join(parts)
