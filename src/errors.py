from typing import Optional

from models import Transaction


class LedgerError(Exception):
    """Base class for errors that abort a whole run."""


class MalformedRecordError(LedgerError):
    """An input record could not be decoded into a Transaction."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidTransactionError(LedgerError):
    """A decoded transaction carries an amount it must not have, or lacks one it needs."""

    def __init__(self, transaction: Transaction):
        self.transaction = transaction
        if transaction.transaction_type.carries_amount:
            problem = "requires an amount"
        else:
            problem = "must not carry an amount"
        super().__init__(f"{transaction.transaction_type.value} tx {transaction.tx_id} {problem}")
