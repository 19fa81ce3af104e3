import logging
from decimal import Decimal
from typing import Dict, List, Optional

from models import Account, AccountSnapshot, ProcessingResult, Transaction, TransactionType
from numeric import checked_add, checked_mul, checked_sub

logger = logging.getLogger(__name__)


class Ledger:
    """
    Per-client accounts and the state machine that mutates them.

    apply() never raises for business-rule failures. It leaves the account
    untouched and reports why through the returned ProcessingResult.
    Callers must only pass well-formed transactions.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._accounts

    def get_account(self, client_id: int) -> Optional[Account]:
        """Look up an account without creating it."""
        return self._accounts.get(client_id)

    def get_or_create_account(self, client_id: int) -> Account:
        if client_id not in self._accounts:
            self._accounts[client_id] = Account(client_id=client_id)
        return self._accounts[client_id]

    def export(self) -> List[AccountSnapshot]:
        """Snapshot every account seen so far. Order is unspecified."""
        return [account.snapshot() for account in self._accounts.values()]

    def apply(self, transaction: Transaction) -> ProcessingResult:
        account = self.get_or_create_account(transaction.client_id)

        # a frozen account ignores everything
        if account.locked:
            result = ProcessingResult.ACCOUNT_LOCKED
        else:
            match transaction.transaction_type:
                case TransactionType.DEPOSIT | TransactionType.WITHDRAWAL:
                    result = self._handle_transfer(account, transaction)
                case TransactionType.DISPUTE:
                    result = self._handle_dispute(account, transaction)
                case TransactionType.RESOLVE:
                    result = self._handle_resolve(account, transaction)
                case TransactionType.CHARGEBACK:
                    result = self._handle_chargeback(account, transaction)

        if not result.applied:
            logger.debug(f"Skipped {transaction}: {result.value}")
        return result

    def _handle_transfer(self, account: Account, transaction: Transaction) -> ProcessingResult:
        signed_amount = checked_mul(transaction.amount, transaction.transaction_type.sign)
        if signed_amount is None:
            return ProcessingResult.OVERFLOW

        new_total = checked_add(account.total, signed_amount)
        new_available = checked_add(account.available, signed_amount)
        if new_total is None or new_available is None:
            return ProcessingResult.OVERFLOW

        # deposits may leave a negative balance negative; withdrawals may not overdraw
        if transaction.transaction_type == TransactionType.WITHDRAWAL and new_available < 0:
            return ProcessingResult.INSUFFICIENT_FUNDS

        account.total = new_total
        account.available = new_available
        # tx ids are unique by contract of the input, a repeat overwrites
        account.history[transaction.tx_id] = transaction
        return ProcessingResult.APPLIED

    def _handle_dispute(self, account: Account, transaction: Transaction) -> ProcessingResult:
        original = account.history.get(transaction.tx_id)
        if original is None:
            return ProcessingResult.UNKNOWN_TRANSACTION

        delta = self._disputed_delta(original)
        if delta is None:
            return ProcessingResult.OVERFLOW

        # no sign check: disputing spent funds drives available negative
        new_available = checked_sub(account.available, delta)
        new_held = checked_add(account.held, delta)
        if new_available is None or new_held is None:
            return ProcessingResult.OVERFLOW

        account.available = new_available
        account.held = new_held
        account.disputed.add(transaction.tx_id)
        return ProcessingResult.APPLIED

    def _handle_resolve(self, account: Account, transaction: Transaction) -> ProcessingResult:
        original = account.history.get(transaction.tx_id)
        if original is None:
            return ProcessingResult.UNKNOWN_TRANSACTION

        if transaction.tx_id not in account.disputed:
            return ProcessingResult.NOT_DISPUTED

        delta = self._disputed_delta(original)
        if delta is None:
            return ProcessingResult.OVERFLOW

        new_held = checked_sub(account.held, delta)
        new_available = checked_add(account.available, delta)
        if new_held is None or new_available is None:
            return ProcessingResult.OVERFLOW

        account.held = new_held
        account.available = new_available
        account.disputed.discard(transaction.tx_id)
        return ProcessingResult.APPLIED

    def _handle_chargeback(self, account: Account, transaction: Transaction) -> ProcessingResult:
        original = account.history.get(transaction.tx_id)
        if original is None:
            return ProcessingResult.UNKNOWN_TRANSACTION

        if transaction.tx_id not in account.disputed:
            return ProcessingResult.NOT_DISPUTED

        delta = self._disputed_delta(original)
        if delta is None:
            return ProcessingResult.OVERFLOW

        new_held = checked_sub(account.held, delta)
        new_total = checked_sub(account.total, delta)
        if new_held is None or new_total is None:
            return ProcessingResult.OVERFLOW

        # available was already reduced when the dispute opened
        account.held = new_held
        account.total = new_total
        account.disputed.discard(transaction.tx_id)
        account.locked = True
        logger.info(f"Client {account.client_id} locked after chargeback of tx {transaction.tx_id}")
        return ProcessingResult.APPLIED

    @staticmethod
    def _disputed_delta(original: Transaction) -> Optional[Decimal]:
        """Signed amount the disputed transaction moved: positive for deposits, negative for withdrawals."""
        return checked_mul(original.amount, original.transaction_type.sign)
