import logging
from typing import Dict, TextIO

from errors import InvalidTransactionError
from ledger import Ledger
from models import AccountSnapshot, ProcessingStats
from reader import read_transactions

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Feeds decoded transactions into a Ledger one at a time, in input order.
    Any malformed record aborts the run before a result is returned.
    """

    def __init__(self):
        self.ledger = Ledger()
        self.stats = ProcessingStats()

    def process_file(self, filepath: str) -> Dict[int, AccountSnapshot]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            return self.process_stream(f)

    def process_stream(self, stream: TextIO) -> Dict[int, AccountSnapshot]:
        for transaction in read_transactions(stream):
            if not transaction.is_well_formed():
                raise InvalidTransactionError(transaction)

            result = self.ledger.apply(transaction)
            self.stats.record(result)

        logger.info(f"Processed {len(self.ledger)} accounts. {self.stats.summary()}")
        return {snapshot.client_id: snapshot for snapshot in self.ledger.export()}
