import csv
from typing import Iterable, TextIO

from models import AccountSnapshot
from numeric import format_amount

HEADER = ["client", "available", "held", "total", "locked"]


def write_accounts(accounts: Iterable[AccountSnapshot], stream: TextIO) -> None:
    """Write accounts as CSV, sorted by client id. The header is always written."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for account in sorted(accounts, key=lambda a: a.client_id):
        writer.writerow([
            account.client_id,
            format_amount(account.available),
            format_amount(account.held),
            format_amount(account.total),
            str(account.locked).lower(),
        ])
