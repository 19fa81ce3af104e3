import csv
from typing import Dict, Iterator, List, Optional, TextIO

from errors import MalformedRecordError
from models import Transaction, TransactionType
from numeric import parse_amount

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TX_ID = 2 ** 32 - 1


def read_transactions(stream: TextIO) -> Iterator[Transaction]:
    """
    Decode transactions from a header-driven CSV stream.

    Fields are whitespace-trimmed, blank lines are skipped and columns may
    appear in any order. Rows may be shorter than the header (missing
    trailing fields are absent) or longer (extra fields are ignored).

    Raises:
        MalformedRecordError: on the first row that cannot be decoded
    """
    reader = csv.reader(stream)
    header: Optional[List[str]] = None

    try:
        for row in reader:
            fields = [value.strip() for value in row]
            if not any(fields):
                continue

            if header is None:
                header = [name.lower() for name in fields]
                continue

            record = {name: value for name, value in zip(header, fields) if name}
            yield parse_record(record, reader.line_num)
    except (UnicodeDecodeError, csv.Error) as e:
        raise MalformedRecordError(f"undecodable input after line {reader.line_num}: {e}") from None


def parse_record(record: Dict[str, str], line_number: Optional[int] = None) -> Transaction:
    """Decode one header-keyed record into a Transaction."""
    if "type" not in record:
        raise MalformedRecordError("missing type", line_number)
    try:
        transaction_type = TransactionType(record["type"].lower())
    except ValueError:
        raise MalformedRecordError(f"unknown transaction type {record['type']!r}", line_number) from None

    client_id = _parse_id(record, "client", MAX_CLIENT_ID, line_number)
    tx_id = _parse_id(record, "tx", MAX_TX_ID, line_number)

    amount = None
    amount_str = record.get("amount", "")
    if amount_str:
        try:
            amount = parse_amount(amount_str)
        except ValueError as e:
            raise MalformedRecordError(str(e), line_number) from None

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        tx_id=tx_id,
        amount=amount,
    )


def _parse_id(record: Dict[str, str], column: str, maximum: int, line_number: Optional[int]) -> int:
    if column not in record:
        raise MalformedRecordError(f"missing {column}", line_number)

    value = record[column]
    if not (value.isascii() and value.isdigit()):
        raise MalformedRecordError(f"{column} is not an unsigned integer: {value!r}", line_number)

    parsed = int(value)
    if not 0 <= parsed <= maximum:
        raise MalformedRecordError(f"{column} out of range: {parsed}", line_number)
    return parsed
