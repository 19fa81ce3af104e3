import logging
import os
import sys
from typing import List, Optional

from engine import PaymentsEngine
from errors import LedgerError
from writer import write_accounts

logger = logging.getLogger(__name__)

USAGE = "Usage: python main.py <input.csv>"


def configure_logging() -> None:
    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    configure_logging()

    if len(argv) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    filepath = argv[0]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Cannot read {filepath}: {e}")
        return 1
    except LedgerError as e:
        logger.error(f"Aborting, invalid input in {filepath}: {e}")
        return 1

    write_accounts(accounts.values(), sys.stdout)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
