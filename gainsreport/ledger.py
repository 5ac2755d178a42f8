"""
Accumulation of parsed transactions into short- and long-term partitions.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from gainsreport.config import ParsingConfig
from gainsreport.parsing import UnparsedLineError, parse_record
from gainsreport.types import Transaction

__all__ = ["Ledger", "build_ledger", "sort_by_sale_date"]

log = logging.getLogger(__name__)


def sort_by_sale_date(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Sorts by ascending sale date; equal dates keep their input order."""
    return sorted(transactions, key=lambda t: t.date_sold)


@dataclass
class Ledger:
    """
    All accepted transactions, in input order, plus the same transactions
    split by holding period. Every transaction lands in exactly one of
    `short_term` and `long_term`.
    """

    transactions: List[Transaction] = field(default_factory=list)
    short_term: List[Transaction] = field(default_factory=list)
    long_term: List[Transaction] = field(default_factory=list)
    skipped: int = 0

    def add(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)
        if transaction.is_long_term:
            self.long_term.append(transaction)
        else:
            self.short_term.append(transaction)

    def sorted_by_sale_date(self) -> "Ledger":
        """Returns a copy with each list independently sorted by sale date."""
        return Ledger(
            transactions=sort_by_sale_date(self.transactions),
            short_term=sort_by_sale_date(self.short_term),
            long_term=sort_by_sale_date(self.long_term),
            skipped=self.skipped,
        )


def build_ledger(
    rows: Iterable[Sequence[str]], config: Optional[ParsingConfig] = None
) -> Ledger:
    """
    Parses every row into the ledger.

    Rows that are not transactions are logged and skipped. Malformed values
    inside a transaction row propagate as AmountParseError / DateParseError.
    """
    ledger = Ledger()
    for row in rows:
        try:
            transaction = parse_record(row, config)
        except UnparsedLineError:
            # Expected for headers, blank lines and footers.
            log.info(f"did not parse record: {list(row)}")
            ledger.skipped += 1
            continue
        ledger.add(transaction)

    log.debug(
        f"Parsed {len(ledger.transactions)} transactions "
        f"({len(ledger.short_term)} short term, {len(ledger.long_term)} long term), "
        f"skipped {ledger.skipped} rows."
    )
    return ledger
