"""
Calendar-quarter bucketing of transactions by sale date.
"""
from datetime import date
from typing import Iterable, List, NamedTuple

from gainsreport.types import Transaction

__all__ = ["QuarterSummary", "quarter_index", "bucket_by_quarter", "summarize_quarters"]

QUARTERS = 4


class QuarterSummary(NamedTuple):
    """
    The transactions sold within one calendar quarter and their net totals.
    """

    number: int  # 1-based
    transactions: List[Transaction]
    short_term_net: float
    long_term_net: float


def quarter_index(sale_date: date) -> int:
    """Maps a date to 0 (Jan-Mar), 1 (Apr-Jun), 2 (Jul-Sep) or 3 (Oct-Dec)."""
    return (sale_date.month - 1) // 3


def bucket_by_quarter(transactions: Iterable[Transaction]) -> List[List[Transaction]]:
    """
    Splits transactions into four quarter buckets by sale date.

    Order within each bucket follows the input order, so sort first for
    chronological buckets. All four buckets are returned even when empty.
    """
    buckets: List[List[Transaction]] = [[] for _ in range(QUARTERS)]
    for transaction in transactions:
        buckets[quarter_index(transaction.date_sold)].append(transaction)
    return buckets


def summarize_quarters(transactions: Iterable[Transaction]) -> List[QuarterSummary]:
    """Buckets the transactions and totals both nets for every quarter."""
    summaries = []
    for i, bucket in enumerate(bucket_by_quarter(transactions)):
        short_term_net = 0.0
        long_term_net = 0.0
        for t in bucket:
            short_term_net += t.short_term_net
            long_term_net += t.long_term_net
        summaries.append(QuarterSummary(i + 1, bucket, short_term_net, long_term_net))
    return summaries
