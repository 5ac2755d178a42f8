"""
Rendering the quarterly capital gains report.
"""
from datetime import date
from typing import List, NamedTuple

from rich.table import Table

from gainsreport.ledger import Ledger
from gainsreport.quarters import QuarterSummary, summarize_quarters
from gainsreport.types import Transaction

__all__ = [
    "BANNER",
    "TermTotal",
    "gain_phrase",
    "format_transaction",
    "format_quarter_footer",
    "render_report",
    "term_totals",
    "build_totals_table",
]

BANNER = "============ ALL TRANSACTIONS SORTED BY SALE DATE, SPLIT BY QUARTER ============"


class TermTotal(NamedTuple):
    """Aggregates for one holding-period partition."""

    term: str
    count: int
    proceeds: float
    cost_basis: float
    net: float


def gain_phrase(transaction: Transaction, currency: str = "USD") -> str:
    """
    Describes the realized result, e.g. "short term loss of -50.25 USD".

    The signed amount is printed, so losses read with a minus sign.
    """
    if transaction.is_long_term:
        term, amount = "long term", transaction.long_term_net
    else:
        term, amount = "short term", transaction.short_term_net
    kind = "loss" if amount < 0 else "gain"
    return f"{term} {kind} of {amount:.2f} {currency}"


def _format_date(d: date) -> str:
    # strftime does not zero-pad years below 1000 on every platform.
    return f"{d.month:02d}/{d.day:02d}/{d.year:04d}"


def format_transaction(transaction: Transaction, currency: str = "USD") -> str:
    return (
        f"Sold {transaction.quantity:.1f} shares of {transaction.symbol} "
        f"on {_format_date(transaction.date_sold)} "
        f"for a {gain_phrase(transaction, currency)}"
    )


def format_quarter_footer(summary: QuarterSummary) -> str:
    return (
        f"============ End of Quarter {summary.number} || "
        f"Short Term Net: {summary.short_term_net:.2f}, "
        f"Long Term Net: {summary.long_term_net:.2f}"
    )


def render_report(ledger: Ledger, currency: str = "USD") -> List[str]:
    """
    Renders the full report as a list of output lines.

    Transactions are sorted by sale date and grouped into the four calendar
    quarters; each quarter ends with a footer carrying its net totals. Empty
    quarters still get a footer.
    """
    ordered = ledger.sorted_by_sale_date()

    lines = [BANNER, ""]
    for summary in summarize_quarters(ordered.transactions):
        lines.extend(format_transaction(t, currency) for t in summary.transactions)
        lines.append(format_quarter_footer(summary))
        lines.append("")
    return lines


def term_totals(ledger: Ledger) -> List[TermTotal]:
    """Totals for the short-term partition, the long-term partition and both."""
    short_term = TermTotal(
        "Short term",
        len(ledger.short_term),
        sum(t.proceeds for t in ledger.short_term),
        sum(t.cost_basis for t in ledger.short_term),
        sum(t.short_term_net for t in ledger.short_term),
    )
    long_term = TermTotal(
        "Long term",
        len(ledger.long_term),
        sum(t.proceeds for t in ledger.long_term),
        sum(t.cost_basis for t in ledger.long_term),
        sum(t.long_term_net for t in ledger.long_term),
    )
    combined = TermTotal(
        "Total",
        short_term.count + long_term.count,
        short_term.proceeds + long_term.proceeds,
        short_term.cost_basis + long_term.cost_basis,
        short_term.net + long_term.net,
    )
    return [short_term, long_term, combined]


def build_totals_table(totals: List[TermTotal], currency: str = "USD") -> Table:
    """Builds a rich table of the per-term totals."""
    table = Table(title=f"Realized totals ({currency})")
    table.add_column("Term")
    table.add_column("Sales", justify="right")
    table.add_column("Proceeds", justify="right")
    table.add_column("Cost Basis", justify="right")
    table.add_column("Net", justify="right")

    for total in totals:
        table.add_row(
            total.term,
            str(total.count),
            f"{total.proceeds:,.2f}",
            f"{total.cost_basis:,.2f}",
            f"{total.net:,.2f}",
            style="bold" if total.term == "Total" else None,
        )
    return table
