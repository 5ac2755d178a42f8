"""
Shared data structures for the application.
"""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["Transaction", "UNKNOWN_DATE"]

# Stands in for acquisition (or sale) dates reported as "Unknown".
UNKNOWN_DATE = date.min


class Transaction(BaseModel):
    """
    A single closed position from a realized gain/loss export.
    """

    model_config = ConfigDict(frozen=True)  # Make transactions immutable

    symbol: str = Field(..., min_length=1, description="The ticker symbol.")
    security: str = Field("", description="Descriptive name of the security.")
    quantity: float = Field(..., description="Number of shares sold.")
    date_acquired: date = Field(..., description="Acquisition date, or UNKNOWN_DATE.")
    date_sold: date = Field(..., description="Sale date; drives sorting and quarter bucketing.")
    proceeds: float = Field(0.0, description="Total sale value in dollars.")
    cost_basis: float = Field(0.0, description="Original purchase cost in dollars.")
    short_term_net: float = Field(0.0, description="Short-term gain (or loss) in dollars.")
    long_term_net: float = Field(0.0, description="Long-term gain (or loss) in dollars.")

    @property
    def is_long_term(self) -> bool:
        """
        A transaction without a short-term net is treated as long-term.

        A short-term sale that broke exactly even is therefore reported as
        long-term; the export does not carry the holding period itself.
        """
        return self.short_term_net == 0.0
