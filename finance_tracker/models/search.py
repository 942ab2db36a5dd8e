"""
Query Models

Parameters for the ledger's reporting and search operations.
These carry no behaviour beyond validation; matching
happens in finance_tracker.queries.filters.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DateRange(BaseModel):
    """An inclusive calendar window used by the standard reports."""
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode='after')
    def validate_order(self) -> 'DateRange':
        if self.end < self.start:
            raise ValueError("Date range end cannot be before start")
        return self

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class SearchCriteria(BaseModel):
    """
    Criteria for a custom search.

    Every field is optional. A transaction matches when every field that
    IS set matches; unset fields impose no constraint. With nothing set,
    the whole ledger matches.
    """
    model_config = ConfigDict(frozen=True)

    start_date: Optional[date] = Field(
        default=None,
        description="Include transactions on or after this date"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Include transactions on or before this date"
    )
    description_keyword: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the description"
    )
    vendor: Optional[str] = Field(
        default=None,
        description="Case-insensitive exact vendor name"
    )
    exact_amount: Optional[Decimal] = Field(
        default=None,
        description="Exact signed amount; no tolerance is applied"
    )

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.start_date,
                self.end_date,
                self.description_keyword,
                self.vendor,
                self.exact_amount,
            )
        )
