"""Expense data models."""

import datetime
from typing import Optional, Dict, Any
from pydantic import AliasChoices, BaseModel, Field, field_validator

from shared.validators import parse_amount


class Expense(BaseModel):
    """
    Expense record as read back from storage.

    Amounts are coerced when the record is loaded: anything that is not a
    finite number becomes None so aggregation never fails on a bad row.
    """

    expense_id: str = Field(..., validation_alias=AliasChoices('expense_id', 'id'))
    user_id: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    vendor: Optional[str] = None
    description: Optional[str] = None
    date: datetime.date
    receipt_url: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    class Config:
        """Pydantic config."""
        frozen = True
        populate_by_name = True
        from_attributes = True

    @field_validator('amount', mode='before')
    @classmethod
    def _coerce_amount(cls, value: Any) -> Optional[float]:
        return parse_amount(value)

    @field_validator('category', 'vendor', 'description', mode='before')
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Expense":
        """Build an expense from a stored record dictionary."""
        return cls.model_validate(record)

    @property
    def month_key(self) -> str:
        """YYYY-MM key of the expense date."""
        return self.date.isoformat()[:7]


class CategoryConfig(BaseModel):
    """Expense category with its optional monthly spending limit."""

    name: str
    monthly_limit: Optional[float] = None
    emoji: Optional[str] = None

    class Config:
        """Pydantic config."""
        frozen = True

    @field_validator('monthly_limit', mode='before')
    @classmethod
    def _coerce_limit(cls, value: Any) -> Optional[float]:
        return parse_amount(value)
