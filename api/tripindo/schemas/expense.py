"""
Expense Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from tripindo.schemas.trip import strip_required


class ExpenseCategory(str, Enum):
    """Fixed category list offered by the expense form"""
    TRANSPORT = "Transport"
    FOOD = "Food"
    SHOPPING = "Shopping"
    ACTIVITIES = "Activities"
    ACCOMMODATION = "Accommodation"
    OTHER = "Other"


class ExpenseCreate(BaseModel):
    """Schema for recording an expense"""
    title: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category: ExpenseCategory = ExpenseCategory.TRANSPORT
    date: Optional[date_type] = None  # defaults to today
    paid_by_user_id: Optional[UUID] = None  # defaults to the caller
    paid_for_user_id: Optional[UUID] = None  # None = shared by everyone

    _strip_title = field_validator("title")(strip_required)


class ExpenseShareResponse(BaseModel):
    id: UUID
    user_id: UUID
    share_amount: float

    class Config:
        from_attributes = True


class ExpenseResponse(BaseModel):
    id: UUID
    trip_id: UUID
    title: str
    amount: float
    category: str
    date: date_type
    paid_by_user_id: UUID
    paid_for_user_id: Optional[UUID]
    created_at: Optional[datetime]
    shares: List[ExpenseShareResponse] = []

    class Config:
        from_attributes = True


class ExpenseSummaryResponse(BaseModel):
    trip_id: UUID
    total: float
    expense_count: int
    by_category: Dict[str, float]
