"""
Trip, Destination & Activity Schemas
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID


def strip_required(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; a blank value is rejected"""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class TripCreate(BaseModel):
    """Schema for creating a trip"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)

    _strip_title = field_validator("title")(strip_required)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripUpdate(BaseModel):
    """Schema for updating a trip"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)

    _strip_title = field_validator("title")(strip_required)


class TripResponse(BaseModel):
    """Schema for trip response"""
    id: UUID
    owner_id: UUID
    title: str
    description: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    budget: float
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class DestinationCreate(BaseModel):
    """Schema for adding a destination to a trip"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    country: Optional[str] = Field(None, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)

    _strip_name = field_validator("name")(strip_required)


class DestinationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    country: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

    _strip_name = field_validator("name")(strip_required)


class DestinationResponse(BaseModel):
    id: UUID
    trip_id: UUID
    name: str
    description: Optional[str]
    country: Optional[str]
    price: float
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class ActivityCreate(BaseModel):
    """Schema for adding an activity to a destination"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    duration: Optional[str] = Field(None, max_length=100)

    _strip_name = field_validator("name")(strip_required)


class ActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    duration: Optional[str] = Field(None, max_length=100)

    _strip_name = field_validator("name")(strip_required)


class ActivityResponse(BaseModel):
    id: UUID
    destination_id: UUID
    name: str
    description: Optional[str]
    price: float
    duration: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class RankedItem(BaseModel):
    """A destination or activity in the cost ranking"""
    kind: str  # destination, activity
    id: UUID
    name: str
    price: float


class TripStatsResponse(BaseModel):
    """Schema for budget statistics"""
    trip_id: UUID
    budget: float
    total_destinations_cost: float
    total_activities_cost: float
    total_cost: float
    remaining_budget: float
    budget_usage_percentage: float
    destination_count: int
    activity_count: int
    top_expenses: List[RankedItem]
