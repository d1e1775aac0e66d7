"""
app/schemas/analytics.py

Response schemas for analytics and payments endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FlatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    flat_id: str
    project_id: str
    project_name: str
    flat_number: str
    flat_type: str
    size: float
    price: float = Field(..., gt=0)
    status: str
    buyer_name: str | None = None
    sold_date: str | None = None


class ProjectSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: str
    project_name: str
    total_flats: int = Field(..., ge=0)
    sold_flats: int = Field(..., ge=0)
    unsold_flats: int = Field(..., ge=0)
    reserved_flats: int = Field(..., ge=0)
    sell_rate: float
    average_price: float


class TypeSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    flat_type: str
    total: int = Field(..., ge=0)
    sold: int = Field(..., ge=0)
    unsold: int = Field(..., ge=0)
    reserved: int = Field(..., ge=0)
    sell_rate: float
    average_price: float


class TierRejectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tier: str
    reason: str


class FormattedFiguresResponse(BaseModel):
    """
    Pre-rendered strings for summary cards.
    """

    sell_rate: str
    average_price: str
    total_revenue: str


class FlatsAnalyticsResponse(BaseModel):
    """
    API response model for one resolved flats analytics report.
    """

    team_id: str
    tier: str
    warning: str | None = None
    rejected_tiers: list[TierRejectionResponse] = Field(default_factory=list)
    total_flats: int = Field(..., ge=0)
    sold_flats: int = Field(..., ge=0)
    unsold_flats: int = Field(..., ge=0)
    reserved_flats: int = Field(..., ge=0)
    sell_rate: float
    average_price: float
    total_revenue: float
    formatted: FormattedFiguresResponse
    project_wise: list[ProjectSummaryResponse] = Field(default_factory=list)
    flats_by_type: list[TypeSummaryResponse] = Field(default_factory=list)
    flats: list[FlatResponse] | None = None


class ProjectWiseRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_name: str
    sold: int
    unsold: int
    sold_percentage: str
    unsold_percentage: str


class TeamOverviewResponse(BaseModel):
    team_id: str
    warning: str | None = None
    total_flats: int = Field(..., ge=0)
    sold_flats: int = Field(..., ge=0)
    unsold_flats: int = Field(..., ge=0)
    sold_percentage: str
    projects: list[ProjectWiseRowResponse] = Field(default_factory=list)


class CashRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: str
    project_name: str
    outstanding: float
    received: float
    completion_rate: float


class StackedCashRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_name: str
    received: float
    remaining: float = Field(..., ge=0)
    outstanding: float


class CashSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_outstanding: float
    total_received: float
    due: float
    due_percentage: float


class OutstandingCashResponse(BaseModel):
    team_id: str
    summary: CashSummaryResponse | None = None
    rows: list[CashRowResponse] = Field(default_factory=list)
    stacked_rows: list[StackedCashRowResponse] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    version: str
