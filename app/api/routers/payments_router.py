"""
app/api/routers/payments_router.py

Outstanding cash endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.analytics import (
    CashRowResponse,
    CashSummaryResponse,
    OutstandingCashResponse,
    StackedCashRowResponse,
)
from app.services.outstanding_cash_service import (
    OutstandingCashService,
    get_outstanding_cash_service,
)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/{team_id}/outstanding-cash", response_model=OutstandingCashResponse)
def get_outstanding_cash(
    team_id: str,
    cash_service: OutstandingCashService = Depends(get_outstanding_cash_service),
) -> OutstandingCashResponse:
    """
    Outstanding vs received cash for one team. Partial upstream failures
    are listed in ``errors``; the request itself still succeeds.
    """

    try:
        report = cash_service.load(team_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return OutstandingCashResponse(
        team_id=team_id.strip(),
        summary=CashSummaryResponse.model_validate(report.summary) if report.summary else None,
        rows=[CashRowResponse.model_validate(row) for row in report.rows],
        stacked_rows=[StackedCashRowResponse.model_validate(row) for row in report.stacked_rows],
        errors=list(report.errors),
    )
