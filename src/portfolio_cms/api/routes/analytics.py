"""Visitor analytics routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Header, Request

from portfolio_cms.api.schemas.analytics import ChartResponse, VisitCountsResponse
from portfolio_cms.services.analytics import by_country, by_day_of_week, record_visit
from portfolio_cms.services.geolocation import lookup_country, resolve_client_ip

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post(
    "/visits",
    response_model=VisitCountsResponse,
    summary="Track a visit",
    description="Record the caller as a visitor and return total, today and month counts.",
)
def track_visit(
    request: Request,
    x_forwarded_for: Annotated[str | None, Header()] = None,
) -> VisitCountsResponse:
    peer = request.client.host if request.client else None
    ip = resolve_client_ip(x_forwarded_for, peer)
    return VisitCountsResponse(**record_visit(ip, lookup_country(ip)))


@router.get("/countries", response_model=ChartResponse, summary="Visits per country")
def country_breakdown() -> ChartResponse:
    return ChartResponse(**by_country())


@router.get("/days", response_model=ChartResponse, summary="Visits per weekday")
def day_of_week_breakdown() -> ChartResponse:
    return ChartResponse(**by_day_of_week())
