# ==============================================================================
# FEEDBACK ENDPOINTS - Reviews, Quotes & Vacancies
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, status

from app.api.dependencies import QuoteServiceDep, ReviewServiceDep, VacancyServiceDep
from app.schemas.base import IdResponse
from app.schemas.review import QuoteCreate, ReviewCreate

reviews_router = APIRouter(prefix="/reviews", tags=["Reviews"])
quotes_router = APIRouter(prefix="/quotes", tags=["Quotes"])
vacancies_router = APIRouter(prefix="/vacancies", tags=["Careers"])


@reviews_router.get(
    "/{product_id}",
    summary="List product reviews",
    description="Reviews of a product with reviewer names, newest first.",
)
async def list_reviews(product_id: str, service: ReviewServiceDep) -> List[Dict[str, Any]]:
    return await service.list_for_product(product_id)


@reviews_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Add review",
)
async def add_review(schema: ReviewCreate, service: ReviewServiceDep) -> Dict[str, Any]:
    """Review a product; returns the stored review."""
    return await service.add_review(schema)


@quotes_router.post(
    "",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request quote",
    description="Submit a quotation request.",
)
async def submit_quote(schema: QuoteCreate, service: QuoteServiceDep) -> IdResponse:
    return IdResponse(id=await service.submit(schema))


@vacancies_router.get(
    "",
    summary="List vacancies",
    description="Open positions, newest first.",
)
async def list_vacancies(service: VacancyServiceDep) -> List[Dict[str, Any]]:
    return await service.list_open()
