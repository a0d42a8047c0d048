"""Review routes, including those nested under a bootcamp."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.list_query import ListQuerySpec
from app.routes.dependencies import ReviewerPrincipal, get_list_query, get_review_service
from app.schemas.envelope import CollectionResponse, DataResponse, EmptyResponse, PaginatedResponse
from app.schemas.error import ErrorResponse
from app.schemas.populated import ReviewWithBootcamp
from app.schemas.review import CreateReviewRequest, Review, UpdateReviewRequest
from app.services.reviews import ReviewService

router = APIRouter(tags=["Reviews"])

BootcampId = Annotated[str, Path(alias="bootcampId")]
ReviewId = Annotated[str, Path(alias="reviewId")]
Service = Annotated[ReviewService, Depends(get_review_service)]


@router.get("/reviews", response_model=PaginatedResponse, responses={400: {"model": ErrorResponse}})
async def list_reviews(
    query: Annotated[ListQuerySpec, Depends(get_list_query)],
    service: Service,
) -> PaginatedResponse:
    result = service.list_reviews(query)
    return PaginatedResponse(count=result.count, pagination=result.pagination, data=result.items)


@router.get(
    "/bootcamps/{bootcampId}/reviews",
    response_model=CollectionResponse[Review],
    responses={404: {"model": ErrorResponse}},
)
async def list_bootcamp_reviews(bootcamp_id: BootcampId, service: Service) -> CollectionResponse[Review]:
    reviews = service.list_bootcamp_reviews(bootcamp_id)
    return CollectionResponse(count=len(reviews), data=reviews)


@router.post(
    "/bootcamps/{bootcampId}/reviews",
    response_model=DataResponse[Review],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def create_review(
    bootcamp_id: BootcampId,
    payload: CreateReviewRequest,
    principal: ReviewerPrincipal,
    service: Service,
) -> DataResponse[Review]:
    return DataResponse(data=service.create_review(principal=principal, bootcamp_id=bootcamp_id, payload=payload))


@router.get(
    "/reviews/{reviewId}",
    response_model=DataResponse[ReviewWithBootcamp],
    responses={404: {"model": ErrorResponse}},
)
async def get_review(review_id: ReviewId, service: Service) -> DataResponse[ReviewWithBootcamp]:
    return DataResponse(data=service.get_review(review_id))


@router.put(
    "/reviews/{reviewId}",
    response_model=DataResponse[Review],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_review(
    review_id: ReviewId,
    payload: UpdateReviewRequest,
    principal: ReviewerPrincipal,
    service: Service,
) -> DataResponse[Review]:
    return DataResponse(data=service.update_review(principal=principal, review_id=review_id, payload=payload))


@router.delete(
    "/reviews/{reviewId}",
    response_model=EmptyResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_review(review_id: ReviewId, principal: ReviewerPrincipal, service: Service) -> EmptyResponse:
    service.delete_review(principal=principal, review_id=review_id)
    return EmptyResponse()
