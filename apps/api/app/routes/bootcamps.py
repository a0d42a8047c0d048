"""Bootcamp routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.list_query import ListQuerySpec
from app.routes.dependencies import PublisherPrincipal, get_bootcamp_service, get_list_query
from app.schemas.bootcamp import Bootcamp, CreateBootcampRequest, UpdateBootcampRequest
from app.schemas.envelope import DataResponse, EmptyResponse, PaginatedResponse
from app.schemas.error import ErrorResponse
from app.schemas.populated import BootcampWithCourses
from app.services.bootcamps import BootcampService

router = APIRouter(prefix="/bootcamps", tags=["Bootcamps"])

BootcampId = Annotated[str, Path(alias="bootcampId")]
Service = Annotated[BootcampService, Depends(get_bootcamp_service)]


@router.get("", response_model=PaginatedResponse, responses={400: {"model": ErrorResponse}})
async def list_bootcamps(
    query: Annotated[ListQuerySpec, Depends(get_list_query)],
    service: Service,
) -> PaginatedResponse:
    result = service.list_bootcamps(query)
    return PaginatedResponse(count=result.count, pagination=result.pagination, data=result.items)


@router.post(
    "",
    response_model=DataResponse[Bootcamp],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_bootcamp(
    payload: CreateBootcampRequest,
    principal: PublisherPrincipal,
    service: Service,
) -> DataResponse[Bootcamp]:
    return DataResponse(data=service.create_bootcamp(principal=principal, payload=payload))


@router.get(
    "/{bootcampId}",
    response_model=DataResponse[BootcampWithCourses],
    responses={404: {"model": ErrorResponse}},
)
async def get_bootcamp(bootcamp_id: BootcampId, service: Service) -> DataResponse[BootcampWithCourses]:
    return DataResponse(data=service.get_bootcamp(bootcamp_id))


@router.put(
    "/{bootcampId}",
    response_model=DataResponse[Bootcamp],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_bootcamp(
    bootcamp_id: BootcampId,
    payload: UpdateBootcampRequest,
    principal: PublisherPrincipal,
    service: Service,
) -> DataResponse[Bootcamp]:
    return DataResponse(data=service.update_bootcamp(principal=principal, bootcamp_id=bootcamp_id, payload=payload))


@router.delete(
    "/{bootcampId}",
    response_model=EmptyResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_bootcamp(bootcamp_id: BootcampId, principal: PublisherPrincipal, service: Service) -> EmptyResponse:
    service.delete_bootcamp(principal=principal, bootcamp_id=bootcamp_id)
    return EmptyResponse()
