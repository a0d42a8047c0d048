"""Admin-only user management routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.list_query import ListQuerySpec
from app.routes.dependencies import get_list_query, get_user_service, require_roles
from app.schemas.auth import Role
from app.schemas.envelope import DataResponse, EmptyResponse, PaginatedResponse
from app.schemas.error import ErrorResponse
from app.schemas.user import CreateUserRequest, UpdateUserRequest, User
from app.services.users import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_roles(Role.ADMIN))],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)

UserId = Annotated[str, Path(alias="userId")]
Service = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=PaginatedResponse, responses={400: {"model": ErrorResponse}})
async def list_users(
    query: Annotated[ListQuerySpec, Depends(get_list_query)],
    service: Service,
) -> PaginatedResponse:
    result = service.list_users(query)
    return PaginatedResponse(count=result.count, pagination=result.pagination, data=result.items)


@router.get("/{userId}", response_model=DataResponse[User], responses={404: {"model": ErrorResponse}})
async def get_user(user_id: UserId, service: Service) -> DataResponse[User]:
    return DataResponse(data=service.get_user(user_id))


@router.post(
    "",
    response_model=DataResponse[User],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_user(payload: CreateUserRequest, service: Service) -> DataResponse[User]:
    return DataResponse(data=service.create_user(payload))


@router.put(
    "/{userId}",
    response_model=DataResponse[User],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_user(user_id: UserId, payload: UpdateUserRequest, service: Service) -> DataResponse[User]:
    return DataResponse(data=service.update_user(user_id, payload))


@router.delete("/{userId}", response_model=EmptyResponse, responses={404: {"model": ErrorResponse}})
async def delete_user(user_id: UserId, service: Service) -> EmptyResponse:
    service.delete_user(user_id)
    return EmptyResponse()
