"""Authentication routes.

Every successful credential exchange answers with ``{success, token}`` and
mirrors the token into an httpOnly ``token`` cookie.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.core.config import Settings, get_settings
from app.routes.dependencies import Principal, get_auth_service
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)
from app.schemas.envelope import DataResponse, EmptyResponse
from app.schemas.error import ErrorResponse
from app.schemas.user import User
from app.services.auth import AuthService

TOKEN_COOKIE = "token"
LOGOUT_COOKIE_TTL = timedelta(seconds=10)

router = APIRouter(prefix="/auth", tags=["Auth"])

Service = Annotated[AuthService, Depends(get_auth_service)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def _token_response(response: Response, token: str, settings: Settings) -> TokenResponse:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=int(timedelta(days=settings.jwt_cookie_expire_days).total_seconds()),
        httponly=True,
        secure=settings.environment == "production",
    )
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, responses={400: {"model": ErrorResponse}})
def register(
    payload: RegisterRequest,
    response: Response,
    service: Service,
    settings: AppSettings,
) -> TokenResponse:
    return _token_response(response, service.register(payload), settings)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    response: Response,
    service: Service,
    settings: AppSettings,
) -> TokenResponse:
    token = service.login(email=payload.email, password=payload.password)
    return _token_response(response, token, settings)


@router.get("/logout", response_model=EmptyResponse)
async def logout(response: Response) -> EmptyResponse:
    response.set_cookie(
        TOKEN_COOKIE,
        "none",
        max_age=int(LOGOUT_COOKIE_TTL.total_seconds()),
        httponly=True,
    )
    return EmptyResponse()


@router.get("/me", response_model=DataResponse[User], responses={401: {"model": ErrorResponse}})
async def me(principal: Principal, service: Service) -> DataResponse[User]:
    return DataResponse(data=service.get_current_user(principal))


@router.put(
    "/update-details",
    response_model=DataResponse[User],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def update_details(
    payload: UpdateDetailsRequest,
    principal: Principal,
    service: Service,
) -> DataResponse[User]:
    user = service.update_details(principal, name=payload.name, email=payload.email)
    return DataResponse(data=user)


@router.put(
    "/update-password",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def update_password(
    payload: UpdatePasswordRequest,
    principal: Principal,
    response: Response,
    service: Service,
    settings: AppSettings,
) -> TokenResponse:
    token = service.update_password(
        principal,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )
    return _token_response(response, token, settings)
