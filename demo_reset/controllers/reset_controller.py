"""HTTP routes for triggering and inspecting demo resets."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from demo_reset.controllers.dependencies import (
    bearer_scheme,
    get_auth_service,
    get_repository,
    get_reset_service,
    require_admin,
)
from demo_reset.domain.errors import DemoResetError, ResetPhaseError
from demo_reset.domain.models import BOOKING_STATUSES
from demo_reset.repository.data_repository import DataRepository
from demo_reset.services.auth_service import (
    AdminTokenNotConfiguredError,
    AuthService,
    InvalidAdminTokenError,
)
from demo_reset.services.reset_service import DemoResetService
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["demo-reset"])


class LoginRequest(BaseModel):
    admin_token: str = Field(min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ResetResponse(BaseModel):
    started_at: datetime
    completed_phases: list[str]
    cabins_inserted: int = Field(ge=0)
    guests_inserted: int = Field(ge=0)
    bookings_inserted: int = Field(ge=0)
    status_counts: dict[str, int]


class BookingPreviewResponse(BaseModel):
    guest_ordinal: int = Field(gt=0)
    cabin_ordinal: int = Field(gt=0)
    start_date: datetime
    end_date: datetime
    num_nights: int = Field(ge=0)
    cabin_price: float
    extras_price: float
    total_price: float
    status: str


class SummaryResponse(BaseModel):
    cabins: int = Field(ge=0)
    guests: int = Field(ge=0)
    bookings: int = Field(ge=0)
    status_counts: dict[str, int]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    try:
        bearer = auth_service.login(payload.admin_token)
        return LoginResponse(access_token=bearer)
    except (AdminTokenNotConfiguredError, InvalidAdminTokenError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def logout(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    if credentials is not None:
        auth_service.logout(credentials.credentials)


@router.post(
    "/reset",
    response_model=ResetResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
)
def reset_demo(
    reset_service: DemoResetService = Depends(get_reset_service),
) -> ResetResponse:
    try:
        report = reset_service.reset_demo()
    except ResetPhaseError as exc:
        logger.error("Demo reset aborted in phase '%s': %s", exc.phase, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"phase": exc.phase, "error": str(exc)},
        ) from exc
    return ResetResponse(**report.to_dict())


@router.get(
    "/preview",
    response_model=list[BookingPreviewResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
)
def preview_bookings(
    reset_service: DemoResetService = Depends(get_reset_service),
) -> list[BookingPreviewResponse]:
    try:
        bookings = reset_service.preview_bookings()
    except DemoResetError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    return [
        BookingPreviewResponse(
            guest_ordinal=booking.guest_id,
            cabin_ordinal=booking.cabin_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            num_nights=booking.num_nights,
            cabin_price=booking.cabin_price,
            extras_price=booking.extras_price,
            total_price=booking.total_price,
            status=booking.status,
        )
        for booking in bookings
    ]


@router.get("/summary", response_model=SummaryResponse, status_code=status.HTTP_200_OK)
def summary(repository: DataRepository = Depends(get_repository)) -> SummaryResponse:
    status_counts = {name: 0 for name in BOOKING_STATUSES}
    status_counts.update(repository.count_bookings_by_status())
    return SummaryResponse(
        cabins=repository.count_rows("cabins"),
        guests=repository.count_rows("guests"),
        bookings=repository.count_rows("bookings"),
        status_counts=status_counts,
    )
