from fastapi import APIRouter, Depends, status

from libreria.api.deps import get_reservation_service
from libreria.models import ReservationStatus
from libreria.schemas.reservation import ReservationRequest, ReservationResponse, ReturnBookRequest
from libreria.services.reservations import ReservationService

router = APIRouter(prefix="/api/reservations", tags=["reservations"])


def _to_response(reservations) -> list[ReservationResponse]:
    return [ReservationResponse.from_reservation(r) for r in reservations]


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    request: ReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    reservation = await service.create_reservation(
        request.user_id,
        request.book_external_id,
        request.rental_days,
        request.start_date,
    )
    return ReservationResponse.from_reservation(reservation)


@router.get("", response_model=list[ReservationResponse])
async def list_reservations(
    status: ReservationStatus | None = None,
    service: ReservationService = Depends(get_reservation_service),
):
    if status is not None:
        return _to_response(await service.get_by_status(status))
    return _to_response(await service.get_all())


# Fixed paths are registered before /{reservation_id} so they are not parsed as ids.
@router.get("/active", response_model=list[ReservationResponse])
async def list_active_reservations(service: ReservationService = Depends(get_reservation_service)):
    return _to_response(await service.get_active())


@router.get("/overdue", response_model=list[ReservationResponse])
async def list_overdue_reservations(service: ReservationService = Depends(get_reservation_service)):
    """Active reservations past their expected return date."""
    return _to_response(await service.get_overdue())


@router.get("/user/{user_id}", response_model=list[ReservationResponse])
async def list_user_reservations(user_id: int, service: ReservationService = Depends(get_reservation_service)):
    return _to_response(await service.get_by_user_id(user_id))


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: int, service: ReservationService = Depends(get_reservation_service)):
    return ReservationResponse.from_reservation(await service.get_by_id(reservation_id))


@router.post("/{reservation_id}/return", response_model=ReservationResponse)
async def return_book(
    reservation_id: int,
    request: ReturnBookRequest,
    service: ReservationService = Depends(get_reservation_service),
):
    reservation = await service.return_book(reservation_id, request.return_date)
    return ReservationResponse.from_reservation(reservation)
