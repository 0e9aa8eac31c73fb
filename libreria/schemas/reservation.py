from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from libreria.models import Reservation, ReservationStatus
from libreria.services.reservations import MAX_RENTAL_DAYS


class ReservationRequest(BaseModel):
    user_id: int
    book_external_id: int
    rental_days: int = Field(gt=0, le=MAX_RENTAL_DAYS)
    start_date: date


class ReturnBookRequest(BaseModel):
    return_date: date


class ReservationResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    book_external_id: int
    book_title: str
    rental_days: int
    start_date: date
    expected_return_date: date
    actual_return_date: date | None = None
    daily_rate: Decimal
    total_fee: Decimal
    late_fee: Decimal
    status: ReservationStatus
    created_at: datetime

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            user_id=reservation.user.id,
            user_name=reservation.user.name,
            book_external_id=reservation.book.external_id,
            book_title=reservation.book.title,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            actual_return_date=reservation.actual_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            late_fee=reservation.late_fee,
            status=reservation.status,
            created_at=reservation.created_at,
        )
