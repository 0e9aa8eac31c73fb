"""Reservation lifecycle: checkout against book inventory and return with late fees."""
import logging
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from libreria.errors import InvalidState, NotFound, Unavailable
from libreria.fees import ZERO, compute_late_fee, compute_total_fee
from libreria.models import Reservation, ReservationStatus
from libreria.stores import BookStore, ReservationStore, UserStore

logger = logging.getLogger(__name__)

MAX_RENTAL_DAYS = 365


class ReservationService:
    def __init__(
        self,
        session: AsyncSession,
        users: UserStore,
        books: BookStore,
        reservations: ReservationStore,
    ) -> None:
        self.session = session
        self.users = users
        self.books = books
        self.reservations = reservations

    async def create_reservation(
        self,
        user_id: int,
        book_external_id: int,
        rental_days: int,
        start_date: date,
    ) -> Reservation:
        """Check a copy of the book out to the user.

        The book row is locked for the duration of the transaction so that
        concurrent reservations cannot push ``available_quantity`` below zero.
        """
        if rental_days is None or rental_days <= 0:
            raise ValueError("rental_days must be positive")
        if rental_days > MAX_RENTAL_DAYS:
            raise ValueError(f"rental_days must not exceed {MAX_RENTAL_DAYS}")
        try:
            user = await self.users.get(user_id)
            if user is None:
                raise NotFound(f"User not found: id={user_id}")

            book = await self.books.get_by_external_id(book_external_id, lock=True)
            if book is None:
                raise NotFound(f"Book not found: external_id={book_external_id}")
            if book.available_quantity is None or book.available_quantity <= 0:
                raise Unavailable(f"Book not available for reservation: external_id={book_external_id}")

            daily_rate = book.price
            reservation = Reservation(
                user=user,
                book=book,
                rental_days=rental_days,
                start_date=start_date,
                expected_return_date=start_date + timedelta(days=rental_days),
                daily_rate=daily_rate,
                total_fee=compute_total_fee(daily_rate, rental_days),
                late_fee=ZERO,
                status=ReservationStatus.ACTIVE,
            )
            await self.reservations.save(reservation)

            book.available_quantity -= 1
            await self.books.save(book)

            await self.session.commit()
        except Exception as exc:
            await self.session.rollback()
            logger.warning(
                "Reservation rejected for user_id=%s book_external_id=%s: %s",
                user_id, book_external_id, exc,
            )
            raise

        logger.info(
            "Created reservation id=%s user_id=%s book_external_id=%s total_fee=%s remaining=%d",
            reservation.id, user_id, book_external_id, reservation.total_fee, book.available_quantity,
        )
        return reservation

    async def return_book(self, reservation_id: int, return_date: date) -> Reservation:
        """Close an active reservation and put the copy back into inventory.

        Late returns are charged against the book's current price, not the
        daily rate captured at checkout.
        """
        try:
            reservation = await self.reservations.get(reservation_id, lock=True)
            if reservation is None:
                raise NotFound(f"Reservation not found: id={reservation_id}")
            if reservation.status != ReservationStatus.ACTIVE:
                raise InvalidState(f"Reservation already returned: id={reservation_id}")

            book = await self.books.get(reservation.book_id, lock=True)

            reservation.actual_return_date = return_date
            if return_date > reservation.expected_return_date:
                days_late = (return_date - reservation.expected_return_date).days
                reservation.late_fee = compute_late_fee(book.price, days_late)
                reservation.status = ReservationStatus.OVERDUE
            else:
                reservation.late_fee = ZERO
                reservation.status = ReservationStatus.RETURNED

            book.available_quantity += 1
            await self.books.save(book)
            await self.reservations.save(reservation)

            await self.session.commit()
        except Exception as exc:
            await self.session.rollback()
            logger.warning("Return rejected for reservation_id=%s: %s", reservation_id, exc)
            raise

        logger.info(
            "Returned reservation id=%s status=%s late_fee=%s",
            reservation.id, reservation.status.value, reservation.late_fee,
        )
        return reservation

    async def get_by_id(self, reservation_id: int) -> Reservation:
        reservation = await self.reservations.get(reservation_id)
        if reservation is None:
            raise NotFound(f"Reservation not found: id={reservation_id}")
        return reservation

    async def get_all(self) -> list[Reservation]:
        return await self.reservations.find_all()

    async def get_by_user_id(self, user_id: int) -> list[Reservation]:
        return await self.reservations.find_by_user_id(user_id)

    async def get_by_status(self, status: ReservationStatus) -> list[Reservation]:
        return await self.reservations.find_by_status(status)

    async def get_active(self) -> list[Reservation]:
        return await self.get_by_status(ReservationStatus.ACTIVE)

    async def get_overdue(self, today: date | None = None) -> list[Reservation]:
        return await self.reservations.find_overdue(today or date.today())
