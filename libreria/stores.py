"""Thin persistence collaborators over an ``AsyncSession``.

Stores never commit: the calling service owns the transaction boundary.
"""
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from libreria.models import Book, Reservation, ReservationStatus, User


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def save(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        return user

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()


class BookStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, book_id: int, lock: bool = False) -> Book | None:
        stmt = select(Book).where(Book.id == book_id)
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_external_id(self, external_id: int, lock: bool = False) -> Book | None:
        stmt = select(Book).where(Book.external_id == external_id)
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Book]:
        result = await self.session.execute(select(Book).order_by(Book.id))
        return list(result.scalars().all())

    async def save(self, book: Book) -> Book:
        self.session.add(book)
        await self.session.flush()
        return book

    async def delete(self, book: Book) -> None:
        await self.session.delete(book)
        await self.session.flush()


class ReservationStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, reservation_id: int, lock: bool = False) -> Reservation | None:
        stmt = select(Reservation).where(Reservation.id == reservation_id)
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, reservation: Reservation) -> Reservation:
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def find_all(self) -> list[Reservation]:
        return await self._find()

    async def find_by_user_id(self, user_id: int) -> list[Reservation]:
        return await self._find(Reservation.user_id == user_id)

    async def find_by_status(self, status: ReservationStatus) -> list[Reservation]:
        return await self._find(Reservation.status == status)

    async def find_overdue(self, today: date) -> list[Reservation]:
        """Active reservations whose expected return date has already passed."""
        return await self._find(
            Reservation.status == ReservationStatus.ACTIVE,
            Reservation.expected_return_date < today,
        )

    async def count_for_user(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Reservation).where(Reservation.user_id == user_id)
        )
        return result.scalar_one()

    async def count_for_book(self, book_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Reservation).where(Reservation.book_id == book_id)
        )
        return result.scalar_one()

    async def _find(self, *criteria) -> list[Reservation]:
        stmt = select(Reservation).where(*criteria).order_by(Reservation.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
