from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libreria.database import get_db
from libreria.services.books import BookService
from libreria.services.reservations import ReservationService
from libreria.services.users import UserService
from libreria.stores import BookStore, ReservationStore, UserStore


def get_reservation_service(db: AsyncSession = Depends(get_db)) -> ReservationService:
    return ReservationService(db, UserStore(db), BookStore(db), ReservationStore(db))


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db, UserStore(db), ReservationStore(db))


def get_book_service(db: AsyncSession = Depends(get_db)) -> BookService:
    return BookService(db, BookStore(db), ReservationStore(db))
