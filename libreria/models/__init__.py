from libreria.models.base import Base
from libreria.models.book import Book
from libreria.models.reservation import Reservation, ReservationStatus
from libreria.models.user import User

__all__ = ["Base", "Book", "Reservation", "ReservationStatus", "User"]
