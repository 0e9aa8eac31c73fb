import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from libreria.errors import Conflict, InvalidState, NotFound
from libreria.models import Book
from libreria.stores import BookStore, ReservationStore

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, session: AsyncSession, books: BookStore, reservations: ReservationStore) -> None:
        self.session = session
        self.books = books
        self.reservations = reservations

    async def create_book(
        self,
        external_id: int,
        title: str,
        price: Decimal,
        stock_quantity: int,
        available_quantity: int | None = None,
    ) -> Book:
        if price is None or price <= 0:
            raise ValueError("price must be positive")
        if available_quantity is None:
            available_quantity = stock_quantity
        if not 0 <= available_quantity <= stock_quantity:
            raise InvalidState(
                f"available_quantity must be between 0 and stock_quantity ({stock_quantity})"
            )
        if await self.books.get_by_external_id(external_id) is not None:
            raise Conflict(f"Book already exists: external_id={external_id}")

        book = await self.books.save(
            Book(
                external_id=external_id,
                title=title,
                price=price,
                stock_quantity=stock_quantity,
                available_quantity=available_quantity,
            )
        )
        await self.session.commit()
        logger.info("Added book external_id=%s stock=%d", external_id, stock_quantity)
        return book

    async def get_book(self, external_id: int) -> Book:
        book = await self.books.get_by_external_id(external_id)
        if book is None:
            raise NotFound(f"Book not found: external_id={external_id}")
        return book

    async def list_books(self) -> list[Book]:
        return await self.books.list_all()

    async def update_book(self, external_id: int, title: str, price: Decimal, stock_quantity: int) -> Book:
        """Update catalog fields; a stock change moves the available count by the same delta."""
        if price is None or price <= 0:
            raise ValueError("price must be positive")
        try:
            book = await self.books.get_by_external_id(external_id, lock=True)
            if book is None:
                raise NotFound(f"Book not found: external_id={external_id}")
            available = book.available_quantity + (stock_quantity - book.stock_quantity)
            if available < 0:
                raise InvalidState(
                    f"Cannot reduce stock below copies currently reserved: external_id={external_id}"
                )
            book.title = title
            book.price = price
            book.stock_quantity = stock_quantity
            book.available_quantity = available
            await self.books.save(book)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return book

    async def delete_book(self, external_id: int) -> None:
        book = await self.get_book(external_id)
        if await self.reservations.count_for_book(book.id):
            raise InvalidState(f"Book has reservations and cannot be deleted: external_id={external_id}")
        await self.books.delete(book)
        await self.session.commit()
        logger.info("Deleted book external_id=%s", external_id)
