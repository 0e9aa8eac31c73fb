from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libreria.database import get_db
from libreria.main import app
from libreria.models import Base
from libreria.services.books import BookService
from libreria.services.reservations import ReservationService
from libreria.services.users import UserService
from libreria.stores import BookStore, ReservationStore, UserStore


@pytest_asyncio.fixture
async def engine():
    # One shared in-memory database per test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def reservation_service(session):
    return ReservationService(session, UserStore(session), BookStore(session), ReservationStore(session))


@pytest_asyncio.fixture
async def user_service(session):
    return UserService(session, UserStore(session), ReservationStore(session))


@pytest_asyncio.fixture
async def book_service(session):
    return BookService(session, BookStore(session), ReservationStore(session))


@pytest_asyncio.fixture
async def user(user_service):
    return await user_service.create_user("Juan Pérez", "juan@example.com")


@pytest_asyncio.fixture
async def book(book_service):
    return await book_service.create_book(
        external_id=258027,
        title="The Lord of the Rings",
        price=Decimal("15.99"),
        stock_quantity=10,
        available_quantity=5,
    )
