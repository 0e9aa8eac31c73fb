import logging

from sqlalchemy.ext.asyncio import AsyncSession

from libreria.errors import Conflict, InvalidState, NotFound
from libreria.models import User
from libreria.stores import ReservationStore, UserStore

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession, users: UserStore, reservations: ReservationStore) -> None:
        self.session = session
        self.users = users
        self.reservations = reservations

    async def create_user(self, name: str, email: str) -> User:
        if await self.users.get_by_email(email) is not None:
            raise Conflict(f"Email already registered: {email}")
        user = await self.users.save(User(name=name, email=email))
        await self.session.commit()
        logger.info("Created user id=%s", user.id)
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound(f"User not found: id={user_id}")
        return user

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def update_user(self, user_id: int, name: str, email: str) -> User:
        user = await self.get_user(user_id)
        if email != user.email:
            other = await self.users.get_by_email(email)
            if other is not None and other.id != user.id:
                raise Conflict(f"Email already registered: {email}")
        user.name = name
        user.email = email
        await self.users.save(user)
        await self.session.commit()
        return user

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        if await self.reservations.count_for_user(user_id):
            raise InvalidState(f"User has reservations and cannot be deleted: id={user_id}")
        await self.users.delete(user)
        await self.session.commit()
        logger.info("Deleted user id=%s", user_id)
