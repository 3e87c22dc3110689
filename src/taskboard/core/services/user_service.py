"""Cache-aware user service: registration, login and lookups."""

import logging

from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.entities.models import User
from taskboard.core.entities.mutation import Mutation
from taskboard.core.exceptions import NotFoundError, UnauthorizedError, ValidationFailure
from taskboard.core.interfaces.invalidator import IInvalidator
from taskboard.core.interfaces.repositories import IUserRepository
from taskboard.core.services.auth import PasswordHasher, TokenManager
from taskboard.core.services.cache_service import CacheService
from taskboard.core.services.read_through import CachedQueries

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        users: IUserRepository,
        cache: CacheService,
        invalidator: IInvalidator,
        hasher: PasswordHasher,
        tokens: TokenManager,
    ) -> None:
        self._users = users
        self._queries: CachedQueries[User] = CachedQueries(cache, User.to_dict, User.from_dict)
        self._invalidator = invalidator
        self._hasher = hasher
        self._tokens = tokens

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a user with a hashed password.

        Raises:
            ValidationFailure: If the username or email is already taken.
        """
        if await self._users.find_by_username(username) is not None:
            raise ValidationFailure("Username already exists")
        if await self._users.find_by_email(email) is not None:
            raise ValidationFailure("Email already exists")

        password_hash = self._hasher.hash(password)
        await self._invalidator.invalidate(Mutation.CREATE_USER)
        user = await self._users.create(username, email, password_hash)
        logger.info("registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and issue a bearer token.

        Raises:
            UnauthorizedError: On an unknown email or a wrong password.
        """
        credentials = await self._users.get_credentials(email)
        if credentials is None:
            raise UnauthorizedError("Invalid credentials")

        user, password_hash = credentials
        if not self._hasher.verify(password, password_hash):
            raise UnauthorizedError("Invalid credentials")

        return user, self._tokens.issue(user.id)

    async def get_user(self, user_id: str) -> User:
        user = await self._queries.one(
            CacheKey.of(KeyFamily.USER, user_id),
            lambda: self._users.get(user_id),
        )
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> list[User]:
        return await self._queries.many(CacheKey.of(KeyFamily.ALL_USERS), self._users.list_all)
