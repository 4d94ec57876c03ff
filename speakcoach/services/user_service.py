"""
User profile service
Authentication happens upstream; this service only owns profile records
"""
import logging
import uuid
from typing import Optional

from speakcoach.errors import ConflictError, InvalidInputError, NotFoundError
from speakcoach.models.team import User
from speakcoach.storage.base import Repository
from speakcoach.utils.delay import Clock, isoformat, utc_now

logger = logging.getLogger(__name__)

USERS = "users"


class UserService:
    """Registers users and edits their profiles"""

    def __init__(self, repository: Repository, clock: Clock = utc_now):
        self.repository = repository
        self.clock = clock

    def register(self, email: str, name: str, role: str = "student") -> User:
        """
        Create a profile for an authenticated identity

        :param email: unique e-mail address
        :param name: display name
        :param role: student / coach / admin
        """
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or "@" not in email:
            raise InvalidInputError("a valid email is required")
        if not name:
            raise InvalidInputError("name is required")
        if self.repository.find(USERS, lambda r: r["email"] == email):
            raise ConflictError(f"email already registered: {email}")

        now = isoformat(self.clock())
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.repository.save(USERS, user.id, user.to_dict())
        logger.info(f"[Users] registered: user_id={user.id}")
        return user

    def get_user(self, user_id: str) -> User:
        data = self.repository.get(USERS, user_id)
        if data is None:
            raise NotFoundError(f"user not found: {user_id}")
        return User(**data)

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        user = self.get_user(user_id)
        if name is not None:
            if not name.strip():
                raise InvalidInputError("name cannot be blank")
            user.name = name.strip()
        if avatar_url is not None:
            user.avatar_url = avatar_url or None
        user.updated_at = isoformat(self.clock())
        self.repository.save(USERS, user.id, user.to_dict())
        return user
