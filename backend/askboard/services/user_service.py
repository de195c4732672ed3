"""
AskBoard Backend: User Service
===============================

What:  Profile lookups (by uid or username) and bio edits.
Who:   Called by the user route handlers and by QuestionService to check
       that an asker exists.
"""

import logging

from sqlalchemy import select, update

from askboard.exceptions import NotFoundError
from askboard.models.user import User
from askboard.schemas.records import UserRecord
from askboard.services.store import Store, validate_rows

logger = logging.getLogger(__name__)


class UserService:

    async def get_user(self, store: Store, uid: str) -> UserRecord:
        """
        Raises:
            NotFoundError: No user with this uid
        """
        result = await store.query(select(User.__table__).where(User.uid == uid))
        if not result.rows:
            raise NotFoundError(resource="user", resource_id=uid)
        return validate_rows(UserRecord, result.rows)[0]

    async def get_user_by_username(self, store: Store, username: str) -> UserRecord:
        """Look a user up by username; surrounding whitespace is ignored."""
        username = username.strip()
        result = await store.query(
            select(User.__table__).where(User.username == username)
        )
        if not result.rows:
            raise NotFoundError(resource="user", resource_id=username)
        return validate_rows(UserRecord, result.rows)[0]

    async def update_bio(self, store: Store, uid: str, new_bio: str) -> UserRecord:
        """
        Replace the user's bio with `new_bio` (trimmed).

        Raises:
            NotFoundError: No user with this uid
        """
        result = await store.query(
            update(User)
            .where(User.uid == uid)
            .values(bio=new_bio.strip())
            .returning(*User.__table__.c)
        )
        if not result.rows:
            raise NotFoundError(resource="user", resource_id=uid)

        logger.info("Updated bio for user %s", uid)
        return validate_rows(UserRecord, result.rows)[0]


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
