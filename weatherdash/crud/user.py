"""
User CRUD operations.

This module is the credential store: registration, credential checks and
profile reads and updates.
"""

import re
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from weatherdash.crud.base import CRUDBase
from weatherdash.errors import DuplicateError, NotFoundError, ValidationError
from weatherdash.models.user import User
from weatherdash.schemas.auth import RegisterRequest
from weatherdash.schemas.user import PROFILE_FIELDS, ProfileUpdate
from weatherdash.utils.logging_config import get_logger
from weatherdash.utils.security import get_password_hash, verify_password

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

# Compared against when the email is unknown
_DUMMY_HASH = get_password_hash("timing-equalizer")


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return email.strip().lower()


def validate_email(email: str) -> str:
    """
    Normalize an email address and check it against the basic pattern.

    Raises:
        ValidationError: If the address is malformed
    """
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(
            "Validation error",
            details=["Please provide a valid email address"],
        )
    return email


class CRUDUser(CRUDBase[User, RegisterRequest, ProfileUpdate]):
    """
    CRUD operations for User model.
    """

    async def register(self, db: AsyncSession, *, obj_in: RegisterRequest) -> User:
        """
        Create a new user with a hashed password.

        Args:
            db: Database session
            obj_in: Registration data

        Returns:
            Created user instance

        Raises:
            ValidationError: If a field is missing, the password is too short
                or the email is malformed
            DuplicateError: If the email is already registered
        """
        username = (obj_in.username or "").strip()
        if not username or not obj_in.email or not obj_in.password:
            raise ValidationError("All fields are required")

        if len(obj_in.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        email = validate_email(obj_in.email)

        if await self.get_by_email(db, email=email):
            raise DuplicateError()

        db_obj = User(
            username=username,
            email=email,
            hashed_password=get_password_hash(obj_in.password),
        )
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            await db.rollback()
            raise DuplicateError()
        await db.refresh(db_obj)

        logger.info(f"Registered user id={db_obj.id}")
        return db_obj

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            db: Database session
            email: User email address, normalized before lookup

        Returns:
            User instance or None if not found
        """
        result = await db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalars().first()

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> Optional[User]:
        """
        Check a user's credentials.

        Returns None both for an unknown email and for a wrong password.
        """
        user_obj = await self.get_by_email(db, email=email)
        if not user_obj:
            # Hash anyway so both failure paths take comparable time
            verify_password(password, _DUMMY_HASH)
            return None
        if not verify_password(password, user_obj.hashed_password):
            return None
        return user_obj

    async def get_profile(self, db: AsyncSession, *, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_obj = await self.get(db, user_id)
        if not user_obj:
            raise NotFoundError("User not found")
        return user_obj

    async def update_profile(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        obj_in: ProfileUpdate,
    ) -> User:
        """
        Apply a partial profile update.

        Only truthy values are applied: omitted, null and empty-string
        fields keep their stored value.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the new email is malformed
            DuplicateError: If the new email belongs to another user
        """
        user_obj = await self.get_profile(db, user_id=user_id)

        update_data: Dict[str, Any] = {}
        for field in PROFILE_FIELDS:
            value = getattr(obj_in, field)
            if value:
                update_data[field] = value

        if "username" in update_data:
            update_data["username"] = update_data["username"].strip() or user_obj.username

        if "email" in update_data:
            email = validate_email(update_data["email"])
            if email != user_obj.email:
                existing = await self.get_by_email(db, email=email)
                if existing and existing.id != user_obj.id:
                    raise DuplicateError()
            update_data["email"] = email

        if not update_data:
            return user_obj

        try:
            return await self.update(db, db_obj=user_obj, obj_in=update_data)
        except IntegrityError:
            await db.rollback()
            raise DuplicateError()

# Create instance of CRUDUser
user = CRUDUser(User)
