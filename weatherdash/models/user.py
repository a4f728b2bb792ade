"""
User database model.

This module contains the User model holding credentials and profile fields.
"""

from sqlalchemy import Column, String, Text

from weatherdash.models.base import BaseModel


class User(BaseModel):
    """
    Registered dashboard user.

    The password is stored only as a bcrypt hash.
    """

    __tablename__ = "users"

    username = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Optional profile fields
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    location = Column(String(200), nullable=True)
    bio = Column(Text, nullable=True)
    job_title = Column(String(100), nullable=True)
    company = Column(String(200), nullable=True)
    profile_picture = Column(Text, nullable=True)
