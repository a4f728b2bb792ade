# CRUD operations package

from weatherdash.crud.base import CRUDBase
from weatherdash.crud.user import CRUDUser, user

__all__ = [
    "CRUDBase",
    "CRUDUser", "user",
]
