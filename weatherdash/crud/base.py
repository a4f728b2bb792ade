"""
Generic CRUD helpers shared by the model-specific CRUD classes.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from weatherdash.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Lookup by primary key and column-safe updates for one model.

    Subclasses add the create and query operations their model needs.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.columns = frozenset(c.name for c in model.__table__.columns)

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """Row with this primary key, or None."""
        rows = await db.execute(select(self.model).where(self.model.id == id))
        return rows.scalars().first()

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """
        Write changed values to ``db_obj`` and commit.

        Keys that are not columns of the model are ignored. A schema
        contributes only the fields the caller actually set.
        """
        changes = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)

        for name in self.columns.intersection(changes):
            setattr(db_obj, name, changes[name])

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj
