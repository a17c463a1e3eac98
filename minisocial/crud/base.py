"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from minisocial.database import Base


ModelType = TypeVar("ModelType", bound=Base)

# SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
	"""True when the error comes from a unique constraint (Postgres or SQLite)."""
	orig = exc.orig
	if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
		return True
	return "UNIQUE constraint failed" in str(orig)


class CRUDBase(Generic[ModelType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_by_field(self, db: Session, field_name: str, value: Any) -> Optional[ModelType]:
		"""Get first record where given field equals value."""
		if not hasattr(self.model, field_name):
			raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		stmt = select(self.model).where(getattr(self.model, field_name) == value).limit(1)
		return db.scalars(stmt).first()

	# ----- Write -----
	def save(self, db: Session, db_obj: ModelType) -> ModelType:
		"""Add, commit and refresh a model instance; roll back on failure."""
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj
