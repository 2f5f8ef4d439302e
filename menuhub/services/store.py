from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menuhub.core.errors import ConflictError, NotFoundError

ModelT = TypeVar("ModelT")


def _now() -> datetime:
    return datetime.utcnow()


def _not_found(model: Type[Any], detail: Optional[str]) -> NotFoundError:
    return NotFoundError(detail or f"{model.__name__} not found")


def _live(db: Session, model: Type[ModelT]):
    return db.query(model).filter(model.deleted_at.is_(None))


def find(db: Session, model: Type[ModelT], record_id: int, *, detail: Optional[str] = None) -> ModelT:
    record = _live(db, model).filter(model.id == record_id).first()
    if record is None:
        raise _not_found(model, detail)
    return record


def find_by(
    db: Session,
    model: Type[ModelT],
    field: str,
    value: Any,
    *,
    detail: Optional[str] = None,
) -> ModelT:
    record = _live(db, model).filter(getattr(model, field) == value).first()
    if record is None:
        raise _not_found(model, detail)
    return record


def list_all(db: Session, model: Type[ModelT]) -> List[ModelT]:
    return _live(db, model).order_by(model.id.asc()).all()


def _commit(db: Session, conflict_detail: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(conflict_detail) from exc


def create(db: Session, record: ModelT, *, conflict_detail: str = "Resource already exists") -> ModelT:
    db.add(record)
    _commit(db, conflict_detail)
    db.refresh(record)
    return record


def save(db: Session, record: ModelT, *, conflict_detail: str = "Resource already exists") -> ModelT:
    db.add(record)
    _commit(db, conflict_detail)
    db.refresh(record)
    return record


def delete(db: Session, record: Any) -> None:
    record.deleted_at = _now()
    db.add(record)
    db.commit()
