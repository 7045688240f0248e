from __future__ import annotations

from typing import Any, Dict, ClassVar, List
from datetime import datetime
from sqlalchemy import String, event, func
from sqlalchemy.orm import DeclarativeBase, Mapper, Mapped, mapped_column
from sqlalchemy.inspection import inspect
import json

from app.Utils.ULIDUtils import generate_ulid


class Base(DeclarativeBase):
    pass


class BaseModel(Base):
    __abstract__ = True

    # Laravel-style attribute casting
    __casts__: ClassVar[Dict[str, str]] = {}
    __dates__: ClassVar[List[str]] = ['created_at', 'updated_at']

    id: Mapped[str] = mapped_column(String(26), primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs: Any) -> None:
        if 'id' not in kwargs:
            kwargs['id'] = generate_ulid()
        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary of cast column values."""
        return {c.key: self.get_attribute(c.key) for c in inspect(type(self)).column_attrs}

    def get_attribute(self, key: str) -> Any:
        """Get attribute value with casting."""
        return self.cast_attribute(key, getattr(self, key, None))

    def get_original(self, key: str) -> Any:
        """
        The value last loaded from or flushed to the database, before any
        pending in-memory change. Transient instances have no original.
        """
        state = inspect(self)
        if state.transient or state.pending:
            return None

        if key in state.unloaded:
            # Expired or deferred: load it so history has a committed side
            getattr(self, key)

        history = state.attrs[key].history
        if history.deleted:
            return history.deleted[0]
        if history.unchanged:
            return history.unchanged[0]
        return None

    def get_dirty(self) -> Dict[str, Any]:
        """Column attributes with pending changes, mapped to their raw new values."""
        state = inspect(self)
        dirty: Dict[str, Any] = {}
        for attr in inspect(type(self)).column_attrs:
            history = state.attrs[attr.key].history
            if history.added:
                dirty[attr.key] = history.added[0]
        return dirty

    def is_dirty(self) -> bool:
        return bool(self.get_dirty())

    def cast_attribute(self, key: str, value: Any) -> Any:
        """Cast attribute to the type declared in __casts__."""
        if value is None:
            return None

        cast_type = self.__casts__.get(key)
        if cast_type is None:
            if key in self.__dates__ and isinstance(value, str):
                return datetime.fromisoformat(value)
            return value

        cast_map = {
            'json': lambda v: json.loads(v) if isinstance(v, str) else v,
            'array': lambda v: json.loads(v) if isinstance(v, str) else v,
            'boolean': lambda v: bool(v),
            'bool': lambda v: bool(v),
            'int': lambda v: int(v),
            'integer': lambda v: int(v),
            'float': lambda v: float(v),
            'string': lambda v: str(v),
            'datetime': lambda v: datetime.fromisoformat(v) if isinstance(v, str) else v,
        }

        if cast_type in cast_map:
            return cast_map[cast_type](value)

        return value


def _load_replaced_value(target: Any, value: Any, oldvalue: Any, initiator: Any) -> None:
    del target, value, oldvalue, initiator  # Unused parameters required by SQLAlchemy


@event.listens_for(BaseModel, 'mapper_configured', propagate=True)
def keep_replaced_values(mapper: Mapper[Any], class_: type) -> None:
    """
    Register every column with active_history, so assigning to an expired
    attribute (e.g. after a commit with expire_on_commit=True) first loads
    the persisted value and get_original() can still see it.
    """
    for prop in mapper.column_attrs:
        event.listen(getattr(class_, prop.key), 'set', _load_replaced_value, active_history=True)
