from __future__ import annotations

import uuid
from typing import Any, ClassVar, List, TYPE_CHECKING
from sqlalchemy import event
from sqlalchemy.orm import Session

from app.Utils.Logger import get_logger

if TYPE_CHECKING:
    from app.Models.BaseModel import BaseModel

logger = get_logger(__name__)


class UuidConfigurationError(Exception):
    """Raised when a model uses UuidableMixin without declaring UUID columns."""


class UuidableMixin:
    """
    Fills UUID columns before a model is first inserted and keeps them from
    being changed afterwards.

    Call assign_uuids_if_missing() right before the first insert and
    guard_uuids() right before every later flush, or register
    listen_for_uuids() on the session.

    Example:
        class Document(BaseModel, UuidableMixin):
            __tablename__ = 'documents'
            __uuids__ = ['uuid']
    """

    __uuids__: ClassVar[List[str]] = []

    @staticmethod
    def new_uuid() -> str:
        return str(uuid.uuid4())

    def verify_uuids_property(self) -> None:
        if not self.__uuids__:
            raise UuidConfigurationError(
                f"When using UuidableMixin, the __uuids__ list must be defined in: {type(self).__name__}"
            )

    def assign_uuids_if_missing(self) -> None:
        self.verify_uuids_property()

        for attribute in self.__uuids__:
            if not getattr(self, attribute, None):
                setattr(self, attribute, self.new_uuid())

    def guard_uuids(self: BaseModel) -> None:  # type: ignore[misc]
        """Restore any UUID changed since it was persisted; regenerate empty ones."""
        self.verify_uuids_property()

        for attribute in self.__uuids__:
            original = self.get_original(attribute)
            current = getattr(self, attribute, None)

            if original and original != current:
                logger.warning("Reverted change to UUID attribute", {
                    "model": type(self).__name__,
                    "attribute": attribute,
                })
                setattr(self, attribute, original)
            elif not current:
                setattr(self, attribute, self.new_uuid())


def listen_for_uuids(session: Session) -> None:
    """
    Assign UUIDs to new UuidableMixin instances and guard them on dirty
    ones before each flush.
    """

    @event.listens_for(session, 'before_flush')
    def uuids_before_flush(session: Session, flush_context: Any, instances: Any) -> None:
        del flush_context, instances  # Unused parameters required by SQLAlchemy

        for target in session.new:
            if isinstance(target, UuidableMixin):
                target.assign_uuids_if_missing()

        for target in session.dirty:
            if isinstance(target, UuidableMixin):
                target.guard_uuids()
