from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Iterable, List, Mapping, Optional, TYPE_CHECKING
from sqlalchemy import event
from sqlalchemy.orm import Session

from app.Support.Str import Str
from app.Utils.Logger import get_logger

if TYPE_CHECKING:
    from app.Models.BaseModel import BaseModel

logger = get_logger(__name__)

TrackedChange = Dict[str, Any]
Ledger = Dict[str, TrackedChange]

DEFAULT_FORMAT = '{attribute}: {old} > {new}'
DEFAULT_DELIMITER = ' | '


def attribute_names(attributes: Optional[Iterable[str]]) -> Optional[List[str]]:
    """A list of attribute names; a bare string is a single name."""
    if attributes is None:
        return None
    if isinstance(attributes, str):
        return [attributes]
    return list(attributes)


def values_differ(old: Any, new: Any) -> bool:
    """Strict, type-sensitive inequality: 1 and True are different values."""
    return type(old) is not type(new) or old != new


class ChangeTracker:
    """
    Ledger of attribute changes accumulated across save cycles.

    The "old" side of an entry is captured the first time an attribute is
    seen changing and never overwritten afterwards; only "new" moves. Keys
    are kept in ascending order so iteration and formatting are stable.

    A ``trackable`` allow-list restricts what changes() exposes. None means
    every attribute is exposed; changes_for_all() always ignores it.
    """

    def __init__(self, trackable: Optional[Iterable[str]] = None) -> None:
        self.trackable: Optional[List[str]] = attribute_names(trackable)
        self._changes: Ledger = {}

    def track(self, dirty: Mapping[str, Any], original: Callable[[str], Any]) -> None:
        """
        Record one save cycle.

        ``dirty`` maps each attribute with a pending change to its new value;
        ``original`` returns the attribute's last persisted value. Both must
        come through the same cast pipeline.
        """
        for key, new in dirty.items():
            old = original(key)
            if values_differ(old, new):
                self.track_change(key, old, new)

    def track_change(self, key: str, old: Any, new: Any) -> None:
        entry = self._changes.get(key)
        if entry is None:
            self._changes[key] = {'old': old, 'new': new}
        else:
            entry['new'] = new

        self._changes = dict(sorted(self._changes.items()))

        logger.debug("Tracked attribute change", {"attribute": key, "first": entry is None})

    def clear(self) -> None:
        self._changes = {}

    # Array accessors

    def changes(self) -> Ledger:
        return self.changes_for(self.trackable or [])

    def changes_for(self, attributes: Iterable[str]) -> Ledger:
        """Entries for the given attributes; an empty list means all of them."""
        names = set(attribute_names(attributes) or [])
        if not names:
            return self.changes_for_all()
        return {key: dict(value) for key, value in self._changes.items() if key in names}

    def changes_for_all(self) -> Ledger:
        return {key: dict(value) for key, value in self._changes.items()}

    # Predicates

    def has_changes(self) -> bool:
        return bool(self.changes())

    def has_any_changes(self) -> bool:
        return bool(self._changes)

    def has_any_changes_for(self, attributes: Iterable[str]) -> bool:
        """
        True when any of the given attributes changed. Unlike changes_for(),
        an empty list matches nothing.
        """
        return any(key in self._changes for key in attribute_names(attributes) or [])

    # String accessors

    def changes_string(
        self,
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.format(self.changes(), template, delimiter, empty_old, empty_new)

    def changes_string_for(
        self,
        attributes: Iterable[str],
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.format(self.changes_for(attributes), template, delimiter, empty_old, empty_new)

    def changes_string_for_all(
        self,
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.format(self._changes, template, delimiter, empty_old, empty_new)

    @staticmethod
    def format(
        changes: Mapping[str, Mapping[str, Any]],
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        """
        Render each change through ``template`` and join with ``delimiter``.

        Placeholders: {attribute}, {label} (humanized attribute name), {old}
        and {new}. Empty strings and None are replaced by the ``empty_old``
        and ``empty_new`` sentinels.
        """
        rendered = []
        for key, value in changes.items():
            old = value.get('old')
            new = value.get('new')
            replacements = {
                '{attribute}': key,
                '{label}': Str.title(key.replace('_', ' ')),
                '{old}': empty_old if old is None or old == '' else str(old),
                '{new}': empty_new if new is None or new == '' else str(new),
            }
            rendered.append(Str.swap(template, replacements))

        return delimiter.join(rendered)


class ChangeTrackableMixin:
    """
    Keeps track of attribute changes on a model so they can be read after
    it has been saved.

    Call track_changes() right before each flush, or register
    listen_for_change_tracking() on the session to have it called for you.

    Example:
        class User(BaseModel, ChangeTrackableMixin):
            __tablename__ = 'users'
            __trackable__ = ['age']
    """

    # None tracks every attribute
    __trackable__: ClassVar[Optional[List[str]]] = None

    @property
    def change_tracker(self) -> ChangeTracker:
        tracker = self.__dict__.get('_change_tracker')
        if tracker is None:
            tracker = ChangeTracker(self.__trackable__)
            self.__dict__['_change_tracker'] = tracker
        return tracker

    def track_changes(self: BaseModel) -> None:  # type: ignore[misc]
        """Track the current pending changes of the model."""
        dirty = self.get_dirty()
        if not dirty:
            return

        new_values = {key: self.get_attribute(key) for key in dirty}
        self.change_tracker.track(new_values, self.get_original_attribute_value)

    def get_original_attribute_value(self: BaseModel, key: str) -> Any:  # type: ignore[misc]
        """The original value of an attribute, cast the same way as get_attribute()."""
        return self.cast_attribute(key, self.get_original(key))

    def get_tracked_changes_array(self) -> Ledger:
        return self.change_tracker.changes()

    def get_tracked_changes_array_for(self, attributes: Iterable[str] = ()) -> Ledger:
        return self.change_tracker.changes_for(attributes)

    def get_tracked_changes_array_for_all(self) -> Ledger:
        return self.change_tracker.changes_for_all()

    def has_tracked_changes(self) -> bool:
        return self.change_tracker.has_changes()

    def has_any_tracked_changes(self) -> bool:
        return self.change_tracker.has_any_changes()

    def has_any_tracked_changes_for(self, attributes: Iterable[str] = ()) -> bool:
        return self.change_tracker.has_any_changes_for(attributes)

    def get_tracked_changes(
        self,
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.change_tracker.changes_string(template, delimiter, empty_old, empty_new)

    def get_tracked_changes_for(
        self,
        attributes: Iterable[str] = (),
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.change_tracker.changes_string_for(attributes, template, delimiter, empty_old, empty_new)

    def get_tracked_changes_for_all(
        self,
        template: str = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
        empty_old: str = '',
        empty_new: str = '',
    ) -> str:
        return self.change_tracker.changes_string_for_all(template, delimiter, empty_old, empty_new)

    def clear_tracked_changes(self) -> None:
        self.change_tracker.clear()


def listen_for_change_tracking(session: Session) -> None:
    """
    Call track_changes() on every new or dirty ChangeTrackableMixin instance
    in ``session`` before each flush.
    """

    @event.listens_for(session, 'before_flush')
    def track_before_flush(session: Session, flush_context: Any, instances: Any) -> None:
        del flush_context, instances  # Unused parameters required by SQLAlchemy

        for target in list(session.new) + list(session.dirty):
            if isinstance(target, ChangeTrackableMixin):
                target.track_changes()
