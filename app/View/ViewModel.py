from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterator, Optional

from app.Validation.Validator import RuleSet, Validator


class ViewModelValidationException(Exception):
    """Raised when the data given to a view model breaks its rules."""

    def __init__(self, errors: Dict[str, list[str]]) -> None:
        self.errors = errors
        details = "; ".join(f"{field}: {', '.join(messages)}" for field, messages in errors.items())
        super().__init__(f"Invalid data: {details}")


class BaseViewModel:
    """
    Read-only bag of view data exposed as attributes.

    Unknown attributes read as None. Subclasses may declare ``rules`` in
    validator syntax; the data is checked once, at construction.

    Example:
        class TimelineViewModel(BaseViewModel):
            rules = {'year': 'integer', 'location': 'string'}

        vm = TimelineViewModel({'year': 1985, 'location': 'Hill Valley'})
        vm.location  # 'Hill Valley'
    """

    rules: ClassVar[Dict[str, RuleSet]] = {}

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        object.__setattr__(self, '_data', dict(data or {}))
        self.validate()

    def validate(self) -> None:
        if not self.rules:
            return

        validator = Validator(self._data, self.rules)
        if validator.fails():
            raise ViewModelValidationException(validator.get_message_bag())

    def __getattr__(self, name: str) -> Any:
        if name.startswith('__') or name == '_data':
            raise AttributeError(name)
        return self._data.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def has(self, name: str) -> bool:
        """Whether ``name`` is present with a value other than None."""
        return self._data.get(name) is not None

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)
