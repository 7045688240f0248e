from __future__ import annotations

from enum import StrEnum
from typing import Any, List, Optional, Type, TypeVar

E = TypeVar('E', bound='StringEnum')


class StringEnum(StrEnum):
    """
    String-backed enum similar to Laravel's string backed enums.
    """

    @classmethod
    def cases(cls: Type[E]) -> List[E]:
        """Get all enum cases."""
        return list(cls.__members__.values())

    @classmethod
    def from_value(cls: Type[E], value: Any) -> E:
        """Create enum instance from value, accepting members and their string values."""
        if isinstance(value, str):
            for member in cls.__members__.values():
                if member.value == value:
                    return member
        raise ValueError(f"Invalid value '{value}' for enum {cls.__name__}")

    @classmethod
    def try_from(cls: Type[E], value: Any) -> Optional[E]:
        """Try to create enum instance from value, return None if invalid."""
        try:
            return cls.from_value(value)
        except ValueError:
            return None

    @classmethod
    def values(cls) -> List[str]:
        """Get all enum values."""
        return [member.value for member in cls.__members__.values()]

    def is_one_of(self, *values: Any) -> bool:
        """Check if this enum is one of the given values."""
        return any(self.value == value for value in values)
