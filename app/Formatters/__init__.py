from .NameCase import NameCase

__all__ = [
    "NameCase"
]
