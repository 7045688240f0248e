from .Str import Str

__all__ = [
    "Str"
]
