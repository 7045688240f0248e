from .BaseModel import BaseModel, Base

__all__ = [
    "BaseModel",
    "Base",
]
