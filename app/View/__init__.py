from .ViewModel import BaseViewModel, ViewModelValidationException

__all__ = [
    'BaseViewModel', 'ViewModelValidationException'
]
